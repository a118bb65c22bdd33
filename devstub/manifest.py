"""Mod manifest: Pydantic model and parser.

Field values are kept as given; whether a reference is loadable is decided by
the resource classifier, so invalid entries can be skipped instead of rejected.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Manifest(BaseModel):
    """manifest.json served next to the mod's resources."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    setup: Any = None  # module reference exporting setup(ctx)
    load: Any = None  # one reference or an ordered list of references

    def load_entries(self) -> list[Any]:
        """Entries of the load phase in order; empty when there is nothing to load."""
        if isinstance(self.load, list):
            return list(self.load)
        if self.load:
            return [self.load]
        return []


def parse_manifest(data: Any) -> Manifest:
    """Validate parsed manifest JSON. Raises ValueError when it is not an object."""
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a JSON object, got {type(data).__name__}")
    return Manifest.model_validate(data)
