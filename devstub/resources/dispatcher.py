"""Resource dispatcher: route a reference to exactly one loader by kind."""

import logging
from typing import Any

from devstub.resources.errors import InvalidResourceError
from devstub.resources.kinds import ResourceKind, kind_of
from devstub.resources.loaders import ResourceLoader

logger = logging.getLogger(__name__)


class ResourceDispatcher:
    """Checks SCRIPT -> MODULE -> STYLESHEET -> TEMPLATE and runs the first match.

    A ``.js`` reference is always loaded as a script here, never as a module;
    only ``.mjs`` reaches the module loader through this path. Callers that need
    a ``.js`` module (e.g. the manifest setup entry) use ResourceLoader.load_module.
    Loader failures propagate.
    """

    def __init__(self, loader: ResourceLoader) -> None:
        self._loader = loader

    async def load_resource(self, ref: Any) -> Any:
        kinds = kind_of(ref)
        if ResourceKind.SCRIPT in kinds:
            return await self._loader.load_script(ref)
        if ResourceKind.MODULE in kinds:
            return await self._loader.load_module(ref)
        if ResourceKind.STYLESHEET in kinds:
            return self._loader.load_stylesheet(ref)
        if ResourceKind.TEMPLATE in kinds:
            return await self._loader.load_templates(ref)
        raise InvalidResourceError(ref)
