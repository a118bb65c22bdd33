"""Resource loading errors. Module evaluation errors are never wrapped in these."""

from typing import Any

from devstub.resources.kinds import LOG_CONTEXT, MOD_TAG, ResourceKind, kind_mismatch_message


class ResourceError(Exception):
    """Base class for failures raised by loaders and the dispatcher."""

    def __init__(self, message: str, resource: Any = None) -> None:
        super().__init__(message)
        self.resource = resource


class ResourceValidationError(ResourceError):
    """Resource passed to a loader that does not handle its kind."""

    def __init__(self, resource: Any, kind: ResourceKind) -> None:
        super().__init__(kind_mismatch_message(resource, kind), resource)
        self.kind = kind


class InvalidResourceError(ResourceError):
    """Resource matches no dispatchable kind."""

    def __init__(self, resource: Any) -> None:
        super().__init__(
            f'Mod "{MOD_TAG}" resource "{resource}" is invalid and cannot be loaded.',
            resource,
        )


class ResourceTransportError(ResourceError):
    """Network, HTTP status, script error event or unparsable payload."""


def transport_error(resource: Any) -> ResourceTransportError:
    return ResourceTransportError(f'{LOG_CONTEXT} Error loading resource "{resource}".', resource)
