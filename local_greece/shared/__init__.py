from local_greece.shared.config import Settings, get_config, reload_config
from local_greece.shared.errors import (
    BackendError,
    ConfigurationError,
    LocalGreeceError,
    LocationUnavailableError,
    NotFoundError,
    PermissionDeniedError,
)
from local_greece.shared.generation import GenerationGuard

__all__ = [
    "get_config",
    "reload_config",
    "Settings",
    "LocalGreeceError",
    "ConfigurationError",
    "BackendError",
    "NotFoundError",
    "PermissionDeniedError",
    "LocationUnavailableError",
    "GenerationGuard",
]
