"""Error taxonomy and routing for the task tracker."""
from .error_routing import ERROR_REGISTRY, register_error, route_error, unregister_error
from .exceptions import (
    ConfigError,
    DocumentNotFoundError,
    DocumentReadError,
    FolderNotFoundError,
    StaleSurfaceError,
    TaskTrackerError,
    TrackerLookupError,
)

__all__ = [
    "ERROR_REGISTRY",
    "register_error",
    "route_error",
    "unregister_error",
    "TaskTrackerError",
    "ConfigError",
    "TrackerLookupError",
    "FolderNotFoundError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "StaleSurfaceError",
]
