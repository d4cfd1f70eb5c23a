"""Block configuration: YAML loading, validation and settings resolution."""
from .loader import build_config, load_block_config
from .settings import (
    DEFAULT_COLORS,
    DEFAULT_SETTINGS,
    DEFAULT_SIZE_KEY,
    FULL_COMPLETION_COLOR,
    SIZES,
    TrackerConfig,
    TrackerSettings,
    resolve_settings,
    size_width,
)

__all__ = [
    "build_config",
    "load_block_config",
    "DEFAULT_COLORS",
    "DEFAULT_SETTINGS",
    "DEFAULT_SIZE_KEY",
    "FULL_COMPLETION_COLOR",
    "SIZES",
    "TrackerConfig",
    "TrackerSettings",
    "resolve_settings",
    "size_width",
]
