"""Tracker configuration models and the settings resolver.

``TrackerConfig`` is what a rendered block asked for. Its ``settings`` may be
partial; :func:`resolve_settings` fills the gaps and returns the concrete look
(width bucket + color ramp) of the indicator.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tasktracker.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

RED = '#BF616A'
ORANGE = '#D08770'
YELLOW = '#EBCB8B'
GREEN = '#A3BE8C'

# Ordered: the first bucket is the default.
SIZES: dict[str, str] = {
    'SMALL': '250px',
    'MEDIUM': '350px',
    'LARGE': '400px',
}

DEFAULT_SIZE_KEY = next(iter(SIZES))
DEFAULT_COLORS: tuple[str, ...] = (RED, ORANGE, YELLOW, GREEN)
# Band 0 color when no colors are configured at all.
FULL_COMPLETION_COLOR = GREEN

ERROR_MESSAGES: dict[str, str] = {
    'invalid_path': 'Invalid path',
    'file_name_missing': 'File name is not provided',
}


@dataclass(frozen=True)
class TrackerSettings:
    """Width bucket and low-to-high color ramp. Fields are None until resolved."""

    size_key: str | None = None
    colors: tuple[str, ...] | None = None


DEFAULT_SETTINGS = TrackerSettings(size_key=DEFAULT_SIZE_KEY, colors=DEFAULT_COLORS)


@dataclass(frozen=True)
class TrackerConfig:
    path: str
    file_name: str
    label: str | None = None
    settings: TrackerSettings | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ConfigError(ERROR_MESSAGES['invalid_path'])
        if not self.file_name:
            raise ConfigError(ERROR_MESSAGES['file_name_missing'])


def resolve_settings(config: TrackerConfig) -> TrackerSettings:
    """Return concrete settings for ``config``.

    Each field is taken from ``config.settings`` only when present and truthy,
    otherwise the documented default is used.
    """
    settings = config.settings
    size_key = settings.size_key if settings and settings.size_key else DEFAULT_SETTINGS.size_key
    colors = settings.colors if settings and settings.colors else DEFAULT_SETTINGS.colors
    return TrackerSettings(size_key=size_key, colors=colors)


def size_width(size_key: str | None) -> str:
    """Map a size bucket name to its CSS width (unknown names use the default)."""
    width = SIZES.get(str(size_key or '').upper())
    if width is None:
        logger.warning("Unknown size key %r; using %s", size_key, DEFAULT_SIZE_KEY)
        return SIZES[DEFAULT_SIZE_KEY]
    return width


__all__ = [
    "RED",
    "ORANGE",
    "YELLOW",
    "GREEN",
    "SIZES",
    "DEFAULT_SIZE_KEY",
    "DEFAULT_COLORS",
    "DEFAULT_SETTINGS",
    "FULL_COMPLETION_COLOR",
    "ERROR_MESSAGES",
    "TrackerSettings",
    "TrackerConfig",
    "resolve_settings",
    "size_width",
]
