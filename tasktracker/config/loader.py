"""Block config loading & validation entrypoint.

Responsibilities:
  * Parse the raw ``tasktracker`` block text (YAML key-value mapping).
  * Validate required fields (``path``, ``fileName``) before any document work.
  * Warn when ``path`` or ``fileName`` arrive as YAML numbers (quote them to
    keep leading zeros and trailing decimals).
  * Normalize the optional ``settings`` mapping into :class:`TrackerSettings`
    (``size`` accepted as a legacy alias of ``sizeKey``).

Public API:
  load_block_config(source: str) -> TrackerConfig
  build_config(raw: Mapping) -> TrackerConfig
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import yaml

from tasktracker.errors.exceptions import ConfigError

from .settings import TrackerConfig, TrackerSettings

logger = logging.getLogger(__name__)

INVALID_YAML_MESSAGE = 'Invalid configuration'


def _coerce_colors(value: Any) -> tuple[str, ...] | None:
    """Colors keep their band positions; a blank entry stays as ''."""
    if not value:
        return None
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        colors = tuple('' if c is None else str(c) for c in value)
        return colors if any(colors) else None
    logger.warning("Ignoring colors of unsupported type %s", type(value).__name__)
    return None


def _as_text(key: str, value: Any) -> str:
    if not value:
        return ''
    if not isinstance(value, str):
        # YAML already turned it into a number: 1.10 -> 1.1, 007 -> 7
        logger.warning("%s %r is not a string; quote it to keep its spelling", key, value)
    return str(value)


def _build_settings(raw: Any) -> TrackerSettings | None:
    if not isinstance(raw, Mapping):
        if raw:
            logger.warning("Ignoring settings of unsupported type %s", type(raw).__name__)
        return None
    size_key = raw.get('sizeKey') or raw.get('size')
    return TrackerSettings(
        size_key=str(size_key) if size_key else None,
        colors=_coerce_colors(raw.get('colors')),
    )


def build_config(raw: Mapping[str, Any]) -> TrackerConfig:
    """Validate a structured config mapping and return an immutable TrackerConfig."""
    path = raw.get('path')
    file_name = raw.get('fileName')
    label = raw.get('label')
    # TrackerConfig rejects an empty path or fileName
    return TrackerConfig(
        path=_as_text('path', path),
        file_name=_as_text('fileName', file_name),
        label=str(label) if label else None,
        settings=_build_settings(raw.get('settings')),
    )


def load_block_config(source: str) -> TrackerConfig:
    """Parse raw block text and validate it.

    Raises :class:`ConfigError` for malformed YAML or missing required fields.
    """
    try:
        data = yaml.safe_load(source or '')
    except yaml.YAMLError as exc:
        raise ConfigError(f"{INVALID_YAML_MESSAGE}: {exc}") from exc
    if not isinstance(data, Mapping):
        data = {}
    return build_config(data)


__all__ = ["INVALID_YAML_MESSAGE", "build_config", "load_block_config"]
