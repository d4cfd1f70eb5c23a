"""Vault-relative path helpers.

Normalized paths keep the spelling they were given so they can be handed to
the filesystem as-is. Unicode comparison goes through :func:`path_key`,
which folds NFC/NFD spellings of the same name together.
"""
from __future__ import annotations

import re
import unicodedata

ROOT_PATH = '/'
PARENT_SEGMENT = '..'

_MULTI_SLASH = re.compile(r'/+')


def normalize_path(path: str) -> str:
    """Normalize a vault-relative path.

    Backslashes become ``/``, repeated slashes collapse and leading and
    trailing slashes are dropped. An empty result is the vault root ``/``.
    """
    path = (path or '').replace('\\', '/')
    path = _MULTI_SLASH.sub('/', path).strip('/')
    return path or ROOT_PATH


def path_key(path: str) -> str:
    """Comparison key for a path or name: normalized, then NFC."""
    return unicodedata.normalize('NFC', normalize_path(path))


def escapes_root(path: str) -> bool:
    """True when a normalized path climbs out of the vault via ``..``."""
    return PARENT_SEGMENT in normalize_path(path).split('/')


def join_path(folder: str, name: str) -> str:
    folder = normalize_path(folder)
    if folder == ROOT_PATH:
        return normalize_path(name)
    return normalize_path(f"{folder}/{name}")


__all__ = ["ROOT_PATH", "normalize_path", "path_key", "escapes_root", "join_path"]
