"""Environment adapter.

Consistent helpers to parse ``TASKTRACKER_*`` environment variables with sane
defaults and one shared truthy set.
"""
from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on", "y"}


def get_str(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is None:
        return default
    return v


def get_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in _TRUTHY


def get_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return float(v.strip())
    except ValueError:
        return default


__all__ = ["get_str", "get_bool", "get_float"]
