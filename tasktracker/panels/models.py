"""Indicator payload models.

These types describe the plain-data view of a rendered indicator handed to
host consumers that do not walk the element tree.
"""
from __future__ import annotations

from typing import TypedDict


class IndicatorPanel(TypedDict):
    id: str
    document: str
    percentage: int
    color: str
    label: str | None
    width: str


__all__ = ["IndicatorPanel"]
