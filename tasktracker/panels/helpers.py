"""Progress computations shared by the initial render and refresh paths.

Centralizes the percentage formula and the color band policy so both paths
always agree on what a given document looks like.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tasktracker.config.settings import FULL_COMPLETION_COLOR
from tasktracker.tasks.models import TaskCounts

# Inclusive upper bounds of bands 0..2; anything above the last bound is band 3.
BAND_UPPER_BOUNDS: tuple[int, ...] = (25, 50, 99)


@dataclass(frozen=True)
class ProgressResult:
    percentage: int
    color: str


def compute_percentage(counts: TaskCounts) -> int:
    """Return floor(completed / total * 100).

    A document without any task is 0% complete. Integer arithmetic keeps the
    floor exact (1/3 -> 33, 29/100 -> 29).
    """
    total = counts.completed + counts.incomplete
    if total == 0:
        return 0
    return counts.completed * 100 // total


def band_colors(colors: Sequence[str] | None) -> tuple[str, str, str, str]:
    """Expand up to four configured colors into one color per band.

    Missing or blank bands reuse the resolved color of the band below; with
    no color for band 0 it is the full-completion color.
    """
    slots = list(colors or ())[:4]
    slots += [''] * (4 - len(slots))
    resolved: list[str] = []
    previous = FULL_COMPLETION_COLOR
    for slot in slots:
        previous = slot or previous
        resolved.append(previous)
    return resolved[0], resolved[1], resolved[2], resolved[3]


def color_for(percentage: int, colors: Sequence[str] | None) -> str:
    bands = band_colors(colors)
    for idx, upper in enumerate(BAND_UPPER_BOUNDS):
        if percentage <= upper:
            return bands[idx]
    return bands[3]


def compute_progress(counts: TaskCounts, colors: Sequence[str] | None) -> ProgressResult:
    percentage = compute_percentage(counts)
    return ProgressResult(percentage=percentage, color=color_for(percentage, colors))


__all__ = [
    "BAND_UPPER_BOUNDS",
    "ProgressResult",
    "compute_percentage",
    "band_colors",
    "color_for",
    "compute_progress",
]
