"""Task parsing result types."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TaskLine:
    """One checkbox line of a document."""

    line: int  # 1-based
    content: str
    completed: bool


@dataclass(frozen=True)
class TaskCounts:
    incomplete: int = 0
    completed: int = 0
    lines: tuple[TaskLine, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return self.incomplete + self.completed


__all__ = ["TaskLine", "TaskCounts"]
