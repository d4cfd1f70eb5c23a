"""Checkbox task extraction.

Lines are classified by substring containment, not by an anchored pattern:
``- [ ]`` anywhere in a line counts it as incomplete, ``- [x]``/``- [X]``
anywhere counts it as completed. A malformed line holding both markers is
counted in both buckets.
"""
from __future__ import annotations

from .models import TaskCounts, TaskLine

TASK_TODO = '- [ ]'
TASK_DONE_LOW = '- [x]'
TASK_DONE_UPP = '- [X]'

_ALL_MARKERS = (TASK_TODO, TASK_DONE_LOW, TASK_DONE_UPP)


def is_open_task(line: str) -> bool:
    return TASK_TODO in line


def is_completed_task(line: str) -> bool:
    return TASK_DONE_LOW in line or TASK_DONE_UPP in line


def strip_markers(line: str) -> str:
    for marker in _ALL_MARKERS:
        line = line.replace(marker, '')
    return line.strip()


def parse_tasks(text: str, *, include_lines: bool = False) -> TaskCounts:
    """Count open and completed checkbox lines in ``text``.

    Per-line records are collected only when ``include_lines`` is set; the
    counts are always produced. Total over any string input.
    """
    todo = 0
    done = 0
    task_lines: list[TaskLine] = []
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()  # segment after a final newline
    for number, line in enumerate(lines, start=1):
        open_task = is_open_task(line)
        completed = is_completed_task(line)
        if open_task:
            todo += 1
        if completed:
            done += 1
        if include_lines and (open_task or completed):
            task_lines.append(TaskLine(line=number, content=strip_markers(line), completed=completed))
    return TaskCounts(incomplete=todo, completed=done, lines=tuple(task_lines))


__all__ = [
    "TASK_TODO",
    "TASK_DONE_LOW",
    "TASK_DONE_UPP",
    "is_open_task",
    "is_completed_task",
    "strip_markers",
    "parse_tasks",
]
