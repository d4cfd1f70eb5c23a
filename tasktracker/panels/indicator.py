"""Rendered progress indicators, addressable by derived id.

An indicator is created once per (indicator kind, document) and afterwards
only looked up by its derived id. The host may drop and recreate the view at
any time, so refreshes never keep element references between cycles; a
missing id is reported as ``UpdateStatus.NOT_FOUND`` and left for the next
initial render to recreate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from tasktracker.config.settings import TrackerSettings, size_width
from tasktracker.surface import Element, Surface

from .helpers import ProgressResult
from .models import IndicatorPanel

logger = logging.getLogger(__name__)

CONTAINER_BASE_ID = 'task-tracker-container'
PROGRESSION_BAR_BASE_ID = 'task-tracker-progression-bar'
PROGRESSION_TEXT_BASE_ID = 'task-tracker-progression-text'

CONTAINER_CLASS = 'task-tracker-container'
TRACK_CLASS = 'task-tracker-progress-bar'
TEXT_CLASS = 'task-progression-text'
LABEL_CLASS = 'task-tracker-label'


class UpdateStatus(str, Enum):
    UPDATED = 'updated'
    NOT_FOUND = 'not_found'


def derive_id(base_id: str, document_name: str) -> str:
    """Join ``base_id`` and the document base name with every space removed."""
    return f"{base_id}-{document_name.replace(' ', '')}"


@dataclass
class IndicatorHandle:
    id: str
    document: str
    percentage: int
    color: str
    width: str
    label: str | None = None

    @property
    def bar_id(self) -> str:
        return derive_id(PROGRESSION_BAR_BASE_ID, self.document)

    @property
    def text_id(self) -> str:
        return derive_id(PROGRESSION_TEXT_BASE_ID, self.document)

    def to_panel(self) -> IndicatorPanel:
        return IndicatorPanel(
            id=self.id,
            document=self.document,
            percentage=self.percentage,
            color=self.color,
            label=self.label,
            width=self.width,
        )


def _paint(bar: Element | None, text: Element | None, progress: ProgressResult) -> None:
    if bar is not None:
        bar.style['width'] = f"{progress.percentage}%"
        bar.style['background-color'] = progress.color
    if text is not None:
        text.set_text(f"{progress.percentage}%")
        text.style['color'] = progress.color


class IndicatorState:
    """Registry of rendered indicators keyed by derived container id."""

    def __init__(self, surface: Surface) -> None:
        self.surface = surface
        self._handles: dict[str, IndicatorHandle] = {}

    def render(self, container: Element, settings: TrackerSettings, progress: ProgressResult,
               document_name: str, *, label: str | None = None) -> IndicatorHandle:
        width = size_width(settings.size_key)
        box = container.create_child('div', id=derive_id(CONTAINER_BASE_ID, document_name), cls=CONTAINER_CLASS)
        box.style['width'] = width
        if label:
            box.create_child('p', cls=LABEL_CLASS, text=label)
        track = box.create_child('div', cls=TRACK_CLASS)
        bar = track.create_child('div', id=derive_id(PROGRESSION_BAR_BASE_ID, document_name))
        bar.style['height'] = '100%'
        text = box.create_child('p', id=derive_id(PROGRESSION_TEXT_BASE_ID, document_name), cls=TEXT_CLASS)
        _paint(bar, text, progress)

        handle = IndicatorHandle(
            id=box.id or '',
            document=document_name,
            percentage=progress.percentage,
            color=progress.color,
            width=width,
            label=label,
        )
        self._handles[handle.id] = handle
        logger.debug("[build] rendered %s at %d%%", handle.id, progress.percentage)
        return handle

    def update(self, document_name: str, progress: ProgressResult) -> UpdateStatus:
        """Overwrite a rendered indicator in place; NOT_FOUND when it is gone."""
        handle_id = derive_id(CONTAINER_BASE_ID, document_name)
        bar = self.surface.get_element_by_id(derive_id(PROGRESSION_BAR_BASE_ID, document_name))
        text = self.surface.get_element_by_id(derive_id(PROGRESSION_TEXT_BASE_ID, document_name))
        if bar is None and text is None:
            self._handles.pop(handle_id, None)
            return UpdateStatus.NOT_FOUND
        _paint(bar, text, progress)
        handle = self._handles.get(handle_id)
        if handle is not None:
            handle.percentage = progress.percentage
            handle.color = progress.color
        return UpdateStatus.UPDATED

    def get(self, document_name: str) -> IndicatorHandle | None:
        return self._handles.get(derive_id(CONTAINER_BASE_ID, document_name))

    def handles(self) -> list[IndicatorHandle]:
        return list(self._handles.values())


__all__ = [
    "CONTAINER_BASE_ID",
    "PROGRESSION_BAR_BASE_ID",
    "PROGRESSION_TEXT_BASE_ID",
    "UpdateStatus",
    "derive_id",
    "IndicatorHandle",
    "IndicatorState",
]
