"""``tasktracker`` block processor.

The host calls :meth:`TaskTrackerProcessor.process_block` with the raw text
of every ``tasktracker`` block and the container element it will show. The
processor validates the config, builds a :class:`TrackerController` and
keeps it (and its change subscription) alive until :meth:`unload`.
"""
from __future__ import annotations

import logging
from typing import Any

from tasktracker.config.loader import load_block_config
from tasktracker.controller import BuildResult, TrackerController
from tasktracker.errors.error_routing import route_error
from tasktracker.errors.exceptions import ConfigError
from tasktracker.panels.indicator import IndicatorState
from tasktracker.surface import Element, Surface
from tasktracker.utils.color_logging import enable_color_logging
from tasktracker.vault.store import DocumentStore

logger = logging.getLogger(__name__)

CODE_BLOCK_LANGUAGE = 'tasktracker'
ERROR_PREFIX = 'TaskTrackerError'
ERROR_CLASS = 'task-tracker-error'


def render_error(container: Element, message: str) -> Element:
    """Write the inline error placeholder shown instead of an indicator."""
    return container.create_child('div', cls=ERROR_CLASS, text=f"{ERROR_PREFIX}: {message}")


class TaskTrackerProcessor:
    def __init__(self, store: DocumentStore, surface: Surface, *, metrics: Any = None,
                 configure_logging: bool = False) -> None:
        if configure_logging:
            enable_color_logging()
        self.store = store
        self.surface = surface
        self.metrics = metrics
        self.indicators = IndicatorState(surface)
        self._controllers: list[TrackerController] = []

    @property
    def controllers(self) -> list[TrackerController]:
        return list(self._controllers)

    async def process_block(self, source: str, container: Element) -> BuildResult:
        try:
            config = load_block_config(source)
        except ConfigError as exc:
            route_error(exc.code, logger, self.metrics, error=str(exc))
            if self.metrics is not None:
                self.metrics.observe_build('config_error')
            render_error(container, str(exc))
            return BuildResult.failure(exc)

        controller = TrackerController(config, self.store, self.indicators, metrics=self.metrics)
        result = await controller.build(container)
        if result.ok:
            self._controllers.append(controller)
        else:
            render_error(container, result.message or '')
        return result

    def unload(self) -> None:
        for controller in self._controllers:
            controller.close()
        self._controllers.clear()
        logger.debug("Unloaded all task trackers")


__all__ = ["CODE_BLOCK_LANGUAGE", "ERROR_PREFIX", "ERROR_CLASS", "render_error", "TaskTrackerProcessor"]
