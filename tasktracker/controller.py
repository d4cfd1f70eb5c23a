"""Tracker controller: initial build plus change-driven refresh.

State machine::

    UNINITIALIZED --build ok--> RENDERED --matching change--> REFRESHING --> RENDERED
                                                   \\--read failure--> FAILED --matching change--> REFRESHING

A failed build never subscribes to the store, and a store error raised during
the build comes back as a failed BuildResult. Once rendered, the controller
listens to every modification in the store and filters for its own document;
a read failure or a vanished indicator only ends the current refresh cycle.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tasktracker.config.settings import TrackerConfig, TrackerSettings, resolve_settings
from tasktracker.errors.error_routing import route_error
from tasktracker.errors.exceptions import (
    DocumentNotFoundError,
    DocumentReadError,
    FolderNotFoundError,
    StaleSurfaceError,
    TaskTrackerError,
    TrackerLookupError,
)
from tasktracker.panels.helpers import ProgressResult, compute_progress
from tasktracker.panels.indicator import IndicatorHandle, IndicatorState, UpdateStatus
from tasktracker.surface import Element
from tasktracker.tasks.parser import parse_tasks
from tasktracker.vault.models import VaultFile, find_document
from tasktracker.vault.paths import normalize_path, path_key
from tasktracker.vault.store import DocumentStore

logger = logging.getLogger(__name__)

FOLDER_NOT_FOUND_MESSAGE = 'Folder not found'
FILE_NOT_FOUND_MESSAGE = 'File not found'


class TrackerState(str, Enum):
    UNINITIALIZED = 'uninitialized'
    RENDERED = 'rendered'
    REFRESHING = 'refreshing'
    FAILED = 'failed'


class RefreshOutcome(str, Enum):
    UPDATED = 'updated'
    IGNORED = 'ignored'
    STALE = 'stale'
    READ_ERROR = 'read_error'
    NOT_READY = 'not_ready'


@dataclass(frozen=True)
class BuildResult:
    """Tagged result of an initial build."""

    ok: bool
    handle: IndicatorHandle | None = None
    error: TaskTrackerError | None = None

    @property
    def message(self) -> str | None:
        return str(self.error) if self.error is not None else None

    @classmethod
    def failure(cls, error: TaskTrackerError) -> BuildResult:
        return cls(ok=False, error=error)


_BUILD_OUTCOMES = {
    FolderNotFoundError: 'lookup_error',
    DocumentNotFoundError: 'lookup_error',
    DocumentReadError: 'read_error',
}


class TrackerController:
    """Keeps one rendered indicator in sync with one document."""

    def __init__(self, config: TrackerConfig, store: DocumentStore, indicators: IndicatorState,
                 *, metrics: Any = None) -> None:
        self.config = config
        self.store = store
        self.indicators = indicators
        self.metrics = metrics
        self.settings: TrackerSettings = resolve_settings(config)
        self.folder_path = normalize_path(config.path)
        self.document_file_name = f"{config.file_name}.md"
        self._state = TrackerState.UNINITIALIZED
        self._in_flight = 0
        self._unsubscribe = None
        self.last_outcome: RefreshOutcome | None = None

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def subscribed(self) -> bool:
        return self._unsubscribe is not None

    def _locate(self) -> VaultFile:
        folder = self.store.get_folder(self.folder_path)
        if folder is None:
            raise FolderNotFoundError(FOLDER_NOT_FOUND_MESSAGE)
        document = find_document(folder, self.config.file_name)
        if document is None:
            raise DocumentNotFoundError(FILE_NOT_FOUND_MESSAGE)
        return document

    def _progress(self, text: str) -> ProgressResult:
        return compute_progress(parse_tasks(text), self.settings.colors)

    def _observe(self, kind: str, outcome: str) -> None:
        if self.metrics is None:
            return
        if kind == 'build':
            self.metrics.observe_build(outcome)
        else:
            self.metrics.observe_refresh(outcome)

    def _set_progress_metric(self, progress: ProgressResult) -> None:
        if self.metrics is not None:
            self.metrics.set_progress(self.config.file_name, progress.percentage)

    def _build_failed(self, exc: TaskTrackerError) -> BuildResult:
        route_error(exc.code, logger, self.metrics, folder=self.folder_path, document=self.config.file_name)
        self._observe('build', _BUILD_OUTCOMES.get(type(exc), 'lookup_error'))
        logger.warning("[build] %s: %s", self.config.file_name, exc)
        return BuildResult.failure(exc)

    async def build(self, container: Element) -> BuildResult:
        """Locate, read, parse and render; subscribe only when all of it worked."""
        if self._state is not TrackerState.UNINITIALIZED:
            raise RuntimeError(f"tracker for {self.config.file_name!r} already built")
        try:
            document = self._locate()
            text = await self.store.read(document)
        except (TrackerLookupError, DocumentReadError) as exc:
            return self._build_failed(exc)
        except Exception as exc:
            # a store that raises its own errors still yields a tagged failure
            logger.debug("[build] store failure for %s", self.config.file_name, exc_info=True)
            error = DocumentReadError(f"{type(exc).__name__}: {exc}")
            error.__cause__ = exc
            return self._build_failed(error)

        progress = self._progress(text)
        handle = self.indicators.render(container, self.settings, progress, document.basename,
                                        label=self.config.label)
        self._set_progress_metric(progress)
        self._observe('build', 'ok')
        self._unsubscribe = self.store.on_modify(self.handle_change)
        self._state = TrackerState.RENDERED
        logger.info("[build] tracking %s (%d%%)", document.path, progress.percentage)
        return BuildResult(ok=True, handle=handle)

    def matches(self, file: VaultFile) -> bool:
        return (path_key(file.parent) == path_key(self.folder_path)
                and path_key(file.name) == path_key(self.document_file_name))

    async def handle_change(self, file: VaultFile) -> RefreshOutcome:
        """Change-notification entry point; ignores other documents."""
        if self._state is TrackerState.UNINITIALIZED:
            return RefreshOutcome.NOT_READY
        if not self.matches(file):
            self._observe('refresh', RefreshOutcome.IGNORED.value)
            return RefreshOutcome.IGNORED
        return await self.refresh(file)

    async def refresh(self, file: VaultFile) -> RefreshOutcome:
        """Run one refresh cycle: read, parse, compute, update in place."""
        outcome = await self._refresh(file)
        self.last_outcome = outcome
        return outcome

    async def _refresh(self, file: VaultFile) -> RefreshOutcome:
        self._in_flight += 1
        self._state = TrackerState.REFRESHING
        failed = False
        try:
            try:
                text = await self.store.read(file)
                progress = self._progress(text)
            except Exception as exc:
                # any read/parse failure ends this cycle only
                failed = True
                logger.debug("[refresh] cycle failed for %s", file.path, exc_info=True)
                route_error(DocumentReadError.code, logger, self.metrics, document=file.path, error=str(exc))
                self._observe('refresh', RefreshOutcome.READ_ERROR.value)
                return RefreshOutcome.READ_ERROR

            status = self.indicators.update(file.basename, progress)
            self._set_progress_metric(progress)
            if status is UpdateStatus.NOT_FOUND:
                route_error(StaleSurfaceError.code, logger, self.metrics, document=file.basename)
                self._observe('refresh', RefreshOutcome.STALE.value)
                return RefreshOutcome.STALE
            self._observe('refresh', RefreshOutcome.UPDATED.value)
            logger.debug("[refresh] %s -> %d%% %s", file.path, progress.percentage, progress.color)
            return RefreshOutcome.UPDATED
        finally:
            self._in_flight -= 1
            if self._in_flight:
                self._state = TrackerState.REFRESHING
            else:
                # FAILED only lasts until the next matching change starts a cycle
                self._state = TrackerState.FAILED if failed else TrackerState.RENDERED

    def close(self) -> None:
        """Drop the change subscription (host unloaded the block)."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


__all__ = [
    "FOLDER_NOT_FOUND_MESSAGE",
    "FILE_NOT_FOUND_MESSAGE",
    "TrackerState",
    "RefreshOutcome",
    "BuildResult",
    "TrackerController",
]
