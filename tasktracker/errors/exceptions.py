"""Task tracker exception hierarchy.

A small exception tree used to categorize failures inside the engine. Each
class carries a stable route ``code`` understood by
:func:`tasktracker.errors.error_routing.route_error`, so callers can log and
count a failure without inspecting its type.
"""
from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for all task tracker exceptions."""

    code = "tracker.error"


class ConfigError(TaskTrackerError):
    """Block configuration is unusable (missing ``path``/``fileName``, bad YAML)."""

    code = "tracker.config.invalid"


class TrackerLookupError(TaskTrackerError):
    """Tracked folder or document could not be located in the document store."""

    code = "tracker.lookup.failed"


class FolderNotFoundError(TrackerLookupError):
    code = "tracker.lookup.folder_missing"


class DocumentNotFoundError(TrackerLookupError):
    code = "tracker.lookup.document_missing"


class DocumentReadError(TaskTrackerError):
    """The document store failed to return the document text."""

    code = "tracker.refresh.read_failed"


class StaleSurfaceError(TaskTrackerError):
    """A rendered indicator was looked up by id and is no longer present."""

    code = "tracker.refresh.stale_surface"


__all__ = [
    "TaskTrackerError",
    "ConfigError",
    "TrackerLookupError",
    "FolderNotFoundError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "StaleSurfaceError",
]
