"""Task Tracker - checkbox progress indicators that follow their document."""

__version__ = "1.0.0"

from .config import TrackerConfig, TrackerSettings, load_block_config, resolve_settings
from .controller import BuildResult, RefreshOutcome, TrackerController, TrackerState
from .panels import IndicatorState, ProgressResult, color_for, compute_percentage, derive_id
from .processor import TaskTrackerProcessor
from .surface import MemorySurface
from .tasks import TaskCounts, TaskLine, parse_tasks
from .vault import VaultStore

__all__ = [
    "__version__",
    "TrackerConfig",
    "TrackerSettings",
    "load_block_config",
    "resolve_settings",
    "BuildResult",
    "RefreshOutcome",
    "TrackerController",
    "TrackerState",
    "IndicatorState",
    "ProgressResult",
    "color_for",
    "compute_percentage",
    "derive_id",
    "TaskTrackerProcessor",
    "MemorySurface",
    "TaskCounts",
    "TaskLine",
    "parse_tasks",
    "VaultStore",
]
