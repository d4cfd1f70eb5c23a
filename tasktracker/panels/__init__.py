"""Progress computation and rendered indicator state."""
from .helpers import ProgressResult, color_for, compute_percentage, compute_progress
from .indicator import IndicatorHandle, IndicatorState, UpdateStatus, derive_id

__all__ = [
    "ProgressResult",
    "color_for",
    "compute_percentage",
    "compute_progress",
    "IndicatorHandle",
    "IndicatorState",
    "UpdateStatus",
    "derive_id",
]
