"""Central error routing registry.

One table-driven place to decide how a tracker failure is logged and counted,
instead of ad-hoc logging at every call site.

Route Actions:
  - log_level: one of 'debug','info','warning','error'
  - metric: optional attribute name on the metrics bundle; incremented with a
    ``code`` label
  - escalate_env: environment variable name; if set truthy escalates log level by one
  - throttle_sec: repeated routes for the same code inside the window drop to debug

Example:
    route_error('tracker.refresh.read_failed', logger, metrics, document='Sprint 1')
"""
from __future__ import annotations

import json
import threading
import time
from typing import Any

from tasktracker.utils.env_adapter import get_bool

ERROR_REGISTRY: dict[str, dict[str, Any]] = {
    'tracker.config.invalid': {
        'log_level': 'warning',
        'metric': 'errors_total',
    },
    'tracker.lookup.folder_missing': {
        'log_level': 'warning',
        'metric': 'errors_total',
    },
    'tracker.lookup.document_missing': {
        'log_level': 'warning',
        'metric': 'errors_total',
    },
    'tracker.refresh.read_failed': {
        'log_level': 'warning',
        'metric': 'errors_total',
        'escalate_env': 'TASKTRACKER_ESCALATE_REFRESH_ERRORS',
    },
    'tracker.refresh.stale_surface': {
        # expected whenever the host drops a rendered view
        'log_level': 'info',
        'metric': 'errors_total',
        'throttle_sec': 5.0,
    },
}

_LEVEL_ORDER = ['debug', 'info', 'warning', 'error', 'critical']
_SEVERITY_DEFAULT = {
    'debug': 'low',
    'info': 'low',
    'warning': 'medium',
    'error': 'high',
    'critical': 'critical',
}

_THROTTLE_CACHE: dict[str, float] = {}
_LOCK = threading.Lock()


def _escalate(level: str) -> str:
    try:
        idx = _LEVEL_ORDER.index(level)
        return _LEVEL_ORDER[min(idx + 1, len(_LEVEL_ORDER) - 1)]
    except ValueError:
        return level


def register_error(code: str, **spec: Any) -> None:
    """Register or update an error route at runtime."""
    ERROR_REGISTRY[code] = spec


def unregister_error(code: str) -> None:
    ERROR_REGISTRY.pop(code, None)


def reset_throttle() -> None:
    with _LOCK:
        _THROTTLE_CACHE.clear()


def _serialize_labels(labels: dict[str, Any]) -> dict[str, str]:
    safe: dict[str, str] = {}
    for k, v in labels.items():
        if isinstance(v, (str, int, float, bool)) or v is None:
            safe[k] = str(v)
            continue
        try:
            safe[k] = json.dumps(v, default=str)[:512]
        except (TypeError, ValueError):
            safe[k] = '<unserializable>'
    return safe


def route_error(code: str, logger, metrics=None, _count: int | float = 1, **labels: Any) -> dict[str, Any]:
    """Route an error code through the registry.

    Returns a dict describing the decision (registered, log_level, severity,
    metric, throttled) so callers and tests can assert on it.
    """
    spec = ERROR_REGISTRY.get(code)
    if not spec:
        if logger:
            logger.debug("UNREGISTERED_ERROR code=%s labels=%s", code, labels)
        return {'code': code, 'registered': False}

    log_level = spec.get('log_level', 'info')
    escalator = spec.get('escalate_env')
    if escalator and get_bool(escalator, False):
        log_level = _escalate(log_level)

    throttled = False
    throttle_sec = spec.get('throttle_sec')
    if throttle_sec:
        ts = time.monotonic()
        throttle_key = f"{code}:{log_level}"
        with _LOCK:
            last = _THROTTLE_CACHE.get(throttle_key)
            if last is not None and ts - last < throttle_sec:
                throttled = True
            else:
                _THROTTLE_CACHE[throttle_key] = ts

    safe_labels = _serialize_labels(labels)
    severity = spec.get('severity') or _SEVERITY_DEFAULT.get(log_level, 'low')
    msg = f"ROUTE_ERROR code={code} severity={severity} labels={safe_labels}"
    if throttled:
        msg += " throttled=1"
    if logger:
        if not throttled and hasattr(logger, log_level):
            getattr(logger, log_level)(msg)
        else:
            logger.debug(msg)

    metric_name = spec.get('metric')
    metric_result = None
    if metrics is not None and metric_name:
        counter = getattr(metrics, metric_name, None)
        if counter is not None:
            counter.labels(code=code).inc(_count)
            metric_result = metric_name

    return {
        'code': code,
        'registered': True,
        'log_level': log_level,
        'severity': severity,
        'metric': metric_result,
        'throttled': throttled,
    }


__all__ = ["ERROR_REGISTRY", "register_error", "unregister_error", "reset_throttle", "route_error"]
