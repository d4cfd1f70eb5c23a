"""Change-notification bus for document modifications.

Subscribers are coroutines taking the modified :class:`VaultFile`. Publishing
awaits them one after another, in subscription order, so every refresh cycle
runs to completion before the next notification is delivered.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable, Callable

from .models import VaultFile

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[VaultFile], Awaitable[object]]


class ChangeBus:
    def __init__(self) -> None:
        self._subs: list[ChangeCallback] = []
        self._lock = threading.RLock()

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        with self._lock:
            self._subs.append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: ChangeCallback) -> None:
        with self._lock:
            if callback in self._subs:
                self._subs.remove(callback)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subs)

    async def publish(self, file: VaultFile) -> None:
        with self._lock:
            cbs = list(self._subs)
        for cb in cbs:
            try:
                await cb(file)
            except Exception:
                # one broken subscriber must not starve the others
                logger.exception("[vault] change subscriber failed for %s", file.path)


__all__ = ["ChangeCallback", "ChangeBus"]
