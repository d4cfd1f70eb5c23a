"""Document store collaborator and its filesystem implementation.

``VaultStore`` exposes a directory of markdown notes the way the tracker
expects a host vault to behave: folder lookup by normalized path, async full
text reads, and modify notifications. Modifications are detected by polling
``st_mtime_ns`` snapshots (see :meth:`VaultStore.scan_changes`).
"""
from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from tasktracker.errors.exceptions import DocumentReadError
from tasktracker.utils.env_adapter import get_float

from .events import ChangeBus, ChangeCallback
from .models import MARKDOWN_EXTENSION, VaultFile, VaultFolder
from .paths import ROOT_PATH, escapes_root, normalize_path, path_key

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0


@runtime_checkable
class DocumentStore(Protocol):
    def get_folder(self, path: str) -> VaultFolder | None: ...

    async def read(self, file: VaultFile) -> str: ...

    def on_modify(self, callback: ChangeCallback) -> Callable[[], None]: ...


class VaultStore:
    """Filesystem-backed document store rooted at ``root``."""

    def __init__(self, root: str | os.PathLike[str], *, encoding: str = 'utf-8') -> None:
        self.root = Path(root)
        self.encoding = encoding
        self._bus = ChangeBus()
        self._mtimes: dict[str, int] = {}
        self.prime()

    def _abs(self, vault_path: str) -> Path | None:
        """Map a vault path onto the filesystem; None when it leaves the vault.

        Segments are used as spelled. A segment missing on disk falls back to
        the sibling whose name has the same NFC key, so an NFD folder is found
        from an NFC config and the other way round.
        """
        vault_path = normalize_path(vault_path)
        if escapes_root(vault_path):
            return None
        target = self.root
        if vault_path == ROOT_PATH:
            return target
        for segment in vault_path.split('/'):
            candidate = target / segment
            if not candidate.exists() and target.is_dir():
                key = path_key(segment)
                candidate = next((e for e in target.iterdir() if path_key(e.name) == key), candidate)
            target = candidate
        return target

    def _relative(self, path: Path) -> str:
        return normalize_path(path.relative_to(self.root).as_posix())

    # ------------------------------------------------------------------
    # Lookup & read
    # ------------------------------------------------------------------
    def get_folder(self, path: str) -> VaultFolder | None:
        folder_path = normalize_path(path)
        target = self._abs(folder_path)
        if target is None or not target.is_dir():
            return None
        children: list[VaultFile | VaultFolder] = []
        for entry in sorted(target.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                children.append(VaultFolder(path=self._relative(entry)))
            elif entry.is_file():
                children.append(VaultFile.in_folder(folder_path, entry.name))
        return VaultFolder(path=folder_path, children=tuple(children))

    def get_file(self, path: str) -> VaultFile | None:
        file_path = normalize_path(path)
        target = self._abs(file_path)
        if file_path == ROOT_PATH or target is None or not target.is_file():
            return None
        parent, _, name = file_path.rpartition('/')
        return VaultFile.in_folder(parent or ROOT_PATH, name)

    def _read_text(self, file: VaultFile) -> str:
        target = self._abs(file.path)
        if target is None:
            raise FileNotFoundError(f"outside the vault: {file.path}")
        return target.read_text(encoding=self.encoding)

    async def read(self, file: VaultFile) -> str:
        try:
            return await asyncio.to_thread(self._read_text, file)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(f"Cannot read {file.path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Change notifications
    # ------------------------------------------------------------------
    def on_modify(self, callback: ChangeCallback) -> Callable[[], None]:
        return self._bus.subscribe(callback)

    def subscriber_count(self) -> int:
        return self._bus.subscriber_count()

    async def notify_modified(self, file: VaultFile) -> None:
        await self._bus.publish(file)

    def _snapshot(self) -> dict[str, int]:
        snap: dict[str, int] = {}
        for path in self.root.rglob(f"*.{MARKDOWN_EXTENSION}"):
            try:
                if path.is_file():
                    snap[self._relative(path)] = path.stat().st_mtime_ns
            except OSError:
                logger.debug("[vault] stat failed for %s", path, exc_info=True)
        return snap

    def prime(self) -> None:
        """Record current mtimes so the next scan only reports later changes."""
        self._mtimes = self._snapshot()

    async def scan_changes(self) -> list[VaultFile]:
        """Dispatch a modify notification for every new or changed document."""
        current = await asyncio.to_thread(self._snapshot)
        changed = sorted(p for p, mtime in current.items() if self._mtimes.get(p) != mtime)
        self._mtimes = current
        files: list[VaultFile] = []
        for vault_path in changed:
            parent, _, name = vault_path.rpartition('/')
            file = VaultFile.in_folder(parent or ROOT_PATH, name)
            files.append(file)
            logger.debug("[vault] modified %s", vault_path)
            await self._bus.publish(file)
        return files

    async def watch(self, stop: asyncio.Event, interval: float | None = None) -> None:
        """Poll for changes until ``stop`` is set."""
        if interval is None:
            interval = get_float('TASKTRACKER_POLL_INTERVAL', DEFAULT_POLL_INTERVAL)
        logger.info("[vault] watching %s every %.2fs", self.root, interval)
        while not stop.is_set():
            await self.scan_changes()
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue


__all__ = ["DEFAULT_POLL_INTERVAL", "DocumentStore", "VaultStore"]
