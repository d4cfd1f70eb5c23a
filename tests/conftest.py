"""Pytest fixtures for the task tracker.

Provides a temporary vault on disk, an in-memory rendering surface and a
metrics bundle bound to a private CollectorRegistry.
"""
from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from tasktracker.errors.error_routing import reset_throttle
from tasktracker.metrics import TrackerMetrics
from tasktracker.surface import Element, MemorySurface
from tasktracker.vault.store import VaultStore


@pytest.fixture(autouse=True)
def _clean_error_throttle():
    reset_throttle()
    yield
    reset_throttle()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    root = tmp_path / 'vault'
    (root / 'Projects').mkdir(parents=True)
    return root


@pytest.fixture
def write_note(vault_root: Path) -> Callable[..., Path]:
    """Write a note and bump its mtime so polling always sees the change."""
    bumps = {'n': 0}

    def _write(rel_path: str, text: str) -> Path:
        path = vault_root.joinpath(*rel_path.split('/'))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        bumps['n'] += 1
        stamp = 1_700_000_000 + bumps['n']
        os.utime(path, (stamp, stamp))
        return path

    return _write


@pytest.fixture
def store(vault_root: Path) -> VaultStore:
    return VaultStore(vault_root)


@pytest.fixture
def surface() -> MemorySurface:
    return MemorySurface()


@pytest.fixture
def container(surface: MemorySurface) -> Element:
    return surface.create_root()


@pytest.fixture
def metrics() -> TrackerMetrics:
    return TrackerMetrics()
