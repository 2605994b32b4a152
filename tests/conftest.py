"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from crunchycleaner.catalog.models import CatalogEntry, DiscoveredEntry


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point Path.home() at an empty directory inside tmp_path."""
    home = tmp_path / "home" / "tester"
    home.mkdir(parents=True)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A cache directory holding files, a subdirectory and a hidden file."""
    root = tmp_path / "apps" / "demo" / "cache"
    (root / "sub").mkdir(parents=True)
    (root / "a.bin").write_bytes(b"a" * 100)
    (root / "sub" / "b.bin").write_bytes(b"b" * 50)
    (root / ".hidden").write_bytes(b"h" * 10)
    return root


@pytest.fixture
def make_entry() -> Callable[..., DiscoveredEntry]:
    """Factory for DiscoveredEntry instances."""

    def _make(name: str, *patterns: str, checked: bool = False, size: int | None = None):
        return DiscoveredEntry(
            entry=CatalogEntry(name=name, patterns=tuple(patterns)),
            checked=checked,
            size_bytes=size,
        )

    return _make
