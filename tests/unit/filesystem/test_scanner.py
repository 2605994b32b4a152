"""Unit tests for cache discovery and size estimation."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from crunchycleaner.catalog.models import CatalogEntry
from crunchycleaner.filesystem.scanner import CacheScanner, discover, estimate_size


class TestEstimateSize:
    """Tests for estimate_size."""

    def test_directory_sums_nested_files(self, cache_dir: Path) -> None:
        """Sizes of files at every depth are summed, hidden files included."""
        assert estimate_size(cache_dir) == 160

    def test_single_file(self, cache_dir: Path) -> None:
        assert estimate_size(cache_dir / "a.bin") == 100

    def test_missing_path(self, tmp_path: Path) -> None:
        assert estimate_size(tmp_path / "missing") == 0

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert estimate_size(tmp_path) == 0

    def test_accepts_string(self, cache_dir: Path) -> None:
        assert estimate_size(str(cache_dir)) == 160

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlinks_not_followed(self, cache_dir: Path, tmp_path: Path) -> None:
        """Symlinked files and directories inside the tree contribute nothing."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(b"x" * 5000)
        (cache_dir / "link-dir").symlink_to(outside)
        (cache_dir / "link-file").symlink_to(outside / "big.bin")
        (cache_dir / "dead-link").symlink_to(tmp_path / "nowhere")

        assert estimate_size(cache_dir) == 160

    def test_unreadable_entry_counts_zero(self, cache_dir: Path) -> None:
        """A per-entry stat failure does not abort the sum."""
        real_lstat = os.lstat

        def flaky_lstat(path, *args, **kwargs):
            if str(path).endswith("b.bin"):
                raise PermissionError("denied")
            return real_lstat(path, *args, **kwargs)

        with patch("crunchycleaner.filesystem.scanner.os.lstat", side_effect=flaky_lstat):
            assert estimate_size(cache_dir) == 110


class TestDiscover:
    """Tests for the discovery pass."""

    def test_entry_without_matches_excluded(self, tmp_path: Path) -> None:
        catalog = [CatalogEntry(name="Gone", patterns=(str(tmp_path / "missing"),))]
        assert discover(catalog) == []

    def test_partial_match_included_once(self, tmp_path: Path) -> None:
        """An entry with one missing and one present pattern appears once."""
        present = tmp_path / "present"
        present.mkdir()
        (present / "f").write_bytes(b"x" * 7)
        entry = CatalogEntry(
            name="X",
            patterns=(str(tmp_path / "missing"), str(present)),
        )

        result = discover([entry])

        assert len(result) == 1
        assert result[0].entry == entry
        assert result[0].checked is False
        assert result[0].size_bytes == 7
        assert result[0].matched_paths == (str(present),)

    def test_catalog_order_kept(self, tmp_path: Path) -> None:
        for name in ("one", "two", "three"):
            (tmp_path / name).mkdir()
        catalog = [
            CatalogEntry(name=name.title(), patterns=(str(tmp_path / name),))
            for name in ("three", "one", "two")
        ]

        result = discover(catalog)

        assert [e.name for e in result] == ["Three", "One", "Two"]

    def test_size_sums_all_matches(self, tmp_path: Path) -> None:
        for profile in ("p1", "p2"):
            cache = tmp_path / profile / "cache2"
            cache.mkdir(parents=True)
            (cache / "data").write_bytes(b"x" * 30)
        entry = CatalogEntry(name="Firefox", patterns=(str(tmp_path / "*" / "cache2"),))

        result = discover([entry])

        assert result[0].size_bytes == 60
        assert len(result[0].matched_paths) == 2

    def test_measure_disabled(self, cache_dir: Path) -> None:
        entry = CatalogEntry(name="Demo", patterns=(str(cache_dir),))
        result = discover([entry], measure=False)
        assert result[0].size_bytes is None

    def test_scanner_yields_lazily(self, cache_dir: Path) -> None:
        entry = CatalogEntry(name="Demo", patterns=(str(cache_dir),))
        scanner = CacheScanner([entry])
        assert next(iter(scanner.scan())).name == "Demo"
