"""Unit tests for catalog pattern resolution."""

import os
from pathlib import Path
from unittest.mock import patch

from crunchycleaner.filesystem.resolver import expand_home, resolve, resolve_all


class TestExpandHome:
    """Tests for expand_home."""

    def test_tilde_slash_prefix(self, fake_home: Path) -> None:
        assert expand_home("~/.cache/pip") == os.path.join(str(fake_home), ".cache/pip")

    def test_bare_tilde(self, fake_home: Path) -> None:
        assert expand_home("~") == str(fake_home)

    def test_absolute_unchanged(self, fake_home: Path) -> None:
        assert expand_home("/var/log/*.log") == "/var/log/*.log"

    def test_other_user_unchanged(self, fake_home: Path) -> None:
        """~otheruser is not the invoking user's home and is left alone."""
        assert expand_home("~bob/.cache") == "~bob/.cache"


class TestResolve:
    """Tests for resolve."""

    def test_existing_directory(self, cache_dir: Path) -> None:
        assert resolve(str(cache_dir)) == [str(cache_dir)]

    def test_missing_path(self, tmp_path: Path) -> None:
        assert resolve(str(tmp_path / "does-not-exist")) == []

    def test_wildcard_matches_all_profiles(self, tmp_path: Path) -> None:
        """A wildcard segment returns every matching profile directory."""
        profiles = tmp_path / "firefox"
        for name in ("abc.default", "xyz.work", ".hidden-profile"):
            (profiles / name / "cache2").mkdir(parents=True)
        (profiles / "no-cache").mkdir()

        result = resolve(str(profiles / "*" / "cache2"))

        assert sorted(result) == sorted(
            str(profiles / name / "cache2")
            for name in ("abc.default", "xyz.work", ".hidden-profile")
        )

    def test_wildcard_without_matches(self, tmp_path: Path) -> None:
        assert resolve(str(tmp_path / "*" / "cache2")) == []

    def test_home_shorthand(self, fake_home: Path) -> None:
        target = fake_home / ".cache" / "pip"
        target.mkdir(parents=True)
        assert resolve("~/.cache/pip") == [str(target)]

    def test_relative_pattern_rejected(self, tmp_path: Path, monkeypatch) -> None:
        """Relative patterns never match against the working directory."""
        (tmp_path / "Temp").mkdir()
        monkeypatch.chdir(tmp_path)
        assert resolve("Temp") == []

    def test_empty_pattern(self) -> None:
        assert resolve("") == []
        assert resolve("   ") == []

    def test_home_lookup_failure_yields_empty(self) -> None:
        with patch.object(Path, "home", side_effect=RuntimeError("no home")):
            assert resolve("~/.cache/pip") == []

    def test_glob_error_yields_empty(self, tmp_path: Path) -> None:
        with patch(
            "crunchycleaner.filesystem.resolver.glob.glob",
            side_effect=OSError("boom"),
        ):
            assert resolve(str(tmp_path)) == []

    def test_file_match(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "log"
        log_dir.mkdir()
        (log_dir / "a.log").write_text("x")
        (log_dir / "b.txt").write_text("x")
        assert resolve(str(log_dir / "*.log")) == [str(log_dir / "a.log")]


class TestResolveAll:
    """Tests for resolve_all."""

    def test_duplicates_dropped(self, cache_dir: Path) -> None:
        result = resolve_all([str(cache_dir), str(cache_dir.parent / "*")])
        assert result == [str(cache_dir)]

    def test_order_follows_patterns(self, tmp_path: Path) -> None:
        first = tmp_path / "b"
        second = tmp_path / "a"
        first.mkdir()
        second.mkdir()
        assert resolve_all([str(first), str(second)]) == [str(first), str(second)]

    def test_missing_patterns_skipped(self, tmp_path: Path) -> None:
        present = tmp_path / "present"
        present.mkdir()
        assert resolve_all([str(tmp_path / "missing"), str(present)]) == [str(present)]
