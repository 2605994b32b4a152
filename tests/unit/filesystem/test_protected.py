"""Tests for the path safety checks."""

from pathlib import Path
from unittest.mock import patch

import pytest
from crunchycleaner.catalog.targets import OSFamily
from crunchycleaner.filesystem.protected import (
    MIN_PATH_DEPTH,
    UNIX_HOME_PARENTS,
    UNIX_PROTECTED_PATHS,
    UNIX_PROTECTED_TREES,
    WINDOWS_PROTECTED_PATHS,
    Verdict,
    check_path,
    is_safe_path,
)

UNIX_HOME = "/home/alice"
WINDOWS_HOME = "C:\\Users\\Alice"


def unix_safe(path: str) -> bool:
    return is_safe_path(path, os_family=OSFamily.UNIX, home=UNIX_HOME)


def windows_safe(path: str) -> bool:
    return is_safe_path(path, os_family=OSFamily.WINDOWS, home=WINDOWS_HOME)


class TestProtectedPathLists:
    """Tests for the denylist constants."""

    def test_unix_denylist_contains_core_dirs(self) -> None:
        for path in ("/etc", "/bin", "/usr", "/home", "/root", "/proc", "/tmp"):
            assert path in UNIX_PROTECTED_PATHS

    def test_windows_denylist_contains_core_dirs(self) -> None:
        assert "c:\\windows" in WINDOWS_PROTECTED_PATHS
        assert "c:\\program files (x86)" in WINDOWS_PROTECTED_PATHS

    def test_denylists_are_lower_case(self) -> None:
        for path in UNIX_PROTECTED_PATHS | WINDOWS_PROTECTED_PATHS:
            assert path == path.lower()

    def test_unix_trees_contain_system_roots(self) -> None:
        for path in ("/etc", "/boot", "/usr", "/proc", "/sys", "/dev"):
            assert path in UNIX_PROTECTED_TREES
        assert "/var" not in UNIX_PROTECTED_TREES
        assert "/tmp" not in UNIX_PROTECTED_TREES
        assert "/home" in UNIX_HOME_PARENTS

    def test_min_depth(self) -> None:
        assert MIN_PATH_DEPTH == 2


class TestUnixProtected:
    """Paths that must never be cleaned on Unix-like systems."""

    @pytest.mark.parametrize(
        "path",
        [
            "/",
            "//",
            "///",
            "/etc",
            "/etc/",
            "/ETC",
            "/Etc//",
            "/usr",
            "/usr/lib/",
            "/var/log",
            "/home",
            "/home/",
            "/tmp",
            "/root",
            "/proc",
        ],
    )
    def test_root_and_denylist(self, path: str) -> None:
        assert unix_safe(path) is False

    @pytest.mark.parametrize(
        "path",
        ["/home/alice", "/home/alice/", "/HOME/Alice", "/home/alice/.cache/.."],
    )
    def test_whole_home_directory(self, path: str) -> None:
        assert unix_safe(path) is False

    @pytest.mark.parametrize("path", ["/data", "/cache/", "/srv2"])
    def test_shallow_paths(self, path: str) -> None:
        """Anything directly below the root is too shallow."""
        assert unix_safe(path) is False

    @pytest.mark.parametrize(
        "path",
        [
            "/etc/ssh",
            "/etc/ssh/",
            "/ETC/SSH",
            "//etc/ssh",
            "/boot/efi",
            "/usr/games",
            "/usr/local/share/fonts",
            "/usr/lib/python3/dist-packages",
            "/proc/self",
            "/sys/class",
            "/dev/shm",
            "/lib64/security",
        ],
    )
    def test_inside_system_trees(self, path: str) -> None:
        assert unix_safe(path) is False

    @pytest.mark.parametrize("path", ["/home/bob", "/home/bob/", "/Users/carol"])
    def test_other_users_home(self, path: str) -> None:
        assert unix_safe(path) is False

    def test_other_users_home_without_known_home(self) -> None:
        with patch.object(Path, "home", side_effect=RuntimeError("no home")):
            assert is_safe_path("/home/bob", os_family=OSFamily.UNIX) is False

    def test_dot_dot_normalized_before_checks(self) -> None:
        """Traversal that collapses to a protected directory is caught."""
        assert unix_safe("/home/alice/.cache/../..") is False
        assert unix_safe("/usr/share/../../etc") is False

    @pytest.mark.parametrize("path", ["", "   ", "relative/cache/dir", "./x/y/z"])
    def test_empty_and_relative(self, path: str) -> None:
        assert unix_safe(path) is False

    def test_reason_reported(self) -> None:
        result = check_path("/etc", os_family=OSFamily.UNIX, home=UNIX_HOME)
        assert result.verdict == Verdict.PROTECTED
        assert result.is_safe is False
        assert result.reason == "system directory"

    def test_reasons_per_rule(self) -> None:
        def reason(path: str) -> str | None:
            return check_path(path, os_family=OSFamily.UNIX, home=UNIX_HOME).reason

        assert reason("/") == "filesystem root"
        assert reason("/home/alice") == "home directory"
        assert reason("/data") == "too close to the filesystem root"
        assert reason("/etc/ssh") == "inside a system directory"
        assert reason("/home/bob") == "another user's home directory"
        assert reason("cache") == "not an absolute path"


class TestUnixSafe:
    """Paths that are deep enough and not on the denylist."""

    @pytest.mark.parametrize(
        "path",
        [
            "/tmp/x-cache",
            "/home/alice/.cache/pip",
            "/home/alice/.cache/pip/",
            "/home/alice/.config/Code/Cache",
            "/var/log/syslog.log",
            "/home/alice/.cache/mozilla/firefox/abc.default/cache2",
            "/var/log/apt",
            "/tmp/pytest-of-alice/cache",
            "/etcetera/cache",
            "/usrdata/cache",
        ],
    )
    def test_safe(self, path: str) -> None:
        assert unix_safe(path) is True

    def test_safe_verdict(self) -> None:
        result = check_path("/tmp/x-cache", os_family=OSFamily.UNIX, home=UNIX_HOME)
        assert result.verdict == Verdict.SAFE
        assert result.reason is None

    def test_default_home_uses_path_home(self) -> None:
        with patch.object(Path, "home", return_value=Path("/mock/home")):
            assert is_safe_path("/mock/home", os_family=OSFamily.UNIX) is False
            assert is_safe_path("/mock/home/.cache/pip", os_family=OSFamily.UNIX) is True

    def test_unknown_home_still_checks_rest(self) -> None:
        with patch.object(Path, "home", side_effect=RuntimeError("no home")):
            assert is_safe_path("/etc", os_family=OSFamily.UNIX) is False
            assert is_safe_path("/srv/app/cache", os_family=OSFamily.UNIX) is True


class TestWindowsProtected:
    """Paths that must never be cleaned on Windows."""

    @pytest.mark.parametrize("path", ["C:\\", "c:\\", "C:", "D:\\", "C:/", "\\", "/"])
    def test_drive_roots(self, path: str) -> None:
        assert windows_safe(path) is False

    @pytest.mark.parametrize(
        "path",
        [
            "C:\\Windows",
            "c:\\WINDOWS\\",
            "C:\\Windows\\System32",
            "C:/Windows/System32/",
            "C:\\Users",
            "C:\\Program Files",
            "C:\\Program Files (x86)\\",
            "C:\\ProgramData",
        ],
    )
    def test_denylist(self, path: str) -> None:
        assert windows_safe(path) is False

    @pytest.mark.parametrize(
        "path", ["C:\\Users\\Alice", "c:\\users\\alice\\", "C:/Users/ALICE"]
    )
    def test_user_profile(self, path: str) -> None:
        assert windows_safe(path) is False

    def test_shallow_path(self) -> None:
        assert windows_safe("C:\\Temp") is False

    def test_profile_from_environment(self) -> None:
        with patch.dict("os.environ", {"USERPROFILE": "C:\\Users\\Carol"}):
            assert is_safe_path("C:\\Users\\Carol", os_family=OSFamily.WINDOWS) is False

    def test_relative(self) -> None:
        assert windows_safe("AppData\\Local\\Temp") is False


class TestWindowsSafe:
    """Deep Windows cache paths are allowed."""

    @pytest.mark.parametrize(
        "path",
        [
            "C:\\Users\\Alice\\AppData\\Local\\Temp",
            "C:\\Users\\Alice\\AppData\\Local\\pip\\Cache\\",
            "C:\\Windows\\Temp",
            "C:\\Windows\\SoftwareDistribution\\Download",
            "c:/program files (x86)/steam/appcache",
        ],
    )
    def test_safe(self, path: str) -> None:
        assert windows_safe(path) is True
