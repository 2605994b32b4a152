"""Compiled-in table of known application cache locations.

The catalog is selected once per run for the host's OS family. Windows
patterns are built from the usual profile environment variables; Unix
patterns use the ``~/`` home shorthand. A variable that is not set leaves
a relative pattern behind, which the resolver treats as matching nothing.
"""

import ntpath
import os
import sys
from collections.abc import Mapping
from enum import Enum

from crunchycleaner.catalog.models import CatalogEntry


class OSFamily(str, Enum):
    """Operating system family that selects the catalog and denylist.

    Attributes:
        WINDOWS: Microsoft Windows.
        UNIX: Linux and other Unix-like systems.
    """

    WINDOWS = "windows"
    UNIX = "unix"


def detect_os_family() -> OSFamily:
    """Detect the OS family of the running host."""
    if sys.platform.startswith("win"):
        return OSFamily.WINDOWS
    return OSFamily.UNIX


def build_catalog(
    os_family: OSFamily | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[CatalogEntry, ...]:
    """Build the catalog of cache targets for an OS family.

    Args:
        os_family: OS family to build for. Defaults to the running host.
        environ: Environment used to locate Windows profile directories.
            Defaults to ``os.environ``.

    Returns:
        Ordered, immutable tuple of catalog entries.
    """
    if os_family is None:
        os_family = detect_os_family()
    if environ is None:
        environ = os.environ

    if os_family == OSFamily.WINDOWS:
        return _windows_catalog(environ)
    return _unix_catalog()


def _entry(name: str, *patterns: str) -> CatalogEntry:
    return CatalogEntry(name=name, patterns=tuple(patterns))


def _windows_catalog(environ: Mapping[str, str]) -> tuple[CatalogEntry, ...]:
    home = environ.get("USERPROFILE", "")
    app_data = environ.get("APPDATA", "")
    local = environ.get("LOCALAPPDATA", "")
    program_files = environ.get("ProgramFiles", "")
    program_files_x86 = environ.get("ProgramFiles(x86)", "")
    win_dir = environ.get("WINDIR", "")

    def join(base: str, sub: str) -> str:
        return ntpath.join(base, *sub.split("/"))

    return (
        _entry("System Logs (Admin)", join(win_dir, "Panther"), join(win_dir, "Logs")),
        _entry("System Temp Folders (Admin)", join(win_dir, "Temp")),
        _entry("Update Logs (Admin)", join(win_dir, "SoftwareDistribution/Download")),
        _entry("User Temp Folder", join(local, "Temp")),
        _entry("Thumbnail Cache", join(local, "Microsoft/Windows/Explorer")),
        _entry(
            "Firefox Cache",
            join(local, "Mozilla/Firefox/Profiles/*/cache2"),
            join(local, "Mozilla/Firefox/Profiles/*/jumpListCache"),
            join(app_data, "Mozilla/Firefox/Profiles/*/shader-cache"),
        ),
        _entry(
            "Chrome Cache",
            join(local, "Google/Chrome/User Data/Default/Cache"),
            join(local, "Google/Chrome/User Data/Default/Code Cache"),
            join(local, "Google/Chrome/User Data/*/Cache"),
            join(local, "Google/Chrome/User Data/Default/Media Cache"),
        ),
        _entry(
            "Edge Cache",
            join(local, "Microsoft/Edge/User Data/Default/Cache"),
            join(local, "Microsoft/Edge/User Data/*/Cache"),
            join(local, "Microsoft/Edge/User Data/Default/Media Cache"),
        ),
        _entry(
            "Brave Cache",
            join(local, "BraveSoftware/Brave-Browser/User Data/Default/Cache"),
            join(local, "BraveSoftware/Brave-Browser/User Data/*/Cache"),
            join(local, "BraveSoftware/Brave-Browser/User Data/Default/Media Cache"),
        ),
        _entry(
            "Opera Cache",
            join(local, "Opera Software/Opera Stable/Cache"),
            join(local, "Opera Software/Opera Stable/Code Cache"),
        ),
        _entry("Thunderbird Cache", join(local, "Thunderbird/Profiles/*/cache2")),
        _entry(
            "Steam AppCache",
            join(program_files_x86, "Steam/appcache"),
            join(program_files, "Steam/appcache"),
        ),
        _entry("Epic Games Cache", join(local, "EpicGamesLauncher/Saved/webcache")),
        _entry(
            "Discord Cache",
            join(app_data, "discord/Cache"),
            join(app_data, "discord/Code Cache"),
            join(app_data, "discord/GPUCache"),
        ),
        _entry("Spotify Storage", join(local, "Spotify/Storage")),
        _entry(
            "VS Code Cache",
            join(app_data, "Code/Cache"),
            join(app_data, "Code/CachedData"),
            join(app_data, "Code/CachedExtensionVSIXs"),
            join(app_data, "Code/User/workspaceStorage"),
            join(app_data, "Code/GPUCache"),
        ),
        _entry(
            "DirectX Shader Cache",
            join(local, "D3DSCache"),
            join(local, "NVIDIA/GLCache"),
        ),
        _entry("Go Build Cache", join(local, "go-build")),
        _entry("Pip Cache", join(local, "pip/Cache")),
        _entry("NPM Cache", join(app_data, "npm-cache/_cacache")),
        _entry("Yarn Cache", join(local, "Yarn/Cache"), join(app_data, "Yarn/Cache")),
        _entry(
            "Cargo Cache",
            join(home, ".cargo/registry/cache"),
            join(home, ".cargo/git/db"),
        ),
    )


def _unix_catalog() -> tuple[CatalogEntry, ...]:
    return (
        _entry("System Logs (Root)", "/var/log/*.log"),
        _entry("System Temp Folders (Root)", "/tmp"),
        _entry("Thumbnail Cache", "~/.cache/thumbnails"),
        _entry("Firefox Cache", "~/.cache/mozilla/firefox/*/cache2"),
        _entry(
            "Chromium Cache",
            "~/.cache/chromium/*/Cache",
            "~/.cache/chromium/*/Code Cache",
        ),
        _entry(
            "Chrome Cache",
            "~/.cache/google-chrome/*/Cache",
            "~/.cache/google-chrome/*/Code Cache",
        ),
        _entry(
            "Edge Cache",
            "~/.cache/microsoft-edge/*/Cache",
            "~/.cache/microsoft-edge/*/Code Cache",
        ),
        _entry(
            "Brave Cache",
            "~/.cache/BraveSoftware/Brave-Browser/*/Cache",
            "~/.cache/BraveSoftware/Brave-Browser/*/Code Cache",
        ),
        _entry("Opera Cache", "~/.cache/opera/Cache", "~/.config/opera/Cache"),
        _entry("Thunderbird Cache", "~/.cache/thunderbird/*/cache2"),
        _entry(
            "Steam Cache",
            "~/.steam/steam/appcache",
            "~/.local/share/Steam/appcache",
            "~/.local/share/Steam/config/htmlcache",
        ),
        _entry(
            "Epic Games (Heroic/Lutris) Cache",
            "~/.config/heroic/WebCache",
            "~/.local/share/lutris/runtime",
        ),
        _entry(
            "Discord Cache",
            "~/.config/discord/Cache",
            "~/.config/discord/Code Cache",
            "~/.config/discord/GPUCache",
        ),
        _entry("Spotify Cache", "~/.cache/spotify"),
        _entry(
            "VS Code Cache",
            "~/.config/Code/Cache",
            "~/.config/Code/CachedData",
            "~/.config/Code/User/workspaceStorage",
            "~/.config/Code/GPUCache",
        ),
        _entry("Mesa Shader Cache", "~/.cache/mesa_shader_cache"),
        _entry("Go Build Cache", "~/.cache/go-build"),
        _entry("Pip Cache", "~/.cache/pip"),
        _entry("NPM Cache", "~/.npm/_cacache"),
        _entry("Yarn Cache", "~/.cache/yarn"),
        _entry("Cargo Cache", "~/.cargo/registry/cache"),
    )
