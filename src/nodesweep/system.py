"""Operating system integration: trash, drive listing, file manager.

Everything platform specific lives behind the ``Platform`` interface so the
scanner and cleaner never branch on the host OS themselves.
"""

import logging
import os
import string
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from send2trash import send2trash

from nodesweep.errors import CommandError
from nodesweep.models import DriveInfo

log = logging.getLogger(__name__)


class Platform(ABC):
    """Capabilities the core needs from the host OS."""

    #: Whether /proc, /sys and /dev style mounts must never be walked
    excludes_pseudo_filesystems: bool = True

    def move_to_trash(self, path: Path) -> None:
        """Move ``path`` to the OS trash. Raises OSError on failure."""
        send2trash(str(path))

    @abstractmethod
    def list_drives(self) -> list[DriveInfo]:
        """List top-level locations that can be scanned."""

    @abstractmethod
    def open_folder(self, path: str) -> None:
        """Open ``path`` in the native file manager."""


def _list_mounts(mount_dirs: list[str], label: str) -> list[DriveInfo]:
    drives = []
    for mount_dir in mount_dirs:
        try:
            with os.scandir(mount_dir) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir():
                            drives.append(DriveInfo(path=entry.path, name=f"{label} {entry.name}"))
                    except OSError:
                        continue
        except OSError:
            continue
    return drives


def _spawn(command: list[str]) -> None:
    try:
        subprocess.Popen(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as e:
        raise CommandError(f"Failed to open folder: {e}") from e


class LinuxPlatform(Platform):
    """Linux desktops (freedesktop trash via send2trash)."""

    FILE_MANAGERS = ("xdg-open", "nautilus", "dolphin", "thunar", "pcmanfm")

    def list_drives(self) -> list[DriveInfo]:
        return [DriveInfo(path="/", name="Root Directory")] + _list_mounts(
            ["/media", "/mnt"], "Mount"
        )

    def open_folder(self, path: str) -> None:
        for manager in self.FILE_MANAGERS:
            try:
                subprocess.Popen(
                    [manager, path], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
                )
                return
            except OSError:
                log.debug("File manager %s not available", manager)
                continue
        raise CommandError("No suitable file manager found")


class MacPlatform(Platform):
    """macOS (Finder trash via send2trash)."""

    def list_drives(self) -> list[DriveInfo]:
        return [DriveInfo(path="/", name="Root Directory")] + _list_mounts(["/Volumes"], "Volume")

    def open_folder(self, path: str) -> None:
        _spawn(["open", path])


class WindowsPlatform(Platform):
    """Windows (Recycle Bin via send2trash)."""

    excludes_pseudo_filesystems = False

    def list_drives(self) -> list[DriveInfo]:
        drives = []
        for letter in string.ascii_uppercase:
            drive_path = f"{letter}:\\"
            if os.path.exists(drive_path):
                drives.append(DriveInfo(path=drive_path, name=f"Drive {letter}"))
        return drives

    def open_folder(self, path: str) -> None:
        # Explorer wants "D:\" rather than "D:" and backslashes throughout
        if path.endswith(":"):
            formatted = path + "\\"
        else:
            formatted = path.replace("/", "\\")
        _spawn(["explorer", formatted])


def current_platform() -> Platform:
    """Return the Platform implementation for the running host."""
    if sys.platform.startswith("win"):
        return WindowsPlatform()
    if sys.platform == "darwin":
        return MacPlatform()
    return LinuxPlatform()
