"""Pruning decisions for the node_modules scanner.

Two questions get answered here without touching anything beyond a
directory's immediate children:

* should a directory be skipped outright (``should_skip_directory``)
* is a subdirectory worth descending into (``should_scan_subdirectory``)
"""

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

# Hard recursion ceiling relative to a scan root
MAX_SCAN_DEPTH = 6

# Unmarked, unnamed directories are only followed while shallower than this
PERMISSIVE_DEPTH = 4

NODE_MODULES = "node_modules"

# Never useful at any depth
SKIP_DIRECTORIES = frozenset(
    {
        # Other package-manager stores
        ".pnpm-store",
        ".npm",
        ".yarn",
        ".npmrc",
        ".yarnrc",
        ".yarn-cache",
        ".npm-cache",
        # Version control
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # IDE state
        ".vscode",
        ".idea",
        ".atom",
        ".sublime",
        # Handled by the scanner itself
        NODE_MODULES,
        # Build outputs
        "dist",
        "build",
        ".next",
        "out",
        "target",
        # Cache/temp
        ".cache",
        ".temp",
        "tmp",
        "temp",
        # OS specific
        "android",
        "ios",
        "macos",
        "windows",
        # Binary/compiled
        "bin",
        "obj",
        "Debug",
        "Release",
        # Other package managers
        "vendor",
        "composer",
        "gradle",
        "maven",
    }
)

# Only skipped directly under a scan root
ROOT_SYSTEM_DIRECTORIES = frozenset(
    {
        "System Volume Information",
        "Recovery",
        "Windows",
        "Program Files",
        "Program Files (x86)",
    }
)

# The one hidden directory worth entering at the top of a scan
HIDDEN_ALLOWED = ".config"

# Kernel pseudo-filesystems on POSIX hosts
PSEUDO_FILESYSTEMS = frozenset({"proc", "sys", "dev"})

PROJECT_MARKERS = frozenset(
    {
        "package.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "lerna.json",
        "tsconfig.json",
        "webpack.config.js",
        "vite.config.ts",
        "angular.json",
        "vue.config.js",
        "next.config.js",
        "Cargo.toml",
        "pom.xml",
        "build.gradle",
        "requirements.txt",
    }
)

DEV_FOLDER_NAMES = frozenset(
    {
        "src",
        "lib",
        "app",
        "frontend",
        "backend",
        "client",
        "server",
        "components",
        "pages",
        "routes",
        "api",
        "services",
        "utils",
        "public",
        "assets",
        "styles",
        "scripts",
        "tests",
        "docs",
    }
)


def should_skip_directory(name: str, depth: int) -> bool:
    """
    Decide whether a directory should be pruned without enumerating it.

    Build, VCS and cache folders are skipped at every depth. Hidden folders
    (other than ``.config``) and OS system folders are only noise directly
    under a scan root, so they are skipped at depth 0 only.

    Args:
        name: Base name of the directory
        depth: Depth of the directory's parent relative to the scan root

    Returns:
        True if the directory should not be scanned
    """
    if name in SKIP_DIRECTORIES:
        return True

    if depth == 0:
        if name.startswith(".") and name != HIDDEN_ALLOWED:
            return True
        if name in ROOT_SYSTEM_DIRECTORIES:
            return True

    return False


def is_pseudo_filesystem(name: str) -> bool:
    """Return True for kernel pseudo-filesystem mount names (proc, sys, dev)."""
    return name in PSEUDO_FILESYSTEMS


def has_project_marker(path: Path) -> bool:
    """Check the immediate files of ``path`` for a known project marker."""
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.name in PROJECT_MARKERS and entry.is_file(follow_symlinks=False):
                        return True
                except OSError:
                    continue
    except OSError as e:
        log.debug("Cannot read %s for project markers: %s", path, e)
    return False


def should_scan_subdirectory(path: Path, depth: int) -> bool:
    """
    Decide whether a subdirectory is worth descending into.

    Args:
        path: The candidate subdirectory
        depth: Depth of its parent relative to the scan root

    Returns:
        True if the scanner should push the directory onto its stack
    """
    if depth >= MAX_SCAN_DEPTH:
        return False

    if has_project_marker(path):
        return True

    # Markers often live one level above these
    if Path(path).name in DEV_FOLDER_NAMES:
        return True

    return depth < PERMISSIVE_DEPTH
