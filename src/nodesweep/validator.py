"""Legitimacy checks run right before a node_modules directory is trashed.

Discovery trusts the directory name. Deletion does not: the candidate must
look like an installed dependency tree before it is touched.
"""

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

# Only the first entries of a directory are inspected
ENTRY_SCAN_LIMIT = 50

# Files a package manager leaves inside node_modules
NESTED_MANIFESTS = frozenset(
    {
        "package.json",
        "package-lock.json",
        ".package-lock.json",
        ".yarn-integrity",
        ".modules.yaml",
    }
)

# Files that mark the parent as a JavaScript project
PARENT_MANIFESTS = frozenset(
    {
        "package.json",
        "package-lock.json",
        "npm-shrinkwrap.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "bun.lockb",
        "bun.lock",
    }
)


def looks_like_package_dir(name: str) -> bool:
    """Names such as ``.bin``, ``.cache`` or ``lodash.merge``."""
    return "." in name and len(name) > 3


def has_parent_manifest(path: Path) -> bool:
    """Check whether the parent of ``path`` holds a package manifest or lockfile."""
    parent = Path(path).parent
    try:
        with os.scandir(parent) as entries:
            for count, entry in enumerate(entries, start=1):
                if count > ENTRY_SCAN_LIMIT:
                    break
                try:
                    if entry.is_symlink():
                        continue
                    if entry.name in PARENT_MANIFESTS and entry.is_file(follow_symlinks=False):
                        return True
                except OSError:
                    continue
    except OSError as e:
        log.debug("Cannot read parent %s: %s", parent, e)
    return False


def is_legitimate_node_modules(path: Path) -> bool:
    """
    Decide whether a directory really is an installed dependency folder.

    The content of the directory decides: either a package manager manifest
    sits directly inside it, or one of its subdirectories has a dotted
    package-like name. A missing manifest next to it is logged but does not
    block deletion.

    Args:
        path: Candidate node_modules directory

    Returns:
        True if the content signal fires, False otherwise (including empty
        or unreadable directories)
    """
    path = Path(path)
    has_manifest = False
    has_package_structure = False
    entry_count = 0

    try:
        with os.scandir(path) as entries:
            for entry in entries:
                entry_count += 1
                if entry_count > ENTRY_SCAN_LIMIT:
                    break
                try:
                    if entry.is_symlink():
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        if looks_like_package_dir(entry.name):
                            has_package_structure = True
                    elif entry.is_file(follow_symlinks=False):
                        if entry.name in NESTED_MANIFESTS:
                            has_manifest = True
                except OSError:
                    continue
                if has_manifest and has_package_structure:
                    break
    except OSError as e:
        log.warning("Cannot open %s for validation: %s", path, e)
        return False

    if entry_count == 0:
        log.info("%s is empty; not treating it as a dependency folder", path)
        return False

    if not has_parent_manifest(path):
        log.warning("No package manifest found next to %s", path)

    return has_manifest or has_package_structure
