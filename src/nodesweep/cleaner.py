"""Safe removal of node_modules directories.

Nothing is ever deleted permanently: a path that clears every safety gate is
moved to the OS trash.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Optional

from nodesweep.classifier import NODE_MODULES
from nodesweep.models import DeleteFailure, DeleteResult
from nodesweep.system import current_platform
from nodesweep.validator import is_legitimate_node_modules

log = logging.getLogger(__name__)

TrashFunc = Callable[[Path], None]


def _is_link_or_junction(path: Path) -> bool:
    if path.is_symlink():
        return True
    # Junctions are reparse points that is_symlink() does not report
    attributes = getattr(os.lstat(path), "st_file_attributes", 0)
    return bool(attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT)


def _rejected(path: str, reason: DeleteFailure, message: str) -> DeleteResult:
    log.warning("Refusing to delete %s: %s", path, message)
    return DeleteResult(path=path, success=False, error=message, reason=reason)


def check_deletable(path: str) -> Optional[DeleteResult]:
    """
    Run the safety gates for a deletion request.

    Gates run in order and stop at the first failure:
    exists, is a directory, is not a link, is named node_modules,
    looks like a real dependency folder. A path that cannot even be
    stat'ed fails the first gate with the OS error in the message.

    Args:
        path: Requested path

    Returns:
        A failed DeleteResult describing the gate that failed, or None if
        the path may be trashed
    """
    path_obj = Path(path)

    try:
        if not path_obj.exists():
            return _rejected(path, DeleteFailure.NOT_FOUND, "Path does not exist")

        if not path_obj.is_dir():
            return _rejected(path, DeleteFailure.NOT_A_DIRECTORY, "Path is not a directory")

        is_link = _is_link_or_junction(path_obj)
    except OSError as e:
        return _rejected(path, DeleteFailure.NOT_FOUND, f"Path cannot be accessed: {e}")

    if is_link:
        return _rejected(
            path,
            DeleteFailure.SYMLINK,
            "Path is a symbolic link or junction; refusing to follow it",
        )

    if path_obj.name != NODE_MODULES:
        return _rejected(path, DeleteFailure.WRONG_NAME, "Path does not end with 'node_modules'")

    if not is_legitimate_node_modules(path_obj):
        return _rejected(
            path,
            DeleteFailure.NOT_LEGITIMATE,
            "Safety check failed: This doesn't appear to be a legitimate node_modules directory",
        )

    return None


def delete_single_node_modules(
    path: str,
    trash: Optional[TrashFunc] = None,
    dry_run: bool = False,
) -> DeleteResult:
    """
    Move one node_modules directory to the trash after the safety gates pass.

    Args:
        path: Path to a node_modules directory
        trash: Function that moves a path to the trash (defaults to the
            current platform's trash)
        dry_run: If True, run every check but leave the directory in place

    Returns:
        DeleteResult for this path
    """
    rejection = check_deletable(path)
    if rejection is not None:
        return rejection

    if dry_run:
        log.info("Dry run: would move %s to trash", path)
        return DeleteResult(path=path, success=True)

    if trash is None:
        trash = current_platform().move_to_trash

    try:
        trash(Path(path))
    except OSError as e:
        log.error("Failed to move %s to trash: %s", path, e)
        return DeleteResult(
            path=path,
            success=False,
            error=f"Failed to delete: {e}",
            reason=DeleteFailure.TRASH_FAILED,
        )

    log.info("Moved %s to trash", path)
    return DeleteResult(path=path, success=True)


def delete_node_modules(
    paths: list[str],
    trash: Optional[TrashFunc] = None,
    dry_run: bool = False,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> list[DeleteResult]:
    """
    Delete several node_modules directories, one independent attempt each.

    A failure never stops the remaining paths and is never retried.

    Args:
        paths: Paths to delete, processed in the given order
        trash: Function that moves a path to the trash
        dry_run: If True, don't actually move anything
        progress_callback: Optional callback(path, current, total)

    Returns:
        One DeleteResult per input path, in the same order
    """
    results = []
    total = len(paths)

    for i, path in enumerate(paths):
        if progress_callback:
            progress_callback(path, i + 1, total)
        results.append(delete_single_node_modules(path, trash=trash, dry_run=dry_run))

    return results
