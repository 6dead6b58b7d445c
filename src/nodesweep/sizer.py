"""Bounded directory size estimation."""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

# Give up on a single directory after this many seconds
SIZE_TIMEOUT_SECONDS = 30.0

# Directories nested deeper than this below the measured root are not walked
SIZE_MAX_DEPTH = 10

# Yield to other threads after this many processed entries
YIELD_EVERY = 1000


def estimate_directory_size(
    path: Path,
    timeout: float = SIZE_TIMEOUT_SECONDS,
    max_depth: int = SIZE_MAX_DEPTH,
) -> Optional[int]:
    """
    Calculate the total size of a directory tree under time and depth caps.

    Uses an explicit stack and os.scandir. Symlinks are never followed or
    counted, including the root itself. Unreadable subdirectories contribute
    nothing.

    Args:
        path: Directory to measure
        timeout: Wall-clock budget in seconds
        max_depth: Maximum depth below ``path`` to walk

    Returns:
        Total bytes of regular files, or None if the root is a symlink, is
        not an accessible directory, or the time budget ran out. A partial
        total is never returned.
    """
    root = Path(path)
    if root.is_symlink() or not root.is_dir():
        return None

    deadline = time.monotonic() + timeout
    total_size = 0
    processed = 0
    stack: list[tuple[str, int]] = [(str(root), 0)]

    while stack:
        if time.monotonic() >= deadline:
            log.info("Size calculation for %s timed out after %.0fs", root, timeout)
            return None

        current, depth = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    processed += 1
                    if processed % YIELD_EVERY == 0:
                        time.sleep(0)
                        if time.monotonic() >= deadline:
                            log.info("Size calculation for %s timed out after %.0fs", root, timeout)
                            return None
                    try:
                        if entry.is_symlink():
                            continue
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False) and depth < max_depth:
                            stack.append((entry.path, depth + 1))
                    except OSError:
                        continue
        except OSError as e:
            if depth == 0:
                log.debug("Cannot open %s for sizing: %s", root, e)
                return None
            log.debug("Skipping unreadable directory %s: %s", current, e)

    return total_size


class SizeWorker:
    """Run size estimates on a worker thread while the caller waits.

    The scanner blocks on ``measure`` so sizes are always known before it
    moves on to the next sibling.
    """

    def __init__(self, timeout: float = SIZE_TIMEOUT_SECONDS, max_depth: int = SIZE_MAX_DEPTH):
        self.timeout = timeout
        self.max_depth = max_depth
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> "SizeWorker":
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="nodesweep-size")
        return self

    def __exit__(self, *exc_info) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def measure(self, path: Path) -> Optional[int]:
        """Measure ``path`` on the worker thread and wait for the result."""
        if self._executor is None:
            return estimate_directory_size(path, self.timeout, self.max_depth)
        future = self._executor.submit(estimate_directory_size, path, self.timeout, self.max_depth)
        return future.result()
