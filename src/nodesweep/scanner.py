"""Discovery of node_modules directories across one or more roots."""

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from nodesweep.classifier import (
    MAX_SCAN_DEPTH,
    NODE_MODULES,
    SKIP_DIRECTORIES,
    is_pseudo_filesystem,
    should_scan_subdirectory,
    should_skip_directory,
)
from nodesweep.models import ScanItem, ScanProgress
from nodesweep.sizer import SizeWorker

log = logging.getLogger(__name__)

SCAN_PROGRESS_EVENT = "scan_progress"

# Pause after each folder so a host UI stays responsive
YIELD_SECONDS = 0.0005

ProgressSink = Callable[[str, ScanProgress], None]


@dataclass
class ScanCounters:
    """Running totals for one scan call, shared across its roots."""

    folders_scanned: int = 0
    node_modules_found: int = 0
    directories_skipped: int = 0


@dataclass
class ScanReport:
    """Everything a multi-root scan produced."""

    items: list[ScanItem] = field(default_factory=list)
    counters: ScanCounters = field(default_factory=ScanCounters)


def emit_progress(sink: Optional[ProgressSink], progress: ScanProgress) -> None:
    """Hand a progress snapshot to the sink. Sink failures never stop a scan."""
    if sink is None:
        return
    try:
        sink(SCAN_PROGRESS_EVENT, progress)
    except Exception as e:
        log.warning("Failed to emit progress: %s", e)


def scan_root(
    root: Path,
    include_sizes: bool,
    counters: ScanCounters,
    sink: Optional[ProgressSink] = None,
    size_worker: Optional[SizeWorker] = None,
    skip_pseudo_filesystems: bool = True,
) -> list[ScanItem]:
    """
    Walk a single root depth-first and collect node_modules directories.

    Uses an explicit stack of (path, depth) frames rather than recursion.
    Matched node_modules directories are never entered, so nested
    dependency trees are not reported. A root that is itself a
    node_modules or a build/cache folder is not walked at all.

    Args:
        root: Directory to start from
        include_sizes: Measure each match with the size estimator
        counters: Totals to update (shared with other roots of the same call)
        sink: Optional progress sink
        size_worker: Worker used for size measurement; one is created if needed
        skip_pseudo_filesystems: Prune proc/sys/dev mounts

    Returns:
        ScanItems in discovery order
    """
    root = Path(root)
    if root.name == NODE_MODULES or root.name in SKIP_DIRECTORIES:
        log.info("Skipping %s: not a project tree", root)
        counters.directories_skipped += 1
        return []

    if include_sizes and size_worker is None:
        with SizeWorker() as worker:
            return scan_root(root, include_sizes, counters, sink, worker, skip_pseudo_filesystems)

    results: list[ScanItem] = []
    stack: list[tuple[Path, int]] = [(root, 0)]

    while stack:
        current, depth = stack.pop()

        try:
            with os.scandir(current) as entries:
                children = list(entries)
        except OSError as e:
            log.debug("Cannot read %s: %s", current, e)
            children = []

        for entry in children:
            try:
                # Never follow links or junctions
                if entry.is_symlink() or not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue

            name = entry.name
            child = Path(entry.path)

            if name == NODE_MODULES:
                size = size_worker.measure(child) if include_sizes else None
                results.append(
                    ScanItem(
                        project_path=str(current),
                        node_modules_path=str(child),
                        size=size,
                    )
                )
                counters.node_modules_found += 1
                log.debug("Found %s", child)
                continue

            if (skip_pseudo_filesystems and is_pseudo_filesystem(name)) or should_skip_directory(
                name, depth
            ):
                counters.directories_skipped += 1
                continue

            if depth < MAX_SCAN_DEPTH and should_scan_subdirectory(child, depth):
                stack.append((child, depth + 1))
            else:
                counters.directories_skipped += 1

        counters.folders_scanned += 1

        if sink is not None:
            emit_progress(
                sink,
                ScanProgress(
                    current_folder=str(current),
                    folders_scanned=counters.folders_scanned,
                    total_folders_estimated=counters.folders_scanned + len(stack),
                    node_modules_found=counters.node_modules_found,
                    directories_skipped=counters.directories_skipped,
                    is_complete=False,
                ),
            )

        time.sleep(YIELD_SECONDS)

    return results


def scan_roots(
    roots: list[str],
    include_sizes: bool,
    sink: Optional[ProgressSink] = None,
    skip_pseudo_filesystems: bool = True,
) -> ScanReport:
    """
    Scan several roots one after another.

    Roots that are missing, unreachable or not directories are skipped. Any
    error while scanning one root is logged and the remaining roots are
    still scanned.

    Args:
        roots: Root directories to scan
        include_sizes: Measure each node_modules found
        sink: Optional progress sink
        skip_pseudo_filesystems: Prune proc/sys/dev mounts

    Returns:
        ScanReport with items in per-root discovery order and final counters
    """
    report = ScanReport()

    with SizeWorker() as worker:
        for root in roots:
            root_path = Path(root)
            try:
                if not root_path.is_dir():
                    log.info("Skipping %s: not a directory", root)
                    continue

                items = scan_root(
                    root_path,
                    include_sizes,
                    report.counters,
                    sink=sink,
                    size_worker=worker,
                    skip_pseudo_filesystems=skip_pseudo_filesystems,
                )
            except Exception:
                log.exception("Error scanning %s", root)
                continue

            report.items.extend(items)

    return report
