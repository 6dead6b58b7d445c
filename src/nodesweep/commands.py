"""Operations exposed to a host application (CLI, GUI, scripts)."""

import logging
from typing import Optional

from nodesweep.cleaner import TrashFunc
from nodesweep.cleaner import delete_node_modules as _delete_node_modules
from nodesweep.models import DeleteResult, DriveInfo, ScanItem, ScanProgress
from nodesweep.scanner import ProgressSink, emit_progress, scan_roots
from nodesweep.system import Platform, current_platform

log = logging.getLogger(__name__)


def list_drives(platform: Optional[Platform] = None) -> list[DriveInfo]:
    """List top-level locations that can be used as scan roots."""
    return (platform or current_platform()).list_drives()


def start_scan(
    roots: list[str],
    include_sizes: bool,
    platform: Optional[Platform] = None,
) -> list[ScanItem]:
    """Scan ``roots`` to completion without progress events."""
    platform = platform or current_platform()
    report = scan_roots(
        roots,
        include_sizes,
        skip_pseudo_filesystems=platform.excludes_pseudo_filesystems,
    )
    return report.items


def start_scan_with_progress(
    roots: list[str],
    include_sizes: bool,
    sink: ProgressSink,
    platform: Optional[Platform] = None,
) -> list[ScanItem]:
    """
    Scan ``roots`` while sending ``scan_progress`` events to ``sink``.

    The sink receives a starting event, the scanner's own snapshots, and a
    final event with ``is_complete=True`` carrying the final totals.

    Args:
        roots: Root directories to scan
        include_sizes: Measure each node_modules found
        sink: Callable(event_name, ScanProgress)
        platform: Host platform (defaults to the running one)

    Returns:
        ScanItems in discovery order
    """
    platform = platform or current_platform()

    emit_progress(sink, ScanProgress(current_folder="Starting scan..."))

    report = scan_roots(
        roots,
        include_sizes,
        sink=sink,
        skip_pseudo_filesystems=platform.excludes_pseudo_filesystems,
    )

    counters = report.counters
    emit_progress(
        sink,
        ScanProgress(
            current_folder="Scan completed",
            folders_scanned=counters.folders_scanned,
            total_folders_estimated=counters.folders_scanned,
            node_modules_found=counters.node_modules_found,
            directories_skipped=counters.directories_skipped,
            is_complete=True,
        ),
    )
    log.info(
        "Scan finished: %d folders, %d node_modules, %d skipped",
        counters.folders_scanned,
        counters.node_modules_found,
        counters.directories_skipped,
    )

    return report.items


def delete_node_modules(
    paths: list[str],
    dry_run: bool = False,
    platform: Optional[Platform] = None,
    trash: Optional[TrashFunc] = None,
) -> list[DeleteResult]:
    """Move each path to the trash after the safety gates; one result per path."""
    if trash is None:
        trash = (platform or current_platform()).move_to_trash
    return _delete_node_modules(paths, trash=trash, dry_run=dry_run)


def open_folder_in_explorer(path: str, platform: Optional[Platform] = None) -> None:
    """Open ``path`` in the native file manager. Raises CommandError on failure."""
    (platform or current_platform()).open_folder(path)
