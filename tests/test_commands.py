"""Tests for the host-facing command functions."""

from unittest.mock import MagicMock, patch

import pytest

from nodesweep.commands import (
    delete_node_modules,
    list_drives,
    open_folder_in_explorer,
    start_scan,
    start_scan_with_progress,
)
from nodesweep.errors import CommandError
from nodesweep.models import DriveInfo, ScanItem
from nodesweep.scanner import SCAN_PROGRESS_EVENT
from nodesweep.system import LinuxPlatform


@pytest.fixture
def project(tmp_path):
    proj = tmp_path / "proj"
    (proj / "node_modules" / ".bin").mkdir(parents=True)
    (proj / "node_modules" / "lodash").mkdir()
    (proj / "node_modules" / "lodash" / "package.json").write_text('{"name": "lodash"}')
    return proj


class TestStartScan:
    def test_scenario(self, project):
        items = start_scan([str(project)], include_sizes=True, platform=LinuxPlatform())

        assert items == [
            ScanItem(
                project_path=str(project),
                node_modules_path=str(project / "node_modules"),
                size=len('{"name": "lodash"}'),
            )
        ]

    def test_missing_root_returns_empty(self, tmp_path):
        assert start_scan([str(tmp_path / "nope")], include_sizes=False) == []


class TestStartScanWithProgress:
    def test_event_sequence(self, project):
        events = []

        items = start_scan_with_progress(
            [str(project)],
            include_sizes=False,
            sink=lambda name, progress: events.append((name, progress)),
        )

        assert len(items) == 1
        assert all(name == SCAN_PROGRESS_EVENT for name, _ in events)

        first = events[0][1]
        assert first.current_folder == "Starting scan..."
        assert not first.is_complete

        last = events[-1][1]
        assert last.is_complete
        assert last.current_folder == "Scan completed"
        assert last.node_modules_found == 1
        assert last.folders_scanned == last.total_folders_estimated

        assert [p.is_complete for _, p in events].count(True) == 1

    def test_completion_event_even_without_results(self, tmp_path):
        events = []

        items = start_scan_with_progress(
            [str(tmp_path)], include_sizes=False, sink=lambda name, p: events.append(p)
        )

        assert items == []
        assert events[-1].is_complete
        assert events[-1].node_modules_found == 0

    def test_broken_sink_still_returns_results(self, project):
        sink = MagicMock(side_effect=RuntimeError("display gone"))

        items = start_scan_with_progress([str(project)], include_sizes=False, sink=sink)

        assert len(items) == 1
        assert sink.call_count >= 2


class TestDeleteNodeModules:
    def test_scenario_moves_to_trash(self, project):
        with patch("nodesweep.system.send2trash") as mock_send2trash:
            results = delete_node_modules(
                [str(project / "node_modules")], platform=LinuxPlatform()
            )

        assert results[0].success
        mock_send2trash.assert_called_once_with(str(project / "node_modules"))

    def test_uses_explicit_trash(self, project):
        trash = MagicMock()

        results = delete_node_modules([str(project / "node_modules")], trash=trash)

        assert results[0].success
        trash.assert_called_once()

    def test_dry_run(self, project):
        trash = MagicMock()

        results = delete_node_modules([str(project / "node_modules")], dry_run=True, trash=trash)

        assert results[0].success
        trash.assert_not_called()


class TestHostCommands:
    def test_list_drives_delegates(self):
        platform = MagicMock()
        platform.list_drives.return_value = [DriveInfo(path="/", name="Root Directory")]

        assert list_drives(platform) == [DriveInfo(path="/", name="Root Directory")]

    def test_open_folder_delegates(self):
        platform = MagicMock()

        open_folder_in_explorer("/tmp", platform=platform)

        platform.open_folder.assert_called_once_with("/tmp")

    def test_open_folder_error_propagates(self):
        platform = MagicMock()
        platform.open_folder.side_effect = CommandError("No suitable file manager found")

        with pytest.raises(CommandError):
            open_folder_in_explorer("/tmp", platform=platform)
