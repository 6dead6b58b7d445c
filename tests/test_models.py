"""Tests for data models."""

import pytest
from pydantic import ValidationError

from nodesweep.models import (
    DeleteFailure,
    DeleteResult,
    ScanItem,
    ScanProgress,
    format_size,
)


class TestFormatSize:
    def test_bytes(self):
        assert format_size(500) == "500 B"

    def test_kilobytes(self):
        assert format_size(5 * 1000) == "5.0 KB"

    def test_megabytes(self):
        assert format_size(5 * 1000**2) == "5.0 MB"

    def test_gigabytes(self):
        assert format_size(5 * 1000**3) == "5.0 GB"


class TestScanItem:
    def test_size_human(self):
        item = ScanItem(project_path="/p", node_modules_path="/p/node_modules", size=5_000_000)
        assert item.size_human == "5.0 MB"

    def test_unknown_size(self):
        item = ScanItem(project_path="/p", node_modules_path="/p/node_modules")
        assert item.size is None
        assert item.size_human == "unknown"

    def test_zero_size_is_not_unknown(self):
        item = ScanItem(project_path="/p", node_modules_path="/p/node_modules", size=0)
        assert item.size_human == "0 B"

    def test_immutable(self):
        item = ScanItem(project_path="/p", node_modules_path="/p/node_modules")
        with pytest.raises(ValidationError):
            item.size = 10

    def test_serializes(self):
        item = ScanItem(project_path="/p", node_modules_path="/p/node_modules", size=1)
        assert item.model_dump() == {
            "project_path": "/p",
            "node_modules_path": "/p/node_modules",
            "size": 1,
        }


class TestScanProgress:
    def test_defaults(self):
        progress = ScanProgress(current_folder="Starting scan...")

        assert progress.folders_scanned == 0
        assert progress.total_folders_estimated == 0
        assert progress.node_modules_found == 0
        assert progress.directories_skipped == 0
        assert progress.is_complete is False


class TestDeleteResult:
    def test_success(self):
        result = DeleteResult(path="/p/node_modules", success=True)
        assert result.error is None
        assert result.reason is None

    def test_failure_reason(self):
        result = DeleteResult(
            path="/p/node_modules",
            success=False,
            error="Path does not exist",
            reason=DeleteFailure.NOT_FOUND,
        )
        assert result.reason == "not_found"

    def test_immutable(self):
        result = DeleteResult(path="/p/node_modules", success=True)
        with pytest.raises(ValidationError):
            result.success = False
