"""Tests for scan pruning decisions."""

from unittest.mock import patch

from nodesweep.classifier import (
    DEV_FOLDER_NAMES,
    MAX_SCAN_DEPTH,
    PROJECT_MARKERS,
    SKIP_DIRECTORIES,
    has_project_marker,
    is_pseudo_filesystem,
    should_scan_subdirectory,
    should_skip_directory,
)


class TestShouldSkipDirectory:
    def test_skips_node_modules_at_any_depth(self):
        assert should_skip_directory("node_modules", 0)
        assert should_skip_directory("node_modules", 3)

    def test_skips_git_at_root(self):
        assert should_skip_directory(".git", 0)

    def test_does_not_skip_config_at_root(self):
        assert not should_skip_directory(".config", 0)

    def test_skips_build_output_deep(self):
        for name in ("dist", "build", "target", ".next", "out"):
            assert should_skip_directory(name, 5), name

    def test_hidden_only_skipped_at_root(self):
        assert should_skip_directory(".hidden", 0)
        assert not should_skip_directory(".hidden", 1)

    def test_system_dirs_only_skipped_at_root(self):
        assert should_skip_directory("Program Files", 0)
        assert should_skip_directory("System Volume Information", 0)
        assert not should_skip_directory("Program Files", 2)

    def test_ordinary_names_not_skipped(self):
        assert not should_skip_directory("projects", 0)
        assert not should_skip_directory("my-app", 3)

    def test_skip_list_is_immutable(self):
        assert isinstance(SKIP_DIRECTORIES, frozenset)
        assert isinstance(PROJECT_MARKERS, frozenset)
        assert isinstance(DEV_FOLDER_NAMES, frozenset)


class TestIsPseudoFilesystem:
    def test_pseudo_filesystems(self):
        assert is_pseudo_filesystem("proc")
        assert is_pseudo_filesystem("sys")
        assert is_pseudo_filesystem("dev")

    def test_regular_names(self):
        assert not is_pseudo_filesystem("devtools")
        assert not is_pseudo_filesystem("home")


class TestHasProjectMarker:
    def test_detects_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text("{}")
        assert has_project_marker(tmp_path)

    def test_ignores_directory_named_like_marker(self, tmp_path):
        (tmp_path / "package.json").mkdir()
        assert not has_project_marker(tmp_path)

    def test_missing_directory(self, tmp_path):
        assert not has_project_marker(tmp_path / "missing")


class TestShouldScanSubdirectory:
    def test_marker_wins_regardless_of_name(self, tmp_path):
        folder = tmp_path / "whatever"
        folder.mkdir()
        (folder / "package.json").write_text("{}")

        assert should_scan_subdirectory(folder, 5)

    def test_other_ecosystem_markers(self, tmp_path):
        folder = tmp_path / "rusty"
        folder.mkdir()
        (folder / "Cargo.toml").write_text("[package]")

        assert should_scan_subdirectory(folder, 5)

    def test_unmarked_unnamed_deep_directory_rejected(self, tmp_path):
        folder = tmp_path / "random"
        folder.mkdir()

        assert not should_scan_subdirectory(folder, 5)
        assert not should_scan_subdirectory(folder, 4)

    def test_unmarked_unnamed_shallow_directory_accepted(self, tmp_path):
        folder = tmp_path / "random"
        folder.mkdir()

        assert should_scan_subdirectory(folder, 0)
        assert should_scan_subdirectory(folder, 3)

    def test_dev_folder_name_accepted_deep(self, tmp_path):
        folder = tmp_path / "src"
        folder.mkdir()

        assert should_scan_subdirectory(folder, 5)

    def test_depth_ceiling_beats_markers(self, tmp_path):
        folder = tmp_path / "src"
        folder.mkdir()
        (folder / "package.json").write_text("{}")

        assert not should_scan_subdirectory(folder, MAX_SCAN_DEPTH)
        assert not should_scan_subdirectory(folder, MAX_SCAN_DEPTH + 3)

    def test_unreadable_directory_falls_back_to_depth(self, tmp_path):
        folder = tmp_path / "locked"
        folder.mkdir()

        with patch("os.scandir", side_effect=PermissionError("Access denied")):
            assert should_scan_subdirectory(folder, 2)
            assert not should_scan_subdirectory(folder, 4)
