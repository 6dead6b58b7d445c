"""Data models for nodesweep."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (decimal units)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


class DeleteFailure(str, Enum):
    """Which safety gate rejected a deletion request."""

    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    SYMLINK = "symlink"
    WRONG_NAME = "wrong_name"
    NOT_LEGITIMATE = "not_legitimate"
    TRASH_FAILED = "trash_failed"


class ScanItem(BaseModel):
    """A discovered node_modules directory and the project that owns it."""

    model_config = ConfigDict(frozen=True)

    project_path: str = Field(..., description="Directory containing node_modules")
    node_modules_path: str = Field(..., description="Full path of the node_modules directory")
    size: Optional[int] = Field(
        None, description="Total bytes, or None when sizes were skipped or unavailable"
    )

    @property
    def size_human(self) -> str:
        """Human-readable size, 'unknown' when not measured."""
        if self.size is None:
            return "unknown"
        return format_size(self.size)


class ScanProgress(BaseModel):
    """Snapshot of a scan in flight. Each emission is self-contained."""

    model_config = ConfigDict(frozen=True)

    current_folder: str = Field(..., description="Folder most recently visited")
    folders_scanned: int = Field(0, description="Folders enumerated so far")
    total_folders_estimated: int = Field(0, description="Progressive estimate of total folders")
    node_modules_found: int = Field(0, description="node_modules directories found so far")
    directories_skipped: int = Field(0, description="Directories pruned without enumeration")
    is_complete: bool = Field(False, description="True only on the final event")


class DeleteResult(BaseModel):
    """Outcome of one deletion attempt."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path that was requested for deletion")
    success: bool = Field(..., description="Whether the path was moved to the trash")
    error: Optional[str] = Field(None, description="Human-readable reason on failure")
    reason: Optional[DeleteFailure] = Field(None, description="Gate that rejected the path")


class DriveInfo(BaseModel):
    """A mountable top-level location that can be used as a scan root."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Mount point or drive root")
    name: str = Field(..., description="Display name")
