"""User settings for nodesweep."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from nodesweep.errors import ConfigError


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


CONFIG_DIR = expand_path("~/.nodesweep")
CONFIG_FILE = CONFIG_DIR / "config.json"


class Settings(BaseModel):
    """Defaults applied when the CLI is not told otherwise."""

    default_roots: list[str] = Field(
        default_factory=lambda: ["~"], description="Roots scanned when none are given"
    )
    include_sizes: bool = Field(True, description="Measure node_modules sizes while scanning")
    dry_run: bool = Field(False, description="Never move anything to the trash")

    @property
    def expanded_roots(self) -> list[str]:
        return [str(expand_path(root)) for root in self.default_roots]


def config_path() -> Path:
    """Location of the config file (NODESWEEP_CONFIG overrides the default)."""
    override = os.environ.get("NODESWEEP_CONFIG")
    if override:
        return expand_path(override)
    return CONFIG_FILE


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from disk.

    Args:
        path: Config file to read (defaults to ``config_path()``)

    Returns:
        Settings, or defaults if the file does not exist

    Raises:
        ConfigError: The file exists but is not valid
    """
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> bool:
    """Save settings to disk. Returns False if the file could not be written."""
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(settings.model_dump(), f, indent=2)
        return True
    except OSError:
        return False
