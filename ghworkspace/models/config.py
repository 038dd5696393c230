"""Configuration models for clone runs and the user settings file."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ghworkspace.errors import SettingsError
from ghworkspace.models.workspace import Editor


def default_processes() -> int:
    """Number of logical CPUs minus one, never less than one."""
    return max((os.cpu_count() or 1) - 1, 1)


def get_user_config_dir() -> Path:
    """Per-user configuration directory."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ghworkspace"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ghworkspace"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ghworkspace"
    return Path.home() / ".config" / "ghworkspace"


def get_settings_file() -> Path:
    return get_user_config_dir() / "config.yaml"


class Settings(BaseModel):
    """Defaults read from the user's config.yaml.

    Command line options always win over values found here.
    """

    processes: int | None = Field(default=None, ge=1, description="Concurrent clone processes")
    prune: bool = Field(default=True, description="Remove folders of deleted repositories")
    editor: Editor = Field(default=Editor.CODE, description="Workspace file to generate")
    gh_path: str = Field(default="gh", description="GitHub CLI executable")
    update_check: bool = Field(default=True, description="Check for new releases on `version`")

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_yaml(cls, path: Path) -> Settings:
        """Load settings from a YAML file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings file {path}:\n{e}") from e

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings, falling back to defaults when no file exists."""
        path = path or get_settings_file()
        if not path.exists():
            return cls()
        return cls.from_yaml(path)


class CloneConfig(BaseModel):
    """Options for one `clone` invocation."""

    target_folder: Path | None = Field(
        default=None, description="Destination folder, defaults to the owner login"
    )
    limit: int | None = Field(default=None, ge=0, description="Maximum repositories to fetch")
    processes: int = Field(default_factory=default_processes, ge=1)
    prune: bool = False
    editor: Editor = Editor.CODE
    gh_path: str = "gh"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> CloneConfig:
        """Layer explicit overrides (None means unset) over settings."""
        values: dict[str, Any] = {
            "prune": settings.prune,
            "editor": settings.editor,
            "gh_path": settings.gh_path,
        }
        if settings.processes is not None:
            values["processes"] = settings.processes
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
