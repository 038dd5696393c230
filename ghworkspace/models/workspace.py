"""Editor workspace manifest models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Editor(str, Enum):
    """Editor to generate a workspace file for."""

    AUTO = "auto"  # Detect from what already sits in the target folder
    NONE = "none"  # Do not write a workspace file
    CODE = "code"  # Visual Studio Code
    SUBLIME = "sublime"  # Sublime Text

    @property
    def filename(self) -> str | None:
        """Name of the manifest file, or None when nothing is written."""
        if self == Editor.CODE:
            return "workspace.code-workspace"
        if self == Editor.SUBLIME:
            return "workspace.sublime-project"
        return None


class WorkspaceFolder(BaseModel):
    """A single folder entry of a workspace manifest."""

    path: str


class WorkspaceFile(BaseModel):
    """Workspace manifest shared by VS Code and Sublime Text."""

    folders: list[WorkspaceFolder] = Field(default_factory=list)

    @classmethod
    def from_names(cls, names: list[str]) -> WorkspaceFile:
        return cls(folders=[WorkspaceFolder(path=name) for name in names])
