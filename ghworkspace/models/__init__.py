"""Data models for ghworkspace."""

from ghworkspace.models.config import CloneConfig, Settings
from ghworkspace.models.repo import RepoInfo, RepoOwner, parse_repo_list
from ghworkspace.models.workspace import Editor, WorkspaceFile, WorkspaceFolder

__all__ = [
    # Repository descriptors
    "RepoInfo",
    "RepoOwner",
    "parse_repo_list",
    # Configuration
    "CloneConfig",
    "Settings",
    # Workspace manifest
    "Editor",
    "WorkspaceFile",
    "WorkspaceFolder",
]
