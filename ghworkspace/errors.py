"""Exceptions raised by ghworkspace.

Per-repository clone failures and per-directory prune failures are never
raised; they are logged and counted. Everything here aborts the run.
"""

from __future__ import annotations


class WorkspaceError(Exception):
    """Base class for all ghworkspace errors."""


class SettingsError(WorkspaceError):
    """The settings file exists but cannot be read or validated."""


class InvalidLimitError(WorkspaceError):
    """A repository limit of zero was requested."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Invalid cloning limit: {limit}")
        self.limit = limit


class GitHubCliNotFoundError(WorkspaceError):
    """The GitHub CLI executable could not be started."""

    def __init__(self, executable: str) -> None:
        super().__init__(
            f"GitHub CLI ({executable}) was not found. Install it from https://cli.github.com/"
        )
        self.executable = executable


class RepoListError(WorkspaceError):
    """Listing the repositories of an owner failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class OwnerNotFoundError(RepoListError):
    """The user or organization is unknown (gh exit code 1)."""


class ListCancelledError(RepoListError):
    """The listing command was cancelled (gh exit code 2)."""


class GitHubCliInternalError(RepoListError):
    """gh reported an internal error (gh exit code 3)."""


class NotAuthenticatedError(RepoListError):
    """gh is not logged in (gh exit code 4)."""


class RepoListParseError(RepoListError):
    """gh printed something that is not a repository list."""


class NoRepositoriesError(WorkspaceError):
    """The owner has no repositories."""

    def __init__(self, owner: str) -> None:
        super().__init__(f"No repositories found for {owner}")
        self.owner = owner


class DestinationError(WorkspaceError):
    """The destination folder cannot be created or opened."""


class CloneLaunchError(WorkspaceError):
    """A clone process could not be started."""
