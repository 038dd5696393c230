"""GitHub CLI adapter.

This module is the only place that knows the `gh` command lines and how to
interpret their exit codes.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ghworkspace.errors import (
    GitHubCliInternalError,
    GitHubCliNotFoundError,
    ListCancelledError,
    NotAuthenticatedError,
    OwnerNotFoundError,
    RepoListError,
    RepoListParseError,
)
from ghworkspace.models.repo import RepoInfo, parse_repo_list
from ghworkspace.process import ProcessLauncher

# gh has no "unlimited" value for --limit
DEFAULT_LIST_LIMIT = 100_000
LIST_FIELDS = "nameWithOwner,name,owner"


def clone_command(repo: RepoInfo, gh_path: str = "gh") -> list[str]:
    """Command that clones `repo` into a same-named folder of the working directory."""
    return [gh_path, "repo", "clone", repo.full_name]


def list_command(owner: str, limit: int | None = None, gh_path: str = "gh") -> list[str]:
    return [
        gh_path,
        "repo",
        "list",
        owner,
        "--json",
        LIST_FIELDS,
        "--limit",
        str(limit if limit is not None else DEFAULT_LIST_LIMIT),
    ]


class GitHubCli:
    """Lists repositories through the GitHub CLI."""

    def __init__(
        self,
        gh_path: str = "gh",
        launcher: ProcessLauncher | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.gh_path = gh_path
        self.launcher = launcher or ProcessLauncher()
        self.logger = logger or logging.getLogger(__name__)

    async def list_repos(self, owner: str, limit: int | None = None) -> list[RepoInfo]:
        """Fetch the repositories of a user or organization.

        Raises a RepoListError subclass matching the failure reported by gh.
        """
        cmd = list_command(owner, limit, self.gh_path)
        self.logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = await self.launcher.run(cmd)
        except FileNotFoundError as e:
            raise GitHubCliNotFoundError(self.gh_path) from e

        stderr = result.stderr.strip()
        if result.returncode == 0:
            try:
                return parse_repo_list(result.stdout)
            except ValidationError as e:
                raise RepoListParseError(
                    f"Failed to parse repository list: {result.stdout.strip()}"
                ) from e
        if result.returncode == 1:
            # Usually an unknown user or organization
            raise OwnerNotFoundError(stderr or f"Could not list repositories of {owner}", 1, stderr)
        if result.returncode == 2:
            raise ListCancelledError("Listing repositories was cancelled", 2, stderr)
        if result.returncode == 3:
            raise GitHubCliInternalError("The GitHub CLI failed unexpectedly", 3, stderr)
        if result.returncode == 4:
            raise NotAuthenticatedError("Please log in to gh using `gh auth login`", 4, stderr)
        raise RepoListError(
            f"Unexpected error: {result.returncode} (when fetching repositories of {owner})"
            + (f"\n{stderr}" if stderr else ""),
            result.returncode,
            stderr,
        )
