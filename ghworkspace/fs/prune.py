"""Removal of local folders whose repository no longer exists."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ghworkspace.errors import DestinationError
from ghworkspace.fs.delete import DeleteErrorKind, DeleteOutcome, RecursiveDeleter, default_deleter
from ghworkspace.models.repo import RepoInfo

_FAILURE_MESSAGES: dict[DeleteErrorKind, str] = {
    DeleteErrorKind.ACCESS_DENIED: (
        "Access denied when deleting {name}. Please run the command as an administrator"
    ),
    DeleteErrorKind.BUSY: "{name} is busy, close any program using it and run the command again",
    DeleteErrorKind.NOT_EMPTY: "{name} could not be emptied, files were added while deleting it",
    DeleteErrorKind.NOT_FOUND: "{name} disappeared before it could be deleted",
    DeleteErrorKind.PATH_TOO_LONG: "Path name too long when deleting {name}",
    DeleteErrorKind.OTHER: "Failed to delete {name}",
}


@dataclass
class PruneResult:
    """Folders removed and folders that could not be removed."""

    removed: list[str] = field(default_factory=list)
    failed: list[tuple[str, DeleteErrorKind]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.removed) + len(self.failed)


def stray_folders(repos: Iterable[RepoInfo], target_folder: Path) -> list[str]:
    """Names of the directories in `target_folder` matching no repository.

    Files and symlinks are ignored. The result is sorted.
    """
    wanted = {repo.name for repo in repos}
    try:
        entries = list(target_folder.iterdir())
    except OSError as e:
        raise DestinationError(
            f"Cannot open destination folder {target_folder}: {e.strerror or e}"
        ) from e

    return sorted(
        entry.name
        for entry in entries
        if entry.is_dir() and not entry.is_symlink() and entry.name not in wanted
    )


class Pruner:
    """Deletes folders of repositories that left the user/organization."""

    def __init__(
        self,
        deleter: RecursiveDeleter | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.deleter = deleter or default_deleter()
        self.logger = logger or logging.getLogger(__name__)

    def prune(self, repos: Iterable[RepoInfo], target_folder: Path) -> PruneResult:
        """Remove every directory of `target_folder` not named after a repository.

        All candidates are collected before the first deletion. A failed
        deletion is logged and the remaining ones still run.
        """
        result = PruneResult()
        for name in stray_folders(repos, target_folder):
            outcome = self.deleter.delete(target_folder / name)
            if outcome.ok:
                self.logger.info(
                    f"Removed {name} as it no longer belongs to the user/organization"
                )
                result.removed.append(name)
            else:
                self._log_failure(name, outcome)
                result.failed.append((name, outcome.kind))
        return result

    def _log_failure(self, name: str, outcome: DeleteOutcome) -> None:
        message = _FAILURE_MESSAGES[outcome.kind].format(name=name)
        if outcome.detail:
            message = f"{message} ({outcome.detail})"
        self.logger.error(message)
