"""End-to-end control loop of `ghworkspace clone`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ghworkspace.clone.pool import ClonePool, JobResult
from ghworkspace.errors import InvalidLimitError, NoRepositoriesError
from ghworkspace.fs.folders import create_folder, ensure_listable, is_empty_folder
from ghworkspace.fs.prune import Pruner, PruneResult
from ghworkspace.fs.workspace import write_workspace
from ghworkspace.github import GitHubCli
from ghworkspace.models.config import CloneConfig
from ghworkspace.models.repo import RepoInfo


@dataclass
class CloneSummary:
    """Tally of one clone run."""

    target_folder: Path
    total: int
    failed: int = 0
    skipped: list[str] = field(default_factory=list)
    results: list[JobResult] = field(default_factory=list)
    pruned: PruneResult | None = None
    workspace_file: Path | None = None

    @property
    def cloned(self) -> int:
        return self.total - self.failed

    @property
    def message(self) -> str:
        if self.failed:
            return f"Cloned {self.cloned}/{self.total} repositories"
        return f"Cloned all {self.total} repositories"


class CloneOrchestrator:
    """Clones all repositories of a user or organization.

    Collaborators are injected; anything left out is built from the
    CloneConfig handed to `clone`.
    """

    def __init__(
        self,
        github: GitHubCli | None = None,
        pool: ClonePool | None = None,
        pruner: Pruner | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.github = github
        self.pool = pool
        self.pruner = pruner
        self.logger = logger or logging.getLogger(__name__)

    async def clone(self, owner: str, config: CloneConfig) -> CloneSummary:
        """Clone every repository of `owner` as configured.

        Steps:
            1. Fetch the repository list
            2. Create the target folder (owner login by default)
            3. Prune stray folders if the target already existed
            4. Skip repositories whose folder is not empty
            5. Clone the rest with at most `config.processes` at once
            6. Write the editor workspace file
        """
        if config.limit == 0:
            raise InvalidLimitError(config.limit)

        github = self.github
        if github is None:
            github = GitHubCli(config.gh_path, logger=self.logger)
        repos = await github.list_repos(owner, config.limit)
        if not repos:
            raise NoRepositoriesError(owner)

        target = config.target_folder or Path(repos[0].owner_login)
        created = create_folder(target, self.logger)

        summary = CloneSummary(target_folder=target, total=len(repos))

        if not created and config.prune:
            pruner = self.pruner
            if pruner is None:
                pruner = Pruner(logger=self.logger)
            summary.pruned = pruner.prune(repos, target)

        schedule, skipped = self.build_schedule(repos, target)
        summary.skipped = skipped
        summary.failed = len(skipped)

        if schedule:
            pool = self.pool
            if pool is None:
                pool = ClonePool(gh_path=config.gh_path, logger=self.logger)
            processes = min(config.processes, len(schedule))
            self.logger.debug(f"Cloning {len(schedule)} repositories with {processes} processes")
            async for result in pool.run(schedule, target, processes):
                summary.results.append(result)
                if not result.success:
                    self.logger.error(f"Failed to clone {result.repo.name}")
                    summary.failed += 1

        self.logger.info(summary.message)

        summary.workspace_file = write_workspace(
            target, [repo.name for repo in repos], config.editor
        )
        return summary

    def build_schedule(self, repos: list[RepoInfo], target: Path) -> tuple[list[RepoInfo], list[str]]:
        """Split repositories into those to clone and those to skip.

        A repository is skipped when its folder already holds anything, or
        when an earlier repository already claimed the same folder name.
        """
        ensure_listable(target)

        schedule: list[RepoInfo] = []
        skipped: list[str] = []
        seen: set[str] = set()

        for repo in repos:
            if repo.name in seen:
                self.logger.warning(
                    f"Folder {repo.name} is already claimed by another repository, "
                    f"cancelling clone of {repo.full_name}."
                )
                skipped.append(repo.name)
                continue
            seen.add(repo.name)

            if not is_empty_folder(target, repo.name, self.logger):
                self.logger.warning(
                    f"Folder {repo.name} is not empty, cancelling clone for this repo."
                )
                skipped.append(repo.name)
                continue

            schedule.append(repo)

        return schedule, skipped
