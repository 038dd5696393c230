"""Bounded pool of concurrent `gh repo clone` processes."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass
from pathlib import Path

from ghworkspace.errors import CloneLaunchError, GitHubCliNotFoundError
from ghworkspace.github import clone_command
from ghworkspace.models.repo import RepoInfo
from ghworkspace.process import Process, ProcessLauncher, decode


@dataclass
class CloneJob:
    """A running clone process and the repository it clones."""

    repo: RepoInfo
    process: Process
    output: asyncio.Future[tuple[bytes, bytes]]
    destination: Path

    @property
    def done(self) -> bool:
        return self.output.done()


@dataclass(frozen=True)
class JobResult:
    """Outcome of one finished clone."""

    repo: RepoInfo
    success: bool
    returncode: int
    stdout: str = ""
    stderr: str = ""


class ClonePool:
    """Runs clone processes and hands out their results as they finish.

    The pool itself never limits how many jobs are submitted; `run` keeps at
    most `processes` of them alive by submitting a replacement only after a
    result has been taken out with `next`.
    """

    def __init__(
        self,
        launcher: ProcessLauncher | None = None,
        gh_path: str = "gh",
        logger: logging.Logger | None = None,
    ) -> None:
        self.launcher = launcher or ProcessLauncher()
        self.gh_path = gh_path
        self.logger = logger or logging.getLogger(__name__)
        self._jobs: list[CloneJob] = []

    def __len__(self) -> int:
        return len(self._jobs)

    @property
    def running(self) -> list[CloneJob]:
        """Jobs submitted and not yet returned by `next`."""
        return list(self._jobs)

    async def submit(self, repo: RepoInfo, destination: Path) -> CloneJob:
        """Start cloning `repo` into `destination/<repo.name>`."""
        cmd = clone_command(repo, self.gh_path)
        try:
            process = await self.launcher.spawn(cmd, cwd=destination)
        except FileNotFoundError as e:
            raise GitHubCliNotFoundError(self.gh_path) from e
        except OSError as e:
            raise CloneLaunchError(f"Failed to start cloning {repo.full_name}: {e}") from e

        # Pipes are drained while the process runs; a full pipe buffer stalls it
        output = asyncio.ensure_future(process.communicate())
        job = CloneJob(repo=repo, process=process, output=output, destination=destination)
        self._jobs.append(job)
        self.logger.debug(f"Started {' '.join(cmd)} in {destination}")
        return job

    async def next(self) -> JobResult | None:
        """Wait for any job to finish and return its result.

        Returns None right away when no job is running. If several jobs have
        finished, the one submitted first is returned.
        """
        if not self._jobs:
            return None

        if not any(job.done for job in self._jobs):
            await asyncio.wait(
                [job.output for job in self._jobs],
                return_when=asyncio.FIRST_COMPLETED,
            )

        job = next(job for job in self._jobs if job.done)
        self._jobs.remove(job)
        return self._collect(job)

    async def run(
        self,
        repos: Iterable[RepoInfo],
        destination: Path,
        processes: int,
    ) -> AsyncIterator[JobResult]:
        """Clone every repository with at most `processes` running at once.

        Results are yielded in completion order.
        """
        if processes < 1:
            raise ValueError(f"processes must be at least 1, got {processes}")

        queue = deque(repos)
        try:
            for _ in range(min(processes, len(queue))):
                await self.submit(queue.popleft(), destination)

            while self._jobs:
                result = await self.next()
                if queue:
                    await self.submit(queue.popleft(), destination)
                yield result
        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        """Terminate every running clone and wait for it to exit.

        Does nothing once all jobs have been taken out with `next`.
        """
        jobs, self._jobs = self._jobs, []
        for job in jobs:
            if job.done:
                continue
            try:
                job.process.terminate()
            except ProcessLookupError:
                pass
            self.logger.warning(f"Stopped cloning {job.repo.full_name}")
        await asyncio.gather(*(job.output for job in jobs), return_exceptions=True)

    def _collect(self, job: CloneJob) -> JobResult:
        repo = job.repo
        try:
            stdout, stderr = job.output.result()
        except OSError as e:
            self.logger.error(f"Lost output of clone {repo.full_name}: {e}")
            return JobResult(repo=repo, success=False, returncode=-1, stderr=str(e))

        returncode = job.process.returncode
        if returncode is None:
            returncode = -1
        result = JobResult(
            repo=repo,
            success=returncode == 0,
            returncode=returncode,
            stdout=decode(stdout),
            stderr=decode(stderr),
        )

        if returncode == 0:
            self.logger.info(f"Cloned {repo.full_name}")
        elif returncode == 1:
            self.logger.error(f"Failed to clone {repo.full_name}: {result.stderr.strip()}")
        else:
            self.logger.error(
                f"Unexpected error: {returncode} (when cloning {repo.full_name})\n"
                f"{result.stderr.strip()}"
            )
        return result
