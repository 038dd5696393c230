"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from ghworkspace.models.repo import RepoInfo


@pytest.fixture(scope="session")
def event_loop_policy():
    """Use default event loop policy for async tests."""
    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo what the CLI's setup_logging does so caplog keeps working."""
    yield
    package_logger = logging.getLogger("ghworkspace")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def build_repo(name: str, owner: str = "octo") -> RepoInfo:
    return RepoInfo.model_validate(
        {
            "name": name,
            "nameWithOwner": f"{owner}/{name}",
            "owner": {"id": "MDQ6VXNlcjE=", "login": owner},
        }
    )


@pytest.fixture
def make_repo() -> Callable[..., RepoInfo]:
    """Factory for repository descriptors as gh would report them."""
    return build_repo


@pytest.fixture
def gh_repo_list_json() -> str:
    """Sample `gh repo list --json nameWithOwner,name,owner` output."""
    return (
        '[{"name":"api","nameWithOwner":"octo-org/api",'
        '"owner":{"id":"O_kgDOAbCdEf","login":"octo-org"}},'
        '{"name":"web","nameWithOwner":"octo-org/web",'
        '"owner":{"id":"O_kgDOAbCdEf","login":"octo-org"}}]'
    )


class FakeProcess:
    """Stands in for asyncio.subprocess.Process."""

    def __init__(
        self,
        launcher: FakeLauncher,
        name: str,
        exit_code: int,
        stderr: str,
        delay: float,
    ) -> None:
        self.name = name
        self.returncode: int | None = None
        self._launcher = launcher
        self._exit_code = exit_code
        self._stderr = stderr
        self._delay = delay
        self._finished = asyncio.Event()

    def finish(self) -> None:
        self._finished.set()

    def terminate(self) -> None:
        self._exit_code = -15
        self._launcher.terminated.append(self.name)
        self._finished.set()

    async def communicate(self, input: bytes | None = None) -> tuple[bytes, bytes]:
        if self._launcher.manual:
            await self._finished.wait()
        else:
            try:
                await asyncio.wait_for(self._finished.wait(), self._delay)
            except asyncio.TimeoutError:
                pass
        self.returncode = self._exit_code
        self._launcher.running -= 1
        self._launcher.finished.append(self.name)
        return f"Cloning into '{self.name}'...\n".encode(), self._stderr.encode()


class FakeLauncher:
    """Process launcher whose clones finish on a timer or on demand.

    Set `manual` to keep every process running until `finish(name)`.
    """

    def __init__(self) -> None:
        self.outcomes: dict[str, tuple[int, str]] = {}
        self.delays: dict[str, float] = {}
        self.manual = False
        self.missing = False
        self.unstartable: set[str] = set()
        self.commands: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self.started: list[str] = []
        self.finished: list[str] = []
        self.terminated: list[str] = []
        self.processes: dict[str, FakeProcess] = {}
        self.running = 0
        self.peak = 0

    async def spawn(self, cmd: list[str], cwd: Path | None = None) -> FakeProcess:
        if self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])

        name = cmd[-1].split("/")[-1]
        if name in self.unstartable:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        exit_code, stderr = self.outcomes.get(name, (0, ""))
        process = FakeProcess(self, name, exit_code, stderr, self.delays.get(name, 0))

        self.commands.append(list(cmd))
        self.cwds.append(cwd)
        self.started.append(name)
        self.processes[name] = process
        self.running += 1
        self.peak = max(self.peak, self.running)
        return process

    def finish(self, name: str) -> None:
        self.processes[name].finish()


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


class StubGitHub:
    """Repository listing service returning a fixed list."""

    def __init__(self, repos: list[RepoInfo], error: Exception | None = None) -> None:
        self.repos = repos
        self.error = error
        self.calls: list[tuple[str, int | None]] = []

    async def list_repos(self, owner: str, limit: int | None = None) -> list[RepoInfo]:
        self.calls.append((owner, limit))
        if self.error is not None:
            raise self.error
        return self.repos if limit is None else self.repos[:limit]


@pytest.fixture
def stub_github() -> Callable[..., StubGitHub]:
    """Factory for a listing service stub."""
    return StubGitHub


async def settle(rounds: int = 10) -> None:
    """Let pending tasks run until they block."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def let_run() -> Callable[..., object]:
    return settle


# Markers for test categories
def pytest_configure(config):
    config.addinivalue_line("markers", "posix: tests that run shell scripts")
    config.addinivalue_line("markers", "slow: slow running tests")
