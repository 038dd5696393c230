"""Launching external commands with captured output."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class Process(Protocol):
    """The part of `asyncio.subprocess.Process` the rest of the code relies on."""

    returncode: int | None

    async def communicate(self, input: bytes | None = None) -> tuple[bytes, bytes]: ...

    def terminate(self) -> None: ...


@dataclass(frozen=True)
class CommandResult:
    """Exit status and decoded output of a finished command."""

    args: list[str]
    returncode: int
    stdout: str
    stderr: str


def decode(output: bytes | None) -> str:
    if not output:
        return ""
    return output.decode("utf-8", errors="replace")


class ProcessLauncher:
    """Starts OS processes whose stdout and stderr are piped back to us."""

    async def spawn(self, cmd: list[str], cwd: Path | None = None) -> Process:
        """Start a command without waiting for it.

        Raises FileNotFoundError when the executable does not exist.
        """
        return await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

    async def run(self, cmd: list[str], cwd: Path | None = None) -> CommandResult:
        """Run a command to completion."""
        process = await self.spawn(cmd, cwd=cwd)
        stdout, stderr = await process.communicate()
        return CommandResult(
            args=list(cmd),
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=decode(stdout),
            stderr=decode(stderr),
        )
