"""Recursive directory deletion with classified failures."""

from __future__ import annotations

import errno
import shutil
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class DeleteErrorKind(str, Enum):
    """Why a deletion failed."""

    ACCESS_DENIED = "access_denied"
    BUSY = "busy"
    NOT_EMPTY = "not_empty"
    NOT_FOUND = "not_found"
    PATH_TOO_LONG = "path_too_long"
    OTHER = "other"


_ERRNO_KINDS: dict[int, DeleteErrorKind] = {
    errno.EACCES: DeleteErrorKind.ACCESS_DENIED,
    errno.EPERM: DeleteErrorKind.ACCESS_DENIED,
    errno.EROFS: DeleteErrorKind.ACCESS_DENIED,
    errno.EBUSY: DeleteErrorKind.BUSY,
    errno.ETXTBSY: DeleteErrorKind.BUSY,
    errno.ENOTEMPTY: DeleteErrorKind.NOT_EMPTY,
    errno.EEXIST: DeleteErrorKind.NOT_EMPTY,
    errno.ENOENT: DeleteErrorKind.NOT_FOUND,
    errno.ENAMETOOLONG: DeleteErrorKind.PATH_TOO_LONG,
}


def classify_os_error(exc: OSError) -> DeleteErrorKind:
    """Collapse an OSError into a DeleteErrorKind."""
    if exc.errno is None:
        return DeleteErrorKind.OTHER
    return _ERRNO_KINDS.get(exc.errno, DeleteErrorKind.OTHER)


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of deleting one directory tree."""

    path: Path
    kind: DeleteErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is None


class RecursiveDeleter(Protocol):
    def delete(self, path: Path) -> DeleteOutcome: ...


class ShutilDeleter:
    """Deletes in-process with shutil.rmtree."""

    def delete(self, path: Path) -> DeleteOutcome:
        try:
            shutil.rmtree(path)
        except OSError as e:
            return DeleteOutcome(path, classify_os_error(e), e.strerror or str(e))
        return DeleteOutcome(path)


class PowerShellDeleter:
    """Deletes through PowerShell's Remove-Item.

    Used on Windows, where rmtree regularly trips over read-only pack files
    and folders an editor still holds open.
    """

    def __init__(self, executable: str = "powershell.exe") -> None:
        self.executable = executable

    def delete(self, path: Path) -> DeleteOutcome:
        cmd = [
            self.executable,
            "-NoProfile",
            "-NonInteractive",
            "-Command",
            f"Remove-Item -LiteralPath {quote_powershell(path.name)} -Recurse -Force",
        ]
        try:
            result = subprocess.run(
                cmd,
                cwd=path.parent,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return DeleteOutcome(path, classify_os_error(e), str(e))

        if result.returncode != 0:
            return DeleteOutcome(path, _classify_powershell(result.stderr), result.stderr.strip())
        return DeleteOutcome(path)


_SINGLE_QUOTES = "'\u2018\u2019\u201a\u201b"


def quote_powershell(value: str) -> str:
    """Single-quoted PowerShell literal; nothing inside is expanded.

    PowerShell also closes single-quoted strings on the typographic quotes,
    so those are doubled as well.
    """
    escaped = "".join(c * 2 if c in _SINGLE_QUOTES else c for c in value)
    return f"'{escaped}'"


def _classify_powershell(stderr: str) -> DeleteErrorKind:
    text = stderr.lower()
    if "access" in text and "denied" in text:
        return DeleteErrorKind.ACCESS_DENIED
    if "being used by another process" in text:
        return DeleteErrorKind.BUSY
    if "not empty" in text:
        return DeleteErrorKind.NOT_EMPTY
    if "does not exist" in text or "cannot find path" in text:
        return DeleteErrorKind.NOT_FOUND
    if "too long" in text:
        return DeleteErrorKind.PATH_TOO_LONG
    return DeleteErrorKind.OTHER


def default_deleter() -> RecursiveDeleter:
    """Deleter suited to the running platform."""
    if sys.platform == "win32":
        return PowerShellDeleter()
    return ShutilDeleter()
