"""Destination folder helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ghworkspace.errors import DestinationError
from ghworkspace.fs.delete import DeleteErrorKind, classify_os_error

logger = logging.getLogger(__name__)


def create_folder(path: Path, log: logging.Logger | None = None) -> bool:
    """Create the destination folder.

    Returns True if it was created, False if it already existed. Any other
    failure is fatal and raised as DestinationError.
    """
    log = log or logger
    try:
        path.mkdir(parents=True)
    except FileExistsError as e:
        if not path.is_dir():
            raise DestinationError(f"{path} exists and is not a directory") from e
        log.warning(f"Directory already exists (path: {path})")
        return False
    except PermissionError as e:
        raise DestinationError(f"Access denied when creating directory: {path}") from e
    except OSError as e:
        raise DestinationError(f"Cannot create directory {path}: {e.strerror or e}") from e
    return True


def is_empty_folder(parent: Path, name: str, log: logging.Logger | None = None) -> bool:
    """Check whether `parent/name` is missing or an empty directory.

    Anything else (a non-empty directory, a file, or a path that cannot be
    inspected) returns False so the repository is not cloned over it.
    """
    log = log or logger
    path = parent / name
    try:
        if not path.exists():
            return True
        if not path.is_dir():
            log.error(f"Path is not a directory (path: {path})")
            return False
        return next(path.iterdir(), None) is None
    except OSError as e:
        kind = classify_os_error(e)
        if kind == DeleteErrorKind.ACCESS_DENIED:
            log.error(f"Access denied when opening directory: {path}")
        elif kind == DeleteErrorKind.PATH_TOO_LONG:
            log.error(f"Folder name is too long for the filesystem: {path}")
        else:
            log.error(f"Cannot inspect {path}: {e.strerror or e}")
        return False


def ensure_listable(path: Path) -> None:
    """Raise DestinationError when the folder cannot be opened at all."""
    try:
        with os.scandir(path):
            pass
    except OSError as e:
        raise DestinationError(f"Cannot open destination folder {path}: {e.strerror or e}") from e
