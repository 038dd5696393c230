"""Filesystem operations on the destination folder."""

from ghworkspace.fs.delete import DeleteErrorKind, DeleteOutcome, default_deleter
from ghworkspace.fs.folders import create_folder, is_empty_folder
from ghworkspace.fs.prune import Pruner, PruneResult
from ghworkspace.fs.workspace import write_workspace

__all__ = [
    "DeleteErrorKind",
    "DeleteOutcome",
    "PruneResult",
    "Pruner",
    "create_folder",
    "default_deleter",
    "is_empty_folder",
    "write_workspace",
]
