"""ghworkspace - Clone all repositories of a GitHub user or organization into one workspace."""

__version__ = "1.3.3"

from ghworkspace.clone import CloneOrchestrator, ClonePool, CloneSummary, JobResult  # noqa: E402
from ghworkspace.fs import Pruner, PruneResult  # noqa: E402
from ghworkspace.models import CloneConfig, RepoInfo  # noqa: E402

__all__ = [
    "CloneConfig",
    "CloneOrchestrator",
    "ClonePool",
    "CloneSummary",
    "JobResult",
    "PruneResult",
    "Pruner",
    "RepoInfo",
]
