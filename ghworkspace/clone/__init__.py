"""Concurrent cloning of all repositories of an owner."""

from ghworkspace.clone.orchestrator import CloneOrchestrator, CloneSummary
from ghworkspace.clone.pool import ClonePool, CloneJob, JobResult

__all__ = ["CloneOrchestrator", "CloneSummary", "ClonePool", "CloneJob", "JobResult"]
