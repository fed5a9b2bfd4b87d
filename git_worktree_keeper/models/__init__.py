"""Data models for git-worktree-keeper."""

from .worktree import ProvisionResult, ReconciliationOutcome, ReconciliationResult, WorktreeInfo

__all__ = ["ProvisionResult", "ReconciliationOutcome", "ReconciliationResult", "WorktreeInfo"]
