"""Worktree data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch_name: Optional[str]  # None = detached HEAD
    commit_sha: str
    is_main: bool  # Is this the main working tree?
    is_orphaned: bool  # Directory missing?
    is_bare: bool = False
    is_locked: bool = False

    @property
    def is_detached(self) -> bool:
        return self.branch_name is None and not self.is_bare

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch_name or "(detached)"
        return f"{branch} @ {self.path}{main_marker} [{status}]"


class ReconciliationOutcome(Enum):
    """Result of a cleanup-worktree run."""
    CLEAN_FAST_FORWARD = "clean-fast-forward"
    CONFLICT_PENDING = "conflict-pending"
    ABORTED = "aborted"
    WORKTREE_REMOVED = "worktree-removed"  # leave-main-untouched mode


@dataclass
class ReconciliationResult:
    """Everything a reconciliation run decided and did."""
    outcome: ReconciliationOutcome
    branch: Optional[str] = None
    main_branch: Optional[str] = None
    worktree_path: Optional[str] = None
    main_path: Optional[str] = None
    commits_ahead: int = 0
    commits: List[str] = field(default_factory=list)  # newest first, uncapped
    conflicted_files: List[str] = field(default_factory=list)
    branch_deleted: bool = False

    @property
    def succeeded(self) -> bool:
        return self.outcome is not ReconciliationOutcome.CONFLICT_PENDING


@dataclass
class ProvisionResult:
    """A freshly provisioned worktree."""
    branch: str
    worktree_path: str
    main_path: str
    copied_entries: List[str] = field(default_factory=list)
    name_generated: bool = False
