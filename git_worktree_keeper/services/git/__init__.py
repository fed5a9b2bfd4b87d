"""Git-related services for git-worktree-keeper."""

from .inspector import RepositoryInspector
from .operations import GitOperations
from .worktrees import WorktreeService, parse_worktree_porcelain

__all__ = [
    "RepositoryInspector",
    "GitOperations",
    "WorktreeService",
    "parse_worktree_porcelain",
]
