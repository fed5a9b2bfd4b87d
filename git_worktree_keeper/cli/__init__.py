"""Command-line interface for git-worktree-keeper.

This package provides the console entry points and argument parsing.
"""

from .main import cleanup_worktree, create_worktree, spawn_worktree
from .args import parse_cleanup_args, parse_spawn_args, split_create_args

__all__ = [
    "create_worktree",
    "cleanup_worktree",
    "spawn_worktree",
    "parse_cleanup_args",
    "parse_spawn_args",
    "split_create_args",
]
