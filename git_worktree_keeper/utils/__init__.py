"""Utility functions for git-worktree-keeper.

This package provides utility modules:
- logging: Logging configuration and logger creation
- paths: Home directory and worktree location helpers
"""

from .logging import setup_logging, get_logger, ColoredFormatter, debug_log_path
from .paths import resolve_home, worktree_path_for, same_path

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
    "debug_log_path",
    # Paths
    "resolve_home",
    "worktree_path_for",
    "same_path",
]
