"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from typing import List, Optional, Sequence, Tuple

from git_worktree_keeper.__version__ import __version__


def split_create_args(argv: Sequence[str]) -> Tuple[Optional[str], List[str]]:
    """Split create-worktree arguments into (branch name, assistant arguments).

    The first token is the branch name unless it is ``--`` or looks like a
    flag. Everything after the branch name, after ``--``, or from the first
    flag on goes to the assistant unchanged.
    """
    args = list(argv)
    if not args:
        return None, []

    first = args[0]
    if first == "--":
        return None, args[1:]
    if first.startswith("-"):
        return None, args
    return first, args[1:]


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-keeper {__version__}")


def parse_cleanup_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse cleanup-worktree arguments."""
    parser = argparse.ArgumentParser(
        prog="cleanup-worktree",
        description="Rebase the current worktree onto the main branch, fast-forward main "
        "and remove the worktree",
        epilog="Run from inside a secondary worktree. Settings can also come from "
        "GIT_WORKTREE_KEEPER_* environment variables.",
    )
    parser.add_argument("--abort", action="store_true", help="Abort an in-progress rebase")
    parser.add_argument(
        "--keep-branch",
        action="store_true",
        help="Keep the branch after it has been merged into main",
    )
    parser.add_argument(
        "--leave-main",
        action="store_true",
        help="Rebase and remove the worktree without fast-forwarding main (keeps the branch)",
    )
    _add_output_options(parser)
    return parser.parse_args(argv)


def parse_spawn_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse spawn-worktree arguments."""
    parser = argparse.ArgumentParser(
        prog="spawn-worktree",
        description="Create a worktree on a new branch and print its path",
    )
    parser.add_argument("branch", nargs="?", help="Branch name (generated when omitted)")
    _add_output_options(parser)
    return parser.parse_args(argv)
