"""Worktree listing and registration for git-worktree-keeper."""

import os
from typing import Dict, Any, List, Optional

import git

from git_worktree_keeper.exceptions import GitOperationError, UnparsableWorktreeListingError
from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.services.git.command import describe_git_error, git_for
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def _build_worktree(record: Dict[str, Any], is_main: bool) -> WorktreeInfo:
    path = record["path"]
    return WorktreeInfo(
        path=path,
        branch_name=record.get("branch"),
        commit_sha=record.get("HEAD", ""),
        is_main=is_main,
        is_orphaned=not os.path.exists(path),
        is_bare=record.get("bare", False),
        is_locked=record.get("locked", False),
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse `git worktree list --porcelain` output.

    Format, one record per worktree, records separated by a blank line::

        worktree /path/to/worktree
        HEAD <sha>
        branch refs/heads/<name>     (or "detached", or "bare")
        locked [reason]              (optional)

    The first record is the main worktree. Attribute lines this parser does
    not know are skipped; an attribute before any ``worktree`` line, or a
    ``worktree`` line without a path, raises UnparsableWorktreeListingError.
    """
    worktrees: List[WorktreeInfo] = []
    current: Optional[Dict[str, Any]] = None

    for raw_line in output.split("\n"):
        line = raw_line.rstrip("\r")

        if not line:
            if current is not None:
                worktrees.append(_build_worktree(current, is_main=not worktrees))
                current = None
            continue

        if line.startswith("worktree "):
            if current is not None:
                # Missing blank separator; close the previous record
                worktrees.append(_build_worktree(current, is_main=not worktrees))
            path = line[len("worktree "):]
            if not path.strip():
                raise UnparsableWorktreeListingError(line)
            current = {"path": path}
            continue

        if current is None:
            raise UnparsableWorktreeListingError(line)

        key, _, value = line.partition(" ")
        if key == "HEAD":
            current["HEAD"] = value
        elif key == "branch":
            if value.startswith("refs/heads/"):
                current["branch"] = value[len("refs/heads/"):]
            elif value:
                current["branch"] = value
            else:
                raise UnparsableWorktreeListingError(line)
        elif key == "detached":
            current.pop("branch", None)
        elif key == "bare":
            current["bare"] = True
        elif key == "locked":
            current["locked"] = True
        else:
            logger.debug(f"Ignoring worktree attribute line: {line}")

    if current is not None:
        worktrees.append(_build_worktree(current, is_main=not worktrees))

    return worktrees


class WorktreeService:
    """Service for listing, adding and removing git worktrees."""

    def list_worktrees(self, cwd: str) -> List[WorktreeInfo]:
        """Get detailed information about all worktrees of the repository at ``cwd``.

        Returns:
            List of WorktreeInfo objects, main worktree first

        Raises:
            GitOperationError: If the listing command fails
            UnparsableWorktreeListingError: If the output has an unexpected shape
        """
        try:
            output = git_for(cwd).worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree list", message=describe_git_error(e))

        worktrees = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def add_worktree(self, cwd: str, path: str, new_branch: str) -> None:
        """Create ``new_branch`` at HEAD of ``cwd`` and check it out in a worktree at ``path``."""
        try:
            git_for(cwd).worktree("add", "-b", new_branch, path)
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree add", new_branch, describe_git_error(e))
        logger.info(f"Created worktree at {path} for branch {new_branch}")

    def remove_worktree(self, cwd: str, path: str, force: bool = False) -> None:
        """Remove the worktree at ``path``.

        Args:
            cwd: Any worktree of the same repository other than ``path``
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked
        """
        args = ["remove", path]
        if force:
            args.append("--force")

        try:
            git_for(cwd).worktree(*args)
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree remove", message=describe_git_error(e))
        logger.info(f"Removed worktree at {path}")
