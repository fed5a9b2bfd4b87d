"""Read-only repository queries.

Each method takes the directory to query as its first argument so callers
can move between worktrees without touching the process working directory.
"""

import os
from typing import List, Optional

import git

from git_worktree_keeper.exceptions import GitOperationError, NoMainWorktreeError, NotARepositoryError
from git_worktree_keeper.models.worktree import WorktreeInfo
from git_worktree_keeper.services.git.command import describe_git_error, git_for, run_status, split_nul
from git_worktree_keeper.services.git.worktrees import WorktreeService
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


class RepositoryInspector:
    """Service for querying repository, branch and working tree state."""

    def __init__(self, worktree_service: Optional[WorktreeService] = None):
        self.worktree_service = worktree_service or WorktreeService()

    def is_inside_repository(self, cwd: str) -> bool:
        """Check whether ``cwd`` is inside a git repository."""
        try:
            status, _, _ = run_status(cwd, "rev-parse", "--git-dir")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not run git in {cwd}: {e}")
            return False
        return status == 0

    def require_repository(self, cwd: str) -> None:
        """Raise NotARepositoryError unless ``cwd`` is inside a git repository."""
        if not self.is_inside_repository(cwd):
            raise NotARepositoryError(cwd)

    def top_level_path(self, cwd: str) -> str:
        """Get the root directory of the worktree containing ``cwd``."""
        try:
            return git_for(cwd).rev_parse("--show-toplevel").strip()
        except git.exc.GitCommandError as e:
            raise GitOperationError("rev-parse --show-toplevel", message=describe_git_error(e))

    def current_branch_name(self, cwd: str) -> Optional[str]:
        """Get the branch checked out at ``cwd``, or None when HEAD is detached."""
        try:
            name = git_for(cwd).rev_parse("--abbrev-ref", "HEAD").strip()
        except git.exc.GitCommandError as e:
            raise GitOperationError("rev-parse --abbrev-ref HEAD", message=describe_git_error(e))
        return None if name == "HEAD" else name

    def main_worktree(self, cwd: str) -> WorktreeInfo:
        """Get the main worktree: the first entry of the worktree listing.

        Raises:
            NoMainWorktreeError: If the listing is empty
            UnparsableWorktreeListingError: If the listing cannot be parsed
        """
        worktrees = self.worktree_service.list_worktrees(cwd)
        if not worktrees:
            raise NoMainWorktreeError()
        return worktrees[0]

    def branch_exists(self, cwd: str, name: str) -> bool:
        """Check whether a local branch called ``name`` exists."""
        status, _, _ = run_status(cwd, "show-ref", "--verify", "--quiet", f"refs/heads/{name}")
        return status == 0

    def is_working_tree_clean(self, cwd: str) -> bool:
        """True iff tracked files have neither unstaged nor staged modifications."""
        for args in (("diff", "--quiet"), ("diff", "--cached", "--quiet")):
            status, _, stderr = run_status(cwd, *args)
            if status == 1:
                return False
            if status != 0:
                raise GitOperationError(" ".join(args), message=stderr.strip() or f"exit code {status}")
        return True

    def untracked_files(self, cwd: str) -> List[str]:
        """List untracked files that are not ignored, relative to the worktree root."""
        try:
            output = git_for(cwd).ls_files("--others", "--exclude-standard", "-z")
        except git.exc.GitCommandError as e:
            raise GitOperationError("ls-files --others", message=describe_git_error(e))
        return split_nul(output)

    def ignored_untracked_entries(self, cwd: str, collapse_directories: bool = True) -> List[str]:
        """List untracked paths matched by ignore rules, in git's order.

        Args:
            cwd: Root of the worktree to inspect
            collapse_directories: Report a wholly ignored directory as one entry
                (with a trailing slash) instead of listing every file in it
        """
        args = ["--others", "--ignored", "--exclude-standard"]
        if collapse_directories:
            args.append("--directory")
        args.append("-z")
        try:
            output = git_for(cwd).ls_files(*args)
        except git.exc.GitCommandError as e:
            raise GitOperationError("ls-files --ignored", message=describe_git_error(e))
        return split_nul(output)

    def untracked_matching(self, cwd: str, patterns_file: str) -> List[str]:
        """List untracked files matching the gitignore-style patterns in ``patterns_file``."""
        try:
            output = git_for(cwd).ls_files(
                "--others", "--ignored", f"--exclude-from={patterns_file}", "-z"
            )
        except git.exc.GitCommandError as e:
            raise GitOperationError("ls-files --exclude-from", message=describe_git_error(e))
        return split_nul(output)

    def commits_ahead(self, cwd: str, from_branch: str, to_branch: str) -> int:
        """Count commits reachable from ``to_branch`` but not from ``from_branch``.

        A failed query counts as zero commits.
        """
        try:
            status, stdout, stderr = run_status(cwd, "rev-list", "--count", f"{from_branch}..{to_branch}")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Error counting commits {from_branch}..{to_branch}: {e}")
            return 0
        if status != 0:
            logger.debug(f"Error counting commits {from_branch}..{to_branch}: {stderr.strip()}")
            return 0
        try:
            return int(stdout.strip())
        except ValueError:
            return 0

    def commit_log(self, cwd: str, from_branch: str, to_branch: str) -> List[str]:
        """One-line summaries of commits in ``from_branch..to_branch``, newest first."""
        status, stdout, stderr = run_status(cwd, "log", "--oneline", f"{from_branch}..{to_branch}")
        if status != 0:
            logger.warning(f"Could not get commit log {from_branch}..{to_branch}: {stderr.strip()}")
            return []
        return [line for line in stdout.splitlines() if line.strip()]

    def is_rebase_in_progress(self, cwd: str) -> bool:
        """Check whether a rebase is paused in the worktree at ``cwd``."""
        for state_dir in ("rebase-merge", "rebase-apply"):
            status, stdout, _ = run_status(cwd, "rev-parse", "--git-path", state_dir)
            if status == 0 and os.path.isdir(os.path.join(cwd, stdout.strip())):
                return True
        return False

    def conflicted_files(self, cwd: str) -> List[str]:
        """List paths with unresolved merge conflicts."""
        status, stdout, _ = run_status(cwd, "diff", "--name-only", "--diff-filter=U")
        if status != 0:
            return []
        return [line for line in stdout.splitlines() if line]
