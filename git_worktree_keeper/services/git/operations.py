"""Mutating git operations used by reconciliation."""

import git

from git_worktree_keeper.exceptions import GitOperationError, RebaseConflictError
from git_worktree_keeper.services.git.command import describe_git_error, git_for, run_status
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


class GitOperations:
    """Service for Git operations that change repository state."""

    def rebase(self, cwd: str, branch: str, onto: str) -> None:
        """Rebase the branch checked out at ``cwd`` onto ``onto``.

        Raises:
            RebaseConflictError: If the rebase stops; the paused rebase is left as is
        """
        status, _, stderr = run_status(cwd, "rebase", onto)
        if status != 0:
            logger.info(f"Rebase of {branch} onto {onto} stopped: {stderr.strip()}")
            raise RebaseConflictError(branch, onto)
        logger.info(f"Rebased {branch} onto {onto}")

    def abort_rebase(self, cwd: str) -> None:
        """Abort the rebase in progress at ``cwd``."""
        try:
            git_for(cwd).rebase("--abort")
        except git.exc.GitCommandError as e:
            raise GitOperationError("rebase --abort", message=describe_git_error(e))
        logger.info("Rebase aborted")

    def fast_forward(self, cwd: str, branch: str) -> bool:
        """Fast-forward the branch checked out at ``cwd`` to ``branch``.

        Returns:
            False if git refused (no fast-forward possible); never creates a merge commit
        """
        status, _, stderr = run_status(cwd, "merge", "--ff-only", branch)
        if status != 0:
            logger.info(f"Fast-forward to {branch} rejected: {stderr.strip()}")
            return False
        logger.info(f"Fast-forwarded to {branch}")
        return True

    def delete_branch(self, cwd: str, branch: str) -> tuple[bool, str]:
        """Delete a fully merged local branch.

        Returns:
            Tuple of (success, error_message). error_message is empty on success.
        """
        try:
            git_for(cwd).branch("-d", branch)
        except git.exc.GitCommandError as e:
            error_msg = f"git branch -d failed ({describe_git_error(e)})"
            return False, error_msg
        logger.info(f"Deleted branch {branch}")
        return True, ""
