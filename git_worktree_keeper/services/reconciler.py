"""Reconciliation: rebase a finished worktree onto main, fast-forward, tear down.

Worktree removal and branch deletion only run after the rebase succeeded and
main was fast-forwarded.
"""

from typing import Optional, Union

from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import REBASE_IN_PROGRESS_HINTS
from git_worktree_keeper.exceptions import (
    DetachedHeadError,
    FastForwardRejectedError,
    OperatingOnMainWorktreeError,
    RebaseConflictError,
    UncommittedChangesError,
    UntrackedFilesError,
)
from git_worktree_keeper.models.worktree import ReconciliationOutcome, ReconciliationResult
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.git import GitOperations, RepositoryInspector, WorktreeService
from git_worktree_keeper.utils.logging import get_logger
from git_worktree_keeper.utils.paths import same_path

logger = get_logger(__name__)


class ReconciliationEngine:
    """Merges a secondary worktree's branch back into the main branch."""

    def __init__(
        self,
        config: Union[Config, dict],
        inspector: Optional[RepositoryInspector] = None,
        operations: Optional[GitOperations] = None,
        worktree_service: Optional[WorktreeService] = None,
        display: Optional[DisplayService] = None,
    ):
        self.config = Config.from_dict(config) if isinstance(config, dict) else config
        self.worktree_service = worktree_service or WorktreeService()
        self.inspector = inspector or RepositoryInspector(self.worktree_service)
        self.operations = operations or GitOperations()
        self.display = display or DisplayService()

    def reconcile(self, cwd: str) -> ReconciliationResult:
        """Rebase, fast-forward main, remove the worktree and delete the branch.

        Args:
            cwd: A directory inside the secondary worktree to reconcile

        Returns:
            ReconciliationResult with outcome CLEAN_FAST_FORWARD (or WORKTREE_REMOVED
            in leave-main-untouched mode), or CONFLICT_PENDING when the rebase
            stopped on conflicts

        Raises:
            NotARepositoryError, DetachedHeadError, OperatingOnMainWorktreeError,
            UncommittedChangesError, UntrackedFilesError, FastForwardRejectedError,
            GitOperationError
        """
        self.inspector.require_repository(cwd)

        current_path = self.inspector.top_level_path(cwd)
        branch = self.inspector.current_branch_name(cwd)
        if branch is None:
            if self.inspector.is_rebase_in_progress(cwd):
                raise DetachedHeadError(hints=REBASE_IN_PROGRESS_HINTS)
            raise DetachedHeadError()

        main = self.inspector.main_worktree(cwd)
        if same_path(current_path, main.path):
            raise OperatingOnMainWorktreeError(main.path)
        if main.branch_name is None:
            raise DetachedHeadError(main.path)
        main_branch = main.branch_name

        if not self.inspector.is_working_tree_clean(cwd):
            raise UncommittedChangesError()

        untracked = self.inspector.untracked_files(cwd)
        if untracked:
            logger.debug(f"Untracked files: {untracked}")
            raise UntrackedFilesError(untracked)

        result = ReconciliationResult(
            outcome=ReconciliationOutcome.CLEAN_FAST_FORWARD,
            branch=branch,
            main_branch=main_branch,
            worktree_path=current_path,
            main_path=main.path,
        )
        self.display.cleanup_summary(current_path, branch, main.path, main_branch)

        result.commits_ahead = self.inspector.commits_ahead(current_path, main_branch, branch)
        if result.commits_ahead == 0:
            self.display.no_commits_to_rebase(main_branch)
        else:
            self.display.rebasing(result.commits_ahead, main_branch)
            try:
                self.operations.rebase(current_path, branch, main_branch)
            except RebaseConflictError:
                result.outcome = ReconciliationOutcome.CONFLICT_PENDING
                result.conflicted_files = self.inspector.conflicted_files(current_path)
                self.display.rebase_conflict(result.conflicted_files)
                logger.info(f"Rebase of {branch} paused on conflicts; worktree left in place")
                return result
            self.display.rebase_succeeded()

        result.commits = self.inspector.commit_log(current_path, main_branch, branch)
        self.display.commit_list(branch, result.commits, limit=self.config.log_display_limit)

        # From here on every command runs in the main worktree
        self.display.switching_to_main()
        if self.config.fast_forward_main:
            self.display.fast_forwarding(main_branch, branch)
            if not self.operations.fast_forward(main.path, branch):
                raise FastForwardRejectedError(main_branch, branch, current_path)
        else:
            result.outcome = ReconciliationOutcome.WORKTREE_REMOVED

        self.display.removing_worktree(current_path)
        self.worktree_service.remove_worktree(main.path, current_path)

        if self.config.fast_forward_main and self.config.delete_branch:
            result.branch_deleted = self._delete_branch(main.path, branch)

        self.display.cleanup_complete(result)
        return result

    def _delete_branch(self, main_path: str, branch: str) -> bool:
        """Best-effort branch deletion; failures are logged, never raised."""
        self.display.deleting_branch(branch)
        success, error_msg = self.operations.delete_branch(main_path, branch)
        if not success:
            logger.warning(f"Could not delete branch {branch}: {error_msg}")
            self.display.branch_delete_failed(branch, error_msg)
        return success

    def abort(self, cwd: str) -> ReconciliationResult:
        """Abort an in-progress rebase regardless of other worktree state."""
        self.inspector.require_repository(cwd)
        self.display.aborting()
        self.operations.abort_rebase(cwd)
        self.display.abort_complete()
        return ReconciliationResult(outcome=ReconciliationOutcome.ABORTED)
