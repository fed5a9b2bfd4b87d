"""Custom exceptions for git-worktree-keeper"""

from typing import List, Optional


class WorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors.

    ``hints`` holds follow-up lines shown to the user under the error message.
    """

    def __init__(self, message: str, hints: Optional[List[str]] = None):
        self.message = message
        self.hints = list(hints or [])
        super().__init__(message)


class GitOperationError(WorktreeKeeperError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.detail = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotARepositoryError(WorktreeKeeperError):
    """Raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("not in a git repository")


class NoMainWorktreeError(WorktreeKeeperError):
    """Raised when the worktree listing has no entries."""

    def __init__(self):
        super().__init__("could not determine main repo path")


class UnparsableWorktreeListingError(WorktreeKeeperError):
    """Raised when `git worktree list --porcelain` output has an unexpected shape."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"could not parse git worktree list output near: {line!r}")


class BranchAlreadyExistsError(WorktreeKeeperError):
    """Raised when the branch to create already exists."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"branch '{branch}' already exists",
            hints=["Pick another name, or omit it to generate one"],
        )


class HomeNotSetError(WorktreeKeeperError):
    """Raised when no home directory can be resolved."""

    def __init__(self):
        super().__init__("HOME environment variable not set")


class DetachedHeadError(WorktreeKeeperError):
    """Exception raised when a worktree is in detached HEAD state."""

    def __init__(self, path: Optional[str] = None, hints: Optional[List[str]] = None):
        self.path = path
        message = "worktree is in detached HEAD state"
        if path:
            message = f"worktree at {path} is in detached HEAD state"
        super().__init__(message, hints=hints or ["Please checkout a branch before cleaning up"])


class OperatingOnMainWorktreeError(WorktreeKeeperError):
    """Raised when cleanup is invoked from the main worktree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            "cannot cleanup the main worktree",
            hints=["Run this command from within a secondary worktree"],
        )


class UncommittedChangesError(WorktreeKeeperError):
    """Raised when tracked files have staged or unstaged modifications."""

    def __init__(self):
        super().__init__(
            "you have uncommitted changes",
            hints=["Please commit or stash your changes before cleaning up"],
        )


class UntrackedFilesError(WorktreeKeeperError):
    """Raised when the worktree contains untracked, non-ignored files."""

    def __init__(self, files: List[str]):
        self.files = files
        super().__init__(
            "you have untracked files",
            hints=["Please commit, remove, or add them to .gitignore before cleaning up"],
        )


class RebaseConflictError(WorktreeKeeperError):
    """Raised when a rebase stops on conflicts. The paused rebase is left in place."""

    def __init__(self, branch: str, onto: str, conflicted_files: Optional[List[str]] = None):
        self.branch = branch
        self.onto = onto
        self.conflicted_files = list(conflicted_files or [])
        super().__init__(f"rebase of '{branch}' onto '{onto}' has conflicts")


class FastForwardRejectedError(WorktreeKeeperError):
    """Raised when the main branch cannot be fast-forwarded to the worktree branch."""

    def __init__(self, main_branch: str, branch: str, worktree_path: str):
        self.main_branch = main_branch
        self.branch = branch
        self.worktree_path = worktree_path
        super().__init__(
            f"could not fast-forward {main_branch} to {branch}",
            hints=[
                f"This can happen if {main_branch} has new commits. Try:",
                f"  1. Go back to the worktree: cd {worktree_path}",
                f"  2. Rebase again: git rebase {main_branch}",
                "  3. Run cleanup-worktree again",
            ],
        )


class AssistantNotFoundError(WorktreeKeeperError):
    """Raised when the assistant executable cannot be started."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(
            f"could not start '{command}'",
            hints=["Install it, or set GIT_WORKTREE_KEEPER_ASSISTANT to another command"],
        )
