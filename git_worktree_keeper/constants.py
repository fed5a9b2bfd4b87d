"""Shared constants for git-worktree-keeper."""

from typing import List

# Worktrees live under <home>/<WORKTREES_DIRNAME>/<project>/<branch>
WORKTREES_DIRNAME = "worktrees"

# Optional file in the main worktree root listing which ignored files to copy
DEFAULT_INCLUDE_MANIFEST = ".worktreeinclude"

DEFAULT_ASSISTANT_COMMAND = "claude"

# Number of commits shown in the cleanup summary
LOG_DISPLAY_LIMIT = 10


class MergeMode:
    """What cleanup does after a successful rebase."""

    FAST_FORWARD_AND_DELETE = "fast-forward-and-delete"
    LEAVE_MAIN_UNTOUCHED = "leave-main-untouched"


MERGE_MODES: List[str] = [MergeMode.FAST_FORWARD_AND_DELETE, MergeMode.LEAVE_MAIN_UNTOUCHED]


# Environment variables read by Config.from_env
ENV_PREFIX = "GIT_WORKTREE_KEEPER_"
ENV_ROOT = ENV_PREFIX + "ROOT"
ENV_ASSISTANT = ENV_PREFIX + "ASSISTANT"
ENV_INCLUDE_FILE = ENV_PREFIX + "INCLUDE_FILE"
ENV_MERGE_MODE = ENV_PREFIX + "MERGE_MODE"
ENV_VERBOSE = ENV_PREFIX + "VERBOSE"
ENV_DEBUG = ENV_PREFIX + "DEBUG"


CLEANUP_COMMAND = "cleanup-worktree"

CONFLICT_RECIPE: List[str] = [
    "  1. Fix the conflicts in the files listed above",
    "  2. Run: git add <resolved-files>",
    "  3. Run: git rebase --continue",
    f"  4. Run: {CLEANUP_COMMAND} again",
]

ABORT_HINT = f"Or run: {CLEANUP_COMMAND} --abort to abort the rebase"

REBASE_IN_PROGRESS_HINTS: List[str] = [
    "A rebase is in progress. Resolve it first:",
    "  git add <resolved-files> && git rebase --continue",
    ABORT_HINT,
]
