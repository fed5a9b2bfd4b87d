"""Thin helpers around GitPython's command wrapper.

Every call site names the directory git runs in; nothing here depends on
the process working directory.
"""

import git

from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def git_for(cwd: str) -> git.Git:
    """Return a git command wrapper bound to ``cwd``."""
    return git.Git(cwd)


def run_status(cwd: str, *args: str) -> tuple[int, str, str]:
    """Run ``git <args>`` in ``cwd`` without raising on a non-zero exit.

    Returns:
        Tuple of (exit status, stdout, stderr)
    """
    logger.debug(f"git {' '.join(args)} (in {cwd})")
    status, stdout, stderr = git_for(cwd).execute(
        ["git", *args], with_extended_output=True, with_exceptions=False
    )
    return status, stdout, stderr


def describe_git_error(e: git.exc.GitCommandError) -> str:
    """Build a one-line description of a failed git command."""
    stderr = (e.stderr if hasattr(e, "stderr") else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"

    if stderr:
        return f"exit {status}: {stderr}"
    return f"exit code {status}"


def split_nul(output: str) -> list[str]:
    """Split NUL-separated git output, dropping empty entries."""
    return [entry for entry in output.split("\0") if entry]
