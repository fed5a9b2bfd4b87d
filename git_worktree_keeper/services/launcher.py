"""Hands the terminal over to the assistant inside a new worktree."""

import os
import shlex
import signal
import subprocess
from contextlib import contextmanager
from typing import List, Sequence

from git_worktree_keeper.exceptions import AssistantNotFoundError
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def _ignore_sigint():
    """Let Ctrl-C reach the child only; the child shares our terminal."""
    try:
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    except ValueError:
        # Not on the main thread; signals cannot be changed
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class SessionLauncher:
    """Runs the assistant command with inherited stdin/stdout/stderr."""

    def __init__(self, assistant_command: str):
        self.command: List[str] = shlex.split(assistant_command)
        if not self.command:
            raise ValueError("assistant command cannot be empty")

    @property
    def name(self) -> str:
        return self.command[0]

    def launch(self, worktree_path: str, assistant_args: Sequence[str] = ()) -> int:
        """Change into ``worktree_path`` and run the assistant there until it exits.

        Args:
            worktree_path: Directory the assistant starts in
            assistant_args: Extra arguments, passed through unchanged

        Returns:
            The assistant's exit code (128 + signal number if it was killed)

        Raises:
            AssistantNotFoundError: If the command cannot be executed
        """
        os.chdir(worktree_path)
        argv = [*self.command, *assistant_args]
        logger.info(f"Launching {argv} in {worktree_path}")

        try:
            process = subprocess.Popen(argv, cwd=worktree_path)
        except (FileNotFoundError, PermissionError) as e:
            logger.debug(f"Could not start {self.name}: {e}")
            raise AssistantNotFoundError(self.name)

        # Ignored only after the spawn; an ignored SIGINT would be inherited
        with _ignore_sigint():
            returncode = process.wait()

        if returncode < 0:
            returncode = 128 - returncode
        logger.info(f"{self.name} exited with {returncode}")
        return returncode
