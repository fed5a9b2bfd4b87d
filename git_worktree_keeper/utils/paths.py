"""Filesystem path helpers."""

import os
from typing import Mapping, Optional

from git_worktree_keeper.constants import WORKTREES_DIRNAME
from git_worktree_keeper.exceptions import HomeNotSetError

# Checked in order; USERPROFILE covers Windows shells without HOME
HOME_VARIABLES = ("HOME", "USERPROFILE")


def resolve_home(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the user's home directory from the environment.

    Raises:
        HomeNotSetError: If none of the home variables is set to a non-empty value
    """
    if environ is None:
        environ = os.environ
    for name in HOME_VARIABLES:
        value = environ.get(name)
        if value:
            return value
    raise HomeNotSetError()


def worktree_path_for(
    main_repo_path: str,
    branch_name: str,
    home: Optional[str] = None,
    worktrees_root: Optional[str] = None,
) -> str:
    """Compute ``<root>/<project-name>/<branch-name>``.

    ``root`` is ``worktrees_root`` when given, else ``<home>/worktrees``.
    The project name is the basename of the main worktree.
    """
    if worktrees_root is None:
        if home is None:
            home = resolve_home()
        worktrees_root = os.path.join(home, WORKTREES_DIRNAME)
    project = os.path.basename(os.path.normpath(main_repo_path))
    return os.path.join(worktrees_root, project, branch_name)


def same_path(first: str, second: str) -> bool:
    """Compare two paths after resolving symlinks and case rules."""
    return os.path.normcase(os.path.realpath(first)) == os.path.normcase(os.path.realpath(second))
