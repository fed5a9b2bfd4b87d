"""Shared helpers for tests that drive real repositories."""
from pathlib import Path

import git


def commit_file(repo_path, name, content, message=None):
    """Write a file in a worktree and commit it with the git CLI."""
    repo_path = Path(repo_path)
    target = repo_path / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content)
    g = git.Git(str(repo_path))
    g.add(name)
    g.commit("-m", message or f"Update {name}")


def head_sha(repo_path, ref="HEAD"):
    """Resolve ``ref`` to a commit sha in the worktree at ``repo_path``."""
    return git.Git(str(repo_path)).rev_parse(ref).strip()
