"""Pytest fixtures for git-worktree-keeper tests"""
import io
import logging

import git
import pytest
from rich.console import Console

from git_worktree_keeper.config import Config
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.provisioner import WorkspaceProvisioner
from git_worktree_keeper.services.reconciler import ReconciliationEngine


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers installed by setup_logging in CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    git_level = logging.getLogger("git").level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("git").setLevel(git_level)


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def home_dir(temp_dir):
    """A fake home directory; worktrees land in <home>/worktrees."""
    home = temp_dir / "home"
    home.mkdir()
    return home


@pytest.fixture
def environ(home_dir):
    return {"HOME": str(home_dir)}


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def output():
    """Console writing into a buffer; read it with output.file.getvalue()."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def display(output):
    return DisplayService(output)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository named 'project' with one commit on main."""
    repo_path = temp_dir / "project"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()
    repo.config_writer().set_value("commit", "gpgsign", "false").release()

    (repo_path / "README.md").write_text("# Test Repository\n")
    (repo_path / ".gitignore").write_text("cache/\n.env\n*.log\n")
    repo.index.add(["README.md", ".gitignore"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def main_path(git_repo):
    return git_repo.working_dir


@pytest.fixture
def provisioner(config, display, environ):
    return WorkspaceProvisioner(config, display=display, environ=environ)


@pytest.fixture
def engine(config, display):
    return ReconciliationEngine(config, display=display)


@pytest.fixture
def worktree(provisioner, main_path):
    """A provisioned worktree on branch 'feature-a'."""
    return provisioner.provision(main_path, "feature-a")
