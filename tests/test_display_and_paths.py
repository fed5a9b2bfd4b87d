"""Tests for console output helpers and path resolution"""
import os

import pytest

from git_worktree_keeper.exceptions import FastForwardRejectedError, HomeNotSetError
from git_worktree_keeper.models.worktree import ReconciliationOutcome, ReconciliationResult
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.utils.paths import resolve_home, same_path, worktree_path_for


class TestDisplayService:
    """Test DisplayService output."""

    def test_only_takes_a_console(self, output):
        """Test verbosity is left to logging; the display only needs a console."""
        display = DisplayService(output)
        assert display.console is output
        assert not hasattr(display, "verbose")

    def test_commit_list_none_sentinel(self, display, output):
        """Test an empty commit list prints (none)."""
        display.commit_list("feature-a", [])
        assert "Commits on feature-a:\n  (none)" in output.file.getvalue()

    def test_commit_list_limit(self, display, output):
        """Test only the first entries up to the limit are printed."""
        display.commit_list("feature-a", [f"abc{i} Commit {i}" for i in range(5)], limit=3)
        text = output.file.getvalue()
        assert "Commit 2" in text
        assert "Commit 3" not in text
        assert "... and 2 more" in text

    def test_markup_in_names_is_escaped(self, display, output):
        """Test branch names that look like markup are printed literally."""
        display.deleting_branch("fix/[bold]odd")
        assert "fix/[bold]odd" in output.file.getvalue()

    def test_error_prints_hints(self, display, output):
        """Test errors are followed by their hints."""
        display.error(FastForwardRejectedError("main", "feature-a", "/wt/feature-a"))
        text = output.file.getvalue()
        assert "Error: could not fast-forward main to feature-a" in text
        assert "cd /wt/feature-a" in text

    def test_cleanup_complete(self, display, output):
        """Test the closing summary names main and the main path."""
        display.cleanup_complete(ReconciliationResult(
            outcome=ReconciliationOutcome.CLEAN_FAST_FORWARD,
            branch="feature-a",
            main_branch="main",
            main_path="/repos/project",
        ))
        text = output.file.getvalue()
        assert "Your changes are now on main" in text
        assert "Main worktree: /repos/project" in text
        assert "You are now in" not in text


class TestPaths:
    """Test home and worktree path helpers."""

    def test_home_preferred_over_userprofile(self):
        assert resolve_home({"HOME": "/home/me", "USERPROFILE": "C:\\Users\\me"}) == "/home/me"

    def test_userprofile_fallback(self):
        assert resolve_home({"USERPROFILE": "C:\\Users\\me"}) == "C:\\Users\\me"

    def test_empty_home_is_unset(self):
        with pytest.raises(HomeNotSetError):
            resolve_home({"HOME": ""})

    def test_worktree_path(self):
        """Test the path uses the basename of the main repository."""
        path = worktree_path_for("/repos/project/", "swift-fox-42", home="/home/me")
        assert path == os.path.join("/home/me", "worktrees", "project", "swift-fox-42")

    def test_worktree_path_with_root(self):
        path = worktree_path_for("/repos/project", "b", worktrees_root="/srv/wt")
        assert path == os.path.join("/srv/wt", "project", "b")

    def test_same_path_follows_symlinks(self, temp_dir):
        real = temp_dir / "real"
        real.mkdir()
        link = temp_dir / "link"
        link.symlink_to(real)
        assert same_path(str(link), str(real)) is True
        assert same_path(str(real), str(temp_dir)) is False
