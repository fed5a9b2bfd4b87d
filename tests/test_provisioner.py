"""Tests for WorkspaceProvisioner"""
import os
import re

import git
import pytest

from git_worktree_keeper.config import Config
from git_worktree_keeper.exceptions import (
    BranchAlreadyExistsError,
    HomeNotSetError,
    NotARepositoryError,
)
from git_worktree_keeper.services.artifacts import CopyAll, CopyMatching, select_artifact_strategy
from git_worktree_keeper.services.git import RepositoryInspector
from git_worktree_keeper.services.provisioner import WorkspaceProvisioner


def branch_names(repo):
    return sorted(head.name for head in repo.heads)


def worktree_count(repo):
    return repo.git.worktree("list", "--porcelain").count("worktree ")


class TestProvision:
    """Test branch and worktree creation."""

    def test_creates_branch_and_worktree(self, provisioner, git_repo, main_path, home_dir):
        """Test a worktree is created at <home>/worktrees/<project>/<branch>."""
        result = provisioner.provision(main_path, "feature-a")

        expected = os.path.join(str(home_dir), "worktrees", "project", "feature-a")
        assert result.worktree_path == expected
        assert os.path.isdir(expected)
        assert result.branch == "feature-a"
        assert result.name_generated is False
        assert branch_names(git_repo) == ["feature-a", "main"]
        assert worktree_count(git_repo) == 2

        checked_out = git.Git(expected).rev_parse("--abbrev-ref", "HEAD").strip()
        assert checked_out == "feature-a"

    def test_existing_branch_fails(self, provisioner, git_repo, main_path, home_dir):
        """Test an existing branch name fails and creates nothing."""
        git_repo.git.branch("taken")

        with pytest.raises(BranchAlreadyExistsError) as exc_info:
            provisioner.provision(main_path, "taken")

        assert exc_info.value.branch == "taken"
        assert branch_names(git_repo) == ["main", "taken"]
        assert worktree_count(git_repo) == 1
        assert not os.path.exists(os.path.join(str(home_dir), "worktrees", "project", "taken"))

    def test_generated_name(self, provisioner, git_repo, main_path, output):
        """Test a name is generated and announced when none is given."""
        result = provisioner.provision(main_path)

        assert result.name_generated is True
        assert re.match(r"^[a-z]+-[a-z]+-\d{1,2}$", result.branch)
        assert result.branch in branch_names(git_repo)
        assert f"Generated branch name: {result.branch}" in output.file.getvalue()

    def test_generated_name_collision_is_not_retried(self, provisioner, git_repo, main_path):
        """Test a colliding generated name surfaces as an error."""
        git_repo.git.branch("swift-fox-42")
        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(
                "git_worktree_keeper.services.provisioner.generate_name", lambda: "swift-fox-42"
            )
            with pytest.raises(BranchAlreadyExistsError):
                provisioner.provision(main_path)

    def test_not_a_repository(self, provisioner, temp_dir):
        """Test provisioning outside a repository fails."""
        plain = temp_dir / "plain"
        plain.mkdir()
        with pytest.raises(NotARepositoryError):
            provisioner.provision(str(plain), "x")

    def test_home_not_set(self, config, display, git_repo, main_path):
        """Test a missing home directory fails before any branch is created."""
        provisioner = WorkspaceProvisioner(config, display=display, environ={})
        with pytest.raises(HomeNotSetError):
            provisioner.provision(main_path, "feature-a")
        assert branch_names(git_repo) == ["main"]

    def test_userprofile_fallback(self, config, display, main_path, temp_dir):
        """Test USERPROFILE is used when HOME is unset."""
        profile = temp_dir / "profile"
        profile.mkdir()
        provisioner = WorkspaceProvisioner(config, display=display, environ={"USERPROFILE": str(profile)})
        result = provisioner.provision(main_path, "feature-a")
        assert result.worktree_path == os.path.join(str(profile), "worktrees", "project", "feature-a")

    def test_worktrees_root_override(self, display, main_path, temp_dir):
        """Test a configured root replaces <home>/worktrees and needs no home."""
        root = temp_dir / "elsewhere"
        provisioner = WorkspaceProvisioner(Config(worktrees_root=str(root)), display=display, environ={})
        result = provisioner.provision(main_path, "feature-a")
        assert result.worktree_path == os.path.join(str(root), "project", "feature-a")
        assert os.path.isdir(result.worktree_path)

    def test_parent_directory_already_exists(self, provisioner, main_path, home_dir):
        """Test an existing <home>/worktrees/<project> directory is fine."""
        (home_dir / "worktrees" / "project").mkdir(parents=True)
        result = provisioner.provision(main_path, "feature-a")
        assert os.path.isdir(result.worktree_path)

    def test_provision_from_secondary_worktree(self, provisioner, git_repo, main_path, home_dir):
        """Test provisioning from inside another worktree uses the main repository."""
        first = provisioner.provision(main_path, "feature-a")
        second = provisioner.provision(first.worktree_path, "feature-b")

        assert second.main_path == first.main_path
        assert second.worktree_path == os.path.join(str(home_dir), "worktrees", "project", "feature-b")
        assert worktree_count(git_repo) == 3

    def test_slash_in_branch_name(self, provisioner, main_path, home_dir):
        """Test branch names with slashes become nested directories."""
        result = provisioner.provision(main_path, "feat/login")
        assert result.worktree_path == os.path.join(str(home_dir), "worktrees", "project", "feat/login")
        assert os.path.isdir(result.worktree_path)


class TestIgnoredArtifacts:
    """Test copying of ignored files into the new worktree."""

    def test_ignored_directory_is_copied(self, provisioner, main_path):
        """Test an ignored directory with three files is copied with identical contents."""
        cache = os.path.join(main_path, "cache")
        os.makedirs(os.path.join(cache, "nested"))
        files = {
            "one.txt": "first\n",
            "two.bin": "second\n",
            os.path.join("nested", "three.txt"): "third\n",
        }
        for name, content in files.items():
            with open(os.path.join(cache, name), "w") as f:
                f.write(content)

        result = provisioner.provision(main_path, "feature-a")

        assert "cache/" in result.copied_entries
        for name, content in files.items():
            copied = os.path.join(result.worktree_path, "cache", name)
            assert os.path.isfile(copied)
            with open(copied) as f:
                assert f.read() == content

    def test_ignored_file_is_copied(self, provisioner, main_path, output):
        """Test a single ignored file is copied and listed."""
        with open(os.path.join(main_path, ".env"), "w") as f:
            f.write("TOKEN=abc\n")

        result = provisioner.provision(main_path, "feature-a")

        with open(os.path.join(result.worktree_path, ".env")) as f:
            assert f.read() == "TOKEN=abc\n"
        text = output.file.getvalue()
        assert "Copying gitignored files to worktree..." in text
        assert "  .env" in text

    def test_ignored_file_in_tracked_directory(self, provisioner, git_repo, main_path):
        """Test an ignored file inside a tracked directory lands in the same place."""
        os.makedirs(os.path.join(main_path, "config"))
        with open(os.path.join(main_path, "config", "settings.toml"), "w") as f:
            f.write("[x]\n")
        git_repo.git.add("config/settings.toml")
        git_repo.git.commit("-m", "Add config")
        with open(os.path.join(main_path, "config", "local.log"), "w") as f:
            f.write("log\n")

        result = provisioner.provision(main_path, "feature-a")
        assert os.path.isfile(os.path.join(result.worktree_path, "config", "local.log"))

    def test_nothing_to_copy(self, provisioner, main_path, output):
        """Test no copy header is printed when nothing is ignored."""
        result = provisioner.provision(main_path, "feature-a")
        assert result.copied_entries == []
        assert "Copying gitignored files" not in output.file.getvalue()

    def test_untracked_files_are_not_copied(self, provisioner, main_path):
        """Test untracked but not ignored files stay behind."""
        with open(os.path.join(main_path, "scratch.txt"), "w") as f:
            f.write("x")
        result = provisioner.provision(main_path, "feature-a")
        assert not os.path.exists(os.path.join(result.worktree_path, "scratch.txt"))

    def test_include_manifest_limits_copy(self, provisioner, git_repo, main_path):
        """Test only ignored files matching .worktreeinclude are copied."""
        with open(os.path.join(main_path, ".worktreeinclude"), "w") as f:
            f.write(".env\ncache/keep/\n")
        git_repo.git.add(".worktreeinclude")
        git_repo.git.commit("-m", "Add include manifest")

        os.makedirs(os.path.join(main_path, "cache", "keep"))
        os.makedirs(os.path.join(main_path, "cache", "skip"))
        for rel in (".env", "build.log", "cache/keep/a.txt", "cache/skip/b.txt"):
            with open(os.path.join(main_path, rel), "w") as f:
                f.write(rel)

        result = provisioner.provision(main_path, "feature-a")

        assert sorted(result.copied_entries) == [".env", "cache/keep/a.txt"]
        assert os.path.isfile(os.path.join(result.worktree_path, ".env"))
        assert os.path.isfile(os.path.join(result.worktree_path, "cache", "keep", "a.txt"))
        assert not os.path.exists(os.path.join(result.worktree_path, "cache", "skip"))
        assert not os.path.exists(os.path.join(result.worktree_path, "build.log"))

    def test_copy_failure_leaves_worktree(self, provisioner, git_repo, main_path, home_dir):
        """Test a failed copy propagates and leaves the created worktree in place."""
        with open(os.path.join(main_path, ".env"), "w") as f:
            f.write("x")

        with pytest.MonkeyPatch.context() as mp:
            def fail(*args, **kwargs):
                raise PermissionError("denied")

            mp.setattr("git_worktree_keeper.services.artifacts.shutil.copy2", fail)
            with pytest.raises(PermissionError):
                provisioner.provision(main_path, "feature-a")

        assert "feature-a" in branch_names(git_repo)
        assert os.path.isdir(os.path.join(str(home_dir), "worktrees", "project", "feature-a"))


class TestStrategySelection:
    """Test how the artifact strategy is picked."""

    def test_copy_all_without_manifest(self, main_path):
        """Test CopyAll is used when no manifest exists."""
        strategy = select_artifact_strategy(RepositoryInspector(), main_path, ".worktreeinclude")
        assert isinstance(strategy, CopyAll)

    def test_copy_matching_with_manifest(self, main_path):
        """Test CopyMatching is used when the manifest exists."""
        manifest = os.path.join(main_path, ".worktreeinclude")
        with open(manifest, "w") as f:
            f.write(".env\n")
        strategy = select_artifact_strategy(RepositoryInspector(), main_path, ".worktreeinclude")
        assert isinstance(strategy, CopyMatching)
        assert strategy.manifest_path == manifest
