"""Workspace provisioning: new branch, new worktree, copied ignored files."""

import os
from typing import Mapping, Optional, Union

from git_worktree_keeper.config import Config
from git_worktree_keeper.exceptions import BranchAlreadyExistsError
from git_worktree_keeper.models.worktree import ProvisionResult
from git_worktree_keeper.services.artifacts import select_artifact_strategy
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.git import RepositoryInspector, WorktreeService
from git_worktree_keeper.services.naming import generate_name
from git_worktree_keeper.utils.logging import get_logger
from git_worktree_keeper.utils.paths import resolve_home, worktree_path_for

logger = get_logger(__name__)


class WorkspaceProvisioner:
    """Creates a worktree bound to a fresh branch and makes it usable."""

    def __init__(
        self,
        config: Union[Config, dict],
        inspector: Optional[RepositoryInspector] = None,
        worktree_service: Optional[WorktreeService] = None,
        display: Optional[DisplayService] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the provisioner.

        Args:
            config: Configuration dict or Config object
            inspector: Repository queries (created if omitted)
            worktree_service: Worktree registration (created if omitted)
            display: Progress output (default console if omitted)
            environ: Environment used to resolve the home directory (os.environ if omitted)
        """
        self.config = Config.from_dict(config) if isinstance(config, dict) else config
        self.worktree_service = worktree_service or WorktreeService()
        self.inspector = inspector or RepositoryInspector(self.worktree_service)
        self.display = display or DisplayService()
        self.environ = environ

    def provision(self, cwd: str, explicit_name: Optional[str] = None) -> ProvisionResult:
        """Create a branch and a worktree for it, then copy ignored artifacts.

        Args:
            cwd: Any directory inside the repository, including a secondary worktree
            explicit_name: Branch name; a random one is generated when omitted

        Returns:
            ProvisionResult describing the new worktree

        Raises:
            NotARepositoryError, BranchAlreadyExistsError, NoMainWorktreeError,
            UnparsableWorktreeListingError, HomeNotSetError, GitOperationError,
            OSError (artifact copy; the worktree is left in place)
        """
        self.inspector.require_repository(cwd)

        name_generated = not explicit_name
        branch = explicit_name or generate_name()
        if name_generated:
            self.display.generated_name(branch)

        # Generated names are not retried so that collisions are visible
        if self.inspector.branch_exists(cwd, branch):
            raise BranchAlreadyExistsError(branch)

        main_path = self.inspector.main_worktree(cwd).path

        worktrees_root = self.config.worktrees_root
        home = None if worktrees_root else resolve_home(self.environ)
        worktree_path = worktree_path_for(main_path, branch, home=home, worktrees_root=worktrees_root)
        logger.debug(f"Worktree path for {branch}: {worktree_path}")

        os.makedirs(os.path.dirname(worktree_path), exist_ok=True)

        # Run from the main worktree so this also works from inside another worktree
        self.worktree_service.add_worktree(main_path, worktree_path, branch)

        strategy = select_artifact_strategy(self.inspector, main_path, self.config.include_manifest)
        entries = strategy.entries(main_path)
        if entries:
            self.display.copying_artifacts()
        copied = strategy.copy(main_path, worktree_path, entries=entries, on_entry=self.display.copied_entry)

        self.display.worktree_created(worktree_path)
        return ProvisionResult(
            branch=branch,
            worktree_path=worktree_path,
            main_path=main_path,
            copied_entries=copied,
            name_generated=name_generated,
        )
