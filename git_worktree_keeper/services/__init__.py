"""Services for git-worktree-keeper."""

from .artifacts import ArtifactStrategy, CopyAll, CopyMatching, select_artifact_strategy
from .display_service import DisplayService
from .launcher import SessionLauncher
from .naming import generate_name
from .provisioner import WorkspaceProvisioner
from .reconciler import ReconciliationEngine

__all__ = [
    "ArtifactStrategy",
    "CopyAll",
    "CopyMatching",
    "select_artifact_strategy",
    "DisplayService",
    "SessionLauncher",
    "generate_name",
    "WorkspaceProvisioner",
    "ReconciliationEngine",
]
