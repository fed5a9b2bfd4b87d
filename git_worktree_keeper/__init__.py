"""
git-worktree-keeper - Disposable git worktrees that merge back cleanly
"""

from .__version__ import __version__
from .services.provisioner import WorkspaceProvisioner
from .services.reconciler import ReconciliationEngine

__all__ = ["WorkspaceProvisioner", "ReconciliationEngine", "__version__"]
