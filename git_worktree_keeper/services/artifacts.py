"""Copying ignored-but-needed files into a new worktree.

Two strategies share one interface:

- ``CopyAll`` copies every ignored entry, whole directories at a time.
- ``CopyMatching`` copies only ignored files that also match the patterns in
  an include manifest (gitignore syntax, e.g. ``.worktreeinclude``).

``select_artifact_strategy`` picks ``CopyMatching`` when the manifest exists
in the main worktree.
"""

import os
import shutil
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from git_worktree_keeper.services.git.inspector import RepositoryInspector
from git_worktree_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def copy_entry(source_root: str, dest_root: str, entry: str) -> None:
    """Copy ``entry`` (relative to ``source_root``) to the same relative path under ``dest_root``.

    Directories are copied recursively and merged into existing ones; symlinks
    are copied as links.
    """
    relative = entry.rstrip("/")
    src = os.path.join(source_root, relative)
    dest = os.path.join(dest_root, relative)

    if os.path.isdir(src) and not os.path.islink(src):
        shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True)
    else:
        parent = os.path.dirname(dest)
        if parent:
            os.makedirs(parent, exist_ok=True)
        shutil.copy2(src, dest, follow_symlinks=False)


class ArtifactStrategy(ABC):
    """Decides which ignored entries of the main worktree get copied."""

    name = "base"

    def __init__(self, inspector: RepositoryInspector):
        self.inspector = inspector

    @abstractmethod
    def entries(self, source_root: str) -> List[str]:
        """Entries to copy, relative to ``source_root``, in copy order."""

    def copy(
        self,
        source_root: str,
        dest_root: str,
        entries: Optional[List[str]] = None,
        on_entry: Optional[Callable[[str], None]] = None,
    ) -> List[str]:
        """Copy every entry into ``dest_root``.

        ``entries`` defaults to ``self.entries(source_root)``.

        The first failing copy raises and stops the run; entries already
        copied stay in place.

        Returns:
            The copied entries in copy order
        """
        copied = []
        if entries is None:
            entries = self.entries(source_root)
        for entry in entries:
            if on_entry:
                on_entry(entry)
            logger.debug(f"Copying {entry} -> {dest_root}")
            copy_entry(source_root, dest_root, entry)
            copied.append(entry)
        logger.info(f"Copied {len(copied)} ignored entries ({self.name})")
        return copied


class CopyAll(ArtifactStrategy):
    """Copy every ignored entry; wholly ignored directories count as one entry."""

    name = "copy-all"

    def entries(self, source_root: str) -> List[str]:
        return self.inspector.ignored_untracked_entries(source_root, collapse_directories=True)


class CopyMatching(ArtifactStrategy):
    """Copy ignored files that also match the patterns of an include manifest."""

    name = "copy-matching"

    def __init__(self, inspector: RepositoryInspector, manifest_path: str):
        super().__init__(inspector)
        self.manifest_path = manifest_path

    def entries(self, source_root: str) -> List[str]:
        ignored = self.inspector.ignored_untracked_entries(source_root, collapse_directories=False)
        included = set(self.inspector.untracked_matching(source_root, self.manifest_path))
        return [entry for entry in ignored if entry in included]


def select_artifact_strategy(
    inspector: RepositoryInspector, source_root: str, manifest_name: str
) -> ArtifactStrategy:
    """Use ``CopyMatching`` if ``manifest_name`` exists in ``source_root``, else ``CopyAll``."""
    manifest_path = os.path.join(source_root, manifest_name)
    if os.path.isfile(manifest_path):
        logger.debug(f"Using include manifest {manifest_path}")
        return CopyMatching(inspector, manifest_path)
    return CopyAll(inspector)
