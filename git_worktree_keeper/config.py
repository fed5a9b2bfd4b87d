"""Configuration handling for git-worktree-keeper"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from git_worktree_keeper.constants import (
    DEFAULT_ASSISTANT_COMMAND,
    DEFAULT_INCLUDE_MANIFEST,
    ENV_ASSISTANT,
    ENV_DEBUG,
    ENV_INCLUDE_FILE,
    ENV_MERGE_MODE,
    ENV_ROOT,
    ENV_VERBOSE,
    LOG_DISPLAY_LIMIT,
    MERGE_MODES,
    MergeMode,
)

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Read a boolean environment variable (1/true/yes/on, case-insensitive)."""
    if environ is None:
        environ = os.environ
    return environ.get(name, "").strip().lower() in _TRUTHY


@dataclass
class Config:
    """Configuration for git-worktree-keeper with validation."""

    # Provisioning
    worktrees_root: Optional[str] = None  # None = <home>/worktrees
    assistant_command: str = DEFAULT_ASSISTANT_COMMAND
    include_manifest: str = DEFAULT_INCLUDE_MANIFEST

    # Reconciliation
    merge_mode: str = MergeMode.FAST_FORWARD_AND_DELETE
    delete_branch: bool = True
    log_display_limit: int = LOG_DISPLAY_LIMIT

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_assistant_command()
        self._validate_include_manifest()
        self._validate_merge_mode()
        self._validate_log_display_limit()

    def _validate_assistant_command(self):
        """Validate assistant_command is not empty."""
        if not self.assistant_command or not self.assistant_command.strip():
            raise ValueError("assistant_command cannot be empty")
        self.assistant_command = self.assistant_command.strip()

    def _validate_include_manifest(self):
        """Validate include_manifest is a plain relative file name."""
        if not self.include_manifest or os.path.isabs(self.include_manifest):
            raise ValueError(
                f"include_manifest must be a path relative to the repository root, got '{self.include_manifest}'"
            )

    def _validate_merge_mode(self):
        """Validate merge_mode is one of allowed values."""
        if self.merge_mode not in MERGE_MODES:
            raise ValueError(f"merge_mode must be one of {MERGE_MODES}, got '{self.merge_mode}'")

    def _validate_log_display_limit(self):
        """Validate log_display_limit is positive."""
        if self.log_display_limit <= 0:
            raise ValueError(f"log_display_limit must be positive, got {self.log_display_limit}")

    @property
    def fast_forward_main(self) -> bool:
        return self.merge_mode == MergeMode.FAST_FORWARD_AND_DELETE

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktrees_root": self.worktrees_root,
            "assistant_command": self.assistant_command,
            "include_manifest": self.include_manifest,
            "merge_mode": self.merge_mode,
            "delete_branch": self.delete_branch,
            "log_display_limit": self.log_display_limit,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "worktrees_root",
            "assistant_command",
            "include_manifest",
            "merge_mode",
            "delete_branch",
            "log_display_limit",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        """Create Config from GIT_WORKTREE_KEEPER_* variables.

        Keyword overrides win over the environment; None values are ignored.
        """
        if environ is None:
            environ = os.environ

        values = {}
        if environ.get(ENV_ROOT):
            values["worktrees_root"] = environ[ENV_ROOT]
        if environ.get(ENV_ASSISTANT):
            values["assistant_command"] = environ[ENV_ASSISTANT]
        if environ.get(ENV_INCLUDE_FILE):
            values["include_manifest"] = environ[ENV_INCLUDE_FILE]
        if environ.get(ENV_MERGE_MODE):
            values["merge_mode"] = environ[ENV_MERGE_MODE]
        if ENV_VERBOSE in environ:
            values["verbose"] = env_flag(ENV_VERBOSE, environ)
        if ENV_DEBUG in environ:
            values["debug"] = env_flag(ENV_DEBUG, environ)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(values)
