"""Configuration handling for git-task-keeper"""

import os
import shlex
from dataclasses import dataclass, field
from typing import List, Optional

from git_task_keeper.services.validation_service import validate_branch_name, validate_path

ENV_BASE_BRANCH = "GIT_TASK_KEEPER_BASE_BRANCH"
ENV_REMOTE = "GIT_TASK_KEEPER_REMOTE"
ENV_SETUP_CMD = "GIT_TASK_KEEPER_SETUP_CMD"


@dataclass
class Config:
    """Configuration for git-task-keeper with validation."""

    # Repository layout
    remote_name: str = "origin"
    tasks_dir_suffix: str = "-tasks"  # Task worktrees live in ../<repo><suffix>/
    base_branch: Optional[str] = None  # None = detect from origin/HEAD, main, master

    # Agent setup
    setup_command: List[str] = field(default_factory=lambda: ["pip", "install", "-e", "."])
    brief_path: str = ".claude/TASK.md"

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_tasks_dir_suffix()
        self._validate_base_branch()
        self._validate_setup_command()
        self._validate_brief_path()

    def _validate_remote_name(self):
        """Validate remote_name is a usable ref component."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()
        reason = validate_branch_name(self.remote_name)
        if reason:
            raise ValueError(f"remote_name is invalid: {reason}")

    def _validate_tasks_dir_suffix(self):
        """Validate tasks_dir_suffix cannot point outside the repository's parent."""
        if not self.tasks_dir_suffix:
            raise ValueError("tasks_dir_suffix cannot be empty")
        if "/" in self.tasks_dir_suffix or "\\" in self.tasks_dir_suffix or ".." in self.tasks_dir_suffix:
            raise ValueError(f"tasks_dir_suffix cannot contain path separators, got '{self.tasks_dir_suffix}'")

    def _validate_base_branch(self):
        """Validate base_branch when one is configured."""
        if self.base_branch is None:
            return
        reason = validate_branch_name(self.base_branch)
        if reason:
            raise ValueError(f"base_branch is invalid: {reason}")

    def _validate_setup_command(self):
        """Validate setup_command is a non-empty list of strings."""
        if isinstance(self.setup_command, str):
            self.setup_command = shlex.split(self.setup_command)
        if not isinstance(self.setup_command, list) or not self.setup_command:
            raise ValueError("setup_command must be a non-empty list")
        if not all(isinstance(part, str) and part for part in self.setup_command):
            raise ValueError("setup_command entries must be non-empty strings")

    def _validate_brief_path(self):
        """Validate brief_path is relative and stays inside the worktree."""
        if not self.brief_path or os.path.isabs(self.brief_path):
            raise ValueError(f"brief_path must be a relative path, got '{self.brief_path}'")
        reason = validate_path(self.brief_path)
        if reason:
            raise ValueError(f"brief_path is invalid: {reason}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote_name": self.remote_name,
            "tasks_dir_suffix": self.tasks_dir_suffix,
            "base_branch": self.base_branch,
            "setup_command": list(self.setup_command),
            "brief_path": self.brief_path,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "remote_name",
            "tasks_dir_suffix",
            "base_branch",
            "setup_command",
            "brief_path",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Create Config from GIT_TASK_KEEPER_* environment variables.

        Keyword arguments take precedence over the environment; ``None``
        values are treated as not given.
        """
        values = {}
        if os.environ.get(ENV_BASE_BRANCH):
            values["base_branch"] = os.environ[ENV_BASE_BRANCH]
        if os.environ.get(ENV_REMOTE):
            values["remote_name"] = os.environ[ENV_REMOTE]
        if os.environ.get(ENV_SETUP_CMD):
            values["setup_command"] = shlex.split(os.environ[ENV_SETUP_CMD])

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(values)
