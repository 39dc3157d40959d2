"""Core functionality for git-task-keeper"""

import os
from typing import List, Optional, Union

from git_task_keeper.config import Config
from git_task_keeper.models.task import TaskInfo, TaskType
from git_task_keeper.services.git import GitOperations, GitPythonGateway, ProcessGateway
from git_task_keeper.services.task_lifecycle import AddResult, RemoveResult, TaskLifecycle
from git_task_keeper.services.task_registry import TaskRegistry
from git_task_keeper.logging_config import get_logger

logger = get_logger(__name__)


class TaskKeeper:
    """Main class for managing task worktrees."""

    def __init__(
        self,
        config: Union[Config, dict, None] = None,
        gateway: Optional[ProcessGateway] = None,
        cwd: Optional[str] = None,
    ):
        """Initialize TaskKeeper.

        Args:
            config: Configuration dict or Config object
            gateway: Process gateway (GitPython-backed when omitted)
            cwd: Directory commands run from (defaults to the current one)
        """
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.cwd = cwd or os.getcwd()
        self.gateway = gateway or GitPythonGateway()

        self.git_service = GitOperations(self.gateway, self.config)
        self.registry = TaskRegistry(self.gateway, self.config)
        self.lifecycle = TaskLifecycle(self.gateway, self.config)
        logger.debug(f"TaskKeeper initialized in {self.cwd}")

    def repo_root(self) -> str:
        """Resolve the repository root of ``cwd``.

        Raises:
            NotAGitRepositoryError: ``cwd`` is not inside a git work tree
            RepoRootUnresolvableError: git could not report the top-level directory
        """
        return self.git_service.resolve_repo_root(self.cwd)

    def base_branch(self, repo_root: str) -> str:
        """Configured base branch, or the repository's default branch."""
        return self.config.base_branch or self.git_service.get_main_branch(repo_root)

    def add(
        self,
        task_name: str,
        task_type: Union[TaskType, str] = TaskType.FEAT,
        base_branch: Optional[str] = None,
        with_agent: bool = False,
        dry_run: bool = False,
    ) -> AddResult:
        """Create a task branch and worktree."""
        if isinstance(task_type, str):
            task_type = TaskType.from_string(task_type)
        return self.lifecycle.add(
            task_name,
            task_type,
            base_branch=base_branch,
            with_agent=with_agent,
            dry_run=dry_run,
            cwd=self.cwd,
        )

    def list(self, repo_root: Optional[str] = None) -> List[TaskInfo]:
        """List task worktrees without status."""
        return self.registry.list_tasks(repo_root or self.repo_root())

    def status(self, repo_root: Optional[str] = None) -> List[TaskInfo]:
        """List task worktrees with ahead/behind counts against the base branch."""
        repo_root = repo_root or self.repo_root()
        return self.registry.list_tasks_with_status(repo_root, self.base_branch(repo_root))

    def remove(self, task_name: str, force: bool = False, keep_branch: bool = False) -> RemoveResult:
        """Remove a task worktree and, unless kept, its branch."""
        return self.lifecycle.remove(task_name, force=force, keep_branch=keep_branch, cwd=self.cwd)
