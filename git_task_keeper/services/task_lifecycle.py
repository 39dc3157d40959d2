"""Task creation and removal for git-task-keeper.

``TaskLifecycle.add`` and ``TaskLifecycle.remove`` run their pre-flight
checks, perform the one mutating git call and report the outcome as a
result object. Errors are returned on the result, never raised.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING

from git_task_keeper.exceptions import (
    DirtyWorktreeError,
    ExternalToolError,
    FilesystemError,
    NameCollisionError,
    TaskKeeperError,
    TaskNotFoundError,
    ValidationError,
)
from git_task_keeper.models.task import TaskInfo, TaskName, TaskType
from git_task_keeper.models.worktree import DETACHED
from git_task_keeper.services.git.operations import GitOperations
from git_task_keeper.services.git.process import ProcessGateway
from git_task_keeper.services.git.worktrees import WorktreeService
from git_task_keeper.services.task_registry import TaskRegistry
from git_task_keeper.services.validation_service import validate_branch_name, validate_path
from git_task_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_task_keeper.config import Config

logger = get_logger(__name__)

TASK_BRIEF_TEMPLATE = """# Task: {task_name}

## Type
{type_title}

## Branch
`{branch_name}`

## Description
<!-- Describe the task here -->

## Acceptance Criteria
- [ ] <!-- Criterion 1 -->
- [ ] <!-- Criterion 2 -->

## Notes
<!-- Any additional context for the AI agent -->
"""


def render_task_brief(task_name: str, branch_name: str, task_type: TaskType) -> str:
    """Render the markdown brief written into an agent task worktree."""
    return TASK_BRIEF_TEMPLATE.format(
        task_name=task_name,
        type_title=task_type.title,
        branch_name=branch_name,
    )


@dataclass
class AddResult:
    """Outcome of TaskLifecycle.add."""
    task_name: str
    task_type: TaskType
    branch_name: str = ""
    worktree_path: str = ""
    base_branch: str = ""
    dry_run: bool = False
    brief_path: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    error: Optional[TaskKeeperError] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class RemoveResult:
    """Outcome of TaskLifecycle.remove."""
    task_name: str
    task: Optional[TaskInfo] = None
    branch_deleted: bool = False
    warnings: List[str] = field(default_factory=list)
    error: Optional[TaskKeeperError] = None

    @property
    def success(self) -> bool:
        return self.error is None


class TaskLifecycle:
    """Creates and removes task worktrees."""

    def __init__(self, gateway: ProcessGateway, config: Union["Config", dict, None] = None):
        """Initialize the lifecycle service.

        Args:
            gateway: Process gateway used for git and the agent setup command
            config: Configuration dictionary or Config object
        """
        self.gateway = gateway
        self.config = config or {}
        self.git = GitOperations(gateway, self.config)
        self.worktrees = WorktreeService(gateway)
        self.registry = TaskRegistry(gateway, self.config)

    def add(
        self,
        task_name: str,
        task_type: TaskType = TaskType.FEAT,
        base_branch: Optional[str] = None,
        with_agent: bool = False,
        dry_run: bool = False,
        cwd: Optional[str] = None,
    ) -> AddResult:
        """Create a branch and worktree for a new task.

        Args:
            task_name: Task identifier, combined with the type prefix
            task_type: Kind of task, decides the branch prefix
            base_branch: Branch to start from (detected when omitted)
            with_agent: Run the setup command and write the task brief
            dry_run: Run every check but create nothing
            cwd: Directory to resolve the repository from (defaults to the current one)

        Returns:
            AddResult; ``error`` is set when the task was not created
        """
        result = AddResult(task_name=task_name, task_type=task_type, dry_run=dry_run)
        try:
            self._add(result, base_branch, with_agent, cwd or os.getcwd())
        except TaskKeeperError as e:
            logger.debug(f"Task add failed: {e}")
            result.error = e
        return result

    def _add(self, result: AddResult, base_branch: Optional[str], with_agent: bool, cwd: str) -> None:
        name = TaskName(result.task_name)
        repo_root = self.git.resolve_repo_root(cwd)

        if base_branch is None:
            base_branch = self.config.get("base_branch") or self.git.get_main_branch(repo_root)
        reason = validate_branch_name(base_branch)
        if reason:
            raise ValidationError("base branch", reason)

        branch = result.task_type.branch_for(name)
        tasks_dir = self.registry.tasks_dir(repo_root)
        worktree_path = os.path.join(tasks_dir, result.task_type.directory_for(name))
        reason = validate_path(worktree_path, base=tasks_dir)
        if reason:
            raise ValidationError("worktree path", reason)

        result.branch_name = str(branch)
        result.worktree_path = worktree_path
        result.base_branch = base_branch

        # Existence checks run immediately before the mutating call
        if self.git.branch_exists(repo_root, branch.name):
            raise NameCollisionError("branch", branch.name)
        if os.path.exists(worktree_path):
            raise NameCollisionError("path", worktree_path)

        if result.dry_run:
            logger.info(f"Dry run: would create {branch} from {base_branch} at {worktree_path}")
            return

        try:
            Path(tasks_dir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError("create task directory", tasks_dir, e.strerror or str(e)) from e

        created = self.worktrees.add_worktree(repo_root, worktree_path, branch.name, base_branch)
        if created.failed:
            raise ExternalToolError("git worktree add", created.stderr, created.exit_code)

        if with_agent:
            self._setup_agent(result, worktree_path, str(name), branch.name)

    def _setup_agent(self, result: AddResult, worktree_path: str, task_name: str, branch_name: str) -> None:
        setup_command = list(self.config.get("setup_command", ["pip", "install", "-e", "."]))
        setup = self.gateway.run(setup_command[0], setup_command[1:], worktree_path)
        if setup.failed:
            warning = f"Setup command '{' '.join(setup_command)}' failed: {setup.stderr.strip()}"
            logger.warning(warning)
            result.warnings.append(warning)

        brief_rel = self.config.get("brief_path", ".claude/TASK.md")
        reason = validate_path(brief_rel, base=worktree_path)
        if reason:
            raise ValidationError("brief path", reason)

        brief_path = Path(worktree_path) / brief_rel
        try:
            brief_path.parent.mkdir(parents=True, exist_ok=True)
            brief_path.write_text(render_task_brief(task_name, branch_name, result.task_type), encoding="utf-8")
        except OSError as e:
            # The worktree already exists, so the task stays created
            warning = f"Could not write task brief {brief_path}: {e.strerror or e}"
            logger.warning(warning)
            result.warnings.append(warning)
            return
        result.brief_path = str(brief_path)
        logger.info(f"Wrote task brief to {brief_path}")

    def remove(
        self,
        task_name: str,
        force: bool = False,
        keep_branch: bool = False,
        cwd: Optional[str] = None,
    ) -> RemoveResult:
        """Remove a task worktree and, unless kept, its branch.

        Args:
            task_name: Task name or the suffix after its type prefix
            force: Remove even with uncommitted changes and force-delete the branch
            keep_branch: Leave the branch in place
            cwd: Directory to resolve the repository from (defaults to the current one)

        Returns:
            RemoveResult; ``error`` is set when the worktree was not removed.
            A branch that could not be deleted is only a warning.
        """
        result = RemoveResult(task_name=task_name)
        try:
            self._remove(result, force, keep_branch, cwd or os.getcwd())
        except TaskKeeperError as e:
            logger.debug(f"Task remove failed: {e}")
            result.error = e
        return result

    def _remove(self, result: RemoveResult, force: bool, keep_branch: bool, cwd: str) -> None:
        TaskName(result.task_name)
        repo_root = self.git.resolve_repo_root(cwd)

        task = self.registry.find_task(repo_root, result.task_name)
        if task is None:
            raise TaskNotFoundError(result.task_name)
        result.task = task

        if not force and self.git.has_uncommitted_changes(task.path):
            raise DirtyWorktreeError(task.name, task.path)

        removed = self.worktrees.remove_worktree(repo_root, task.path, force=force)
        if removed.failed:
            raise ExternalToolError("git worktree remove", removed.stderr, removed.exit_code)

        pruned = self.worktrees.prune_worktrees(repo_root)
        if pruned.failed:
            result.warnings.append(f"Could not prune worktrees: {pruned.stderr.strip()}")

        if keep_branch or task.branch == DETACHED:
            return

        # Branch deletion failures are warnings, even under force
        try:
            deleted = self.git.delete_branch(repo_root, task.branch, force=force)
        except ValidationError as e:
            result.warnings.append(f"Could not delete branch {task.branch}: {e}")
            return
        if deleted.success:
            result.branch_deleted = True
        else:
            result.warnings.append(f"Could not delete branch {task.branch}: {deleted.stderr.strip()}")
