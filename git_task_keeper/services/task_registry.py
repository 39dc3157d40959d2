"""Service for finding task worktrees and their status"""

import os
from typing import List, Optional, Union, TYPE_CHECKING

from git_task_keeper.exceptions import TaskKeeperError
from git_task_keeper.models.task import TaskInfo, TaskType
from git_task_keeper.services.git.operations import GitOperations
from git_task_keeper.services.git.process import ProcessGateway
from git_task_keeper.services.git.worktrees import WorktreeService
from git_task_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_task_keeper.config import Config

logger = get_logger(__name__)


def _is_inside(path: str, directory: str) -> bool:
    """True when ``path`` lies below ``directory``."""
    path = os.path.normpath(os.path.realpath(path))
    directory = os.path.normpath(os.path.realpath(directory))
    return path.startswith(directory.rstrip(os.sep) + os.sep)


class TaskRegistry:
    """Read-only view of the task worktrees of a repository.

    Nothing is cached: every call lists worktrees through git again.
    """

    def __init__(self, gateway: ProcessGateway, config: Union["Config", dict, None] = None):
        """Initialize the registry."""
        self.config = config or {}
        self.tasks_dir_suffix = self.config.get("tasks_dir_suffix", "-tasks")
        self.git = GitOperations(gateway, self.config)
        self.worktrees = WorktreeService(gateway)

    def tasks_dir(self, repo_root: str) -> str:
        """Directory holding task worktrees: a sibling of the repository root."""
        project_name = GitOperations.get_project_name(repo_root)
        parent = os.path.dirname(os.path.normpath(repo_root))
        return os.path.join(parent, f"{project_name}{self.tasks_dir_suffix}")

    def list_tasks(self, repo_root: str) -> List[TaskInfo]:
        """List task worktrees in git's listing order, without status."""
        tasks_dir = self.tasks_dir(repo_root)
        tasks = []

        for record in self.worktrees.list_worktrees(repo_root):
            if not _is_inside(record.path, tasks_dir):
                continue
            tasks.append(TaskInfo(
                name=os.path.basename(os.path.normpath(record.path)),
                path=record.path,
                branch=record.branch,
                type=TaskType.from_branch(record.branch),
            ))

        logger.debug(f"Found {len(tasks)} tasks under {tasks_dir}")
        return tasks

    def list_tasks_with_status(self, repo_root: str, base_branch: str) -> List[TaskInfo]:
        """List task worktrees with ahead/behind counts and the dirty flag.

        Tasks are enriched one after another. A git failure for one task
        leaves that task at (0, 0) and clean; the others are unaffected.
        """
        return [self._with_status(task, base_branch) for task in self.list_tasks(repo_root)]

    def _with_status(self, task: TaskInfo, base_branch: str) -> TaskInfo:
        try:
            ahead, behind = self.git.get_ahead_behind(task.path, base_branch)
        except TaskKeeperError as e:
            logger.warning(f"Could not compare {task.name} with {base_branch}: {e}")
            ahead, behind = 0, 0

        try:
            has_changes = self.git.has_uncommitted_changes(task.path)
        except TaskKeeperError as e:
            logger.warning(f"Could not check working tree of {task.name}: {e}")
            has_changes = False

        return task.with_status(ahead, behind, has_changes)

    def find_task(self, repo_root: str, task_name: str) -> Optional[TaskInfo]:
        """Find a task by exact name or by its ``-<task_name>`` suffix.

        Returns:
            The first match in listing order, or None
        """
        for task in self.list_tasks(repo_root):
            if task.name == task_name or task.name.endswith(f"-{task_name}"):
                return task
        return None
