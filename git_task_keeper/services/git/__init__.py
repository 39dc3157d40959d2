"""Git-related services for git-task-keeper."""

from .process import GitPythonGateway, ProcessGateway, ProcessResult
from .operations import GitOperations
from .worktrees import WorktreeService, parse_worktree_porcelain

__all__ = [
    "GitPythonGateway",
    "ProcessGateway",
    "ProcessResult",
    "GitOperations",
    "WorktreeService",
    "parse_worktree_porcelain",
]
