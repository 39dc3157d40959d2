"""Core orchestration for git-task-keeper."""

from .task_keeper import TaskKeeper

__all__ = ["TaskKeeper"]
