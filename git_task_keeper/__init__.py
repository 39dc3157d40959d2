"""
git-task-keeper - Isolated git worktrees for concurrent tasks
"""

from .__version__ import __version__
from .core import TaskKeeper
from .cli.main import main

__all__ = ["TaskKeeper", "main", "__version__"]
