"""Version information for git-task-keeper."""

__version__ = "0.1.0"
