"""Data models for git-task-keeper."""
