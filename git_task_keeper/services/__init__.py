"""Services for git-task-keeper."""
