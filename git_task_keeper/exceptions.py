"""Custom exceptions for git-task-keeper"""

from typing import Optional


class TaskKeeperError(Exception):
    """Base exception for all git-task-keeper errors."""

    exit_code = 1


class ValidationError(TaskKeeperError):
    """Exception raised when a name, branch or path fails validation."""

    exit_code = 2

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class NotAGitRepositoryError(TaskKeeperError):
    """Exception raised when the working directory is not inside a git work tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class RepoRootUnresolvableError(TaskKeeperError):
    """Exception raised when the repository root cannot be determined."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Could not determine repository root from {path}")


class NameCollisionError(TaskKeeperError):
    """Exception raised when a branch or worktree path already exists."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        if kind == "branch":
            message = f'Branch "{value}" already exists'
        else:
            message = f"Worktree path already exists: {value}"
        super().__init__(message)


class TaskNotFoundError(TaskKeeperError):
    """Exception raised when no task worktree matches a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Task "{name}" not found')


class DirtyWorktreeError(TaskKeeperError):
    """Exception raised when removing a worktree with uncommitted changes."""

    def __init__(self, name: str, path: str):
        self.name = name
        self.path = path
        super().__init__(
            f'Task "{name}" has uncommitted changes. Use --force to remove anyway.'
        )


class ExternalToolError(TaskKeeperError):
    """Exception raised when an external command exits with a failure."""

    def __init__(self, operation: str, stderr: Optional[str] = None, exit_code: Optional[int] = None):
        self.operation = operation
        self.stderr = (stderr or "").strip()
        self.returncode = exit_code

        error_msg = f"'{operation}' failed"
        if exit_code is not None:
            error_msg += f" (exit {exit_code})"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)


class FilesystemError(TaskKeeperError):
    """Exception raised when a local directory or file cannot be created."""

    def __init__(self, operation: str, path: str, reason: str):
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(f"Could not {operation} {path}: {reason}")
