"""Name and path validation for git-task-keeper.

Every user-supplied task name, branch name and path passes through these
checks before it is placed on a git command line.
"""

import os
import re
from typing import Optional

MAX_BRANCH_NAME_LENGTH = 255
MAX_TASK_NAME_LENGTH = 50

# Sequences git-check-ref-format refuses anywhere in a ref name
FORBIDDEN_BRANCH_SEQUENCES = ["..", "@{", "\\", " ", "~", "^", ":", "?", "*", "["]

_TASK_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")


def validate_branch_name(name: str) -> Optional[str]:
    """
    Validate a git branch name according to git-check-ref-format rules.

    Args:
        name: Branch name to check

    Returns:
        None if the name is valid, otherwise the reason for the first violation
    """
    if not name:
        return "Branch name cannot be empty"
    if len(name) > MAX_BRANCH_NAME_LENGTH:
        return f"Branch name must be {MAX_BRANCH_NAME_LENGTH} characters or less"

    if name.startswith("-"):
        return "Branch name cannot start with a hyphen"

    if name.startswith("/") or name.endswith("/"):
        return "Branch name cannot start or end with a slash"

    if "//" in name:
        return "Branch name cannot contain consecutive slashes"

    if name.endswith(".lock"):
        return "Branch name cannot end with .lock"

    for seq in FORBIDDEN_BRANCH_SEQUENCES:
        if seq in name:
            return f'Branch name cannot contain "{seq}"'

    for char in name:
        code = ord(char)
        if code < 32 or code == 127:
            return "Branch name cannot contain control characters"

    for component in name.split("/"):
        if component.startswith("."):
            return "Branch name components cannot start with a dot"
        if component.endswith("."):
            return "Branch name components cannot end with a dot"

    return None


def validate_task_name(name: str) -> Optional[str]:
    """
    Validate a task name used for branch and worktree directory names.

    Args:
        name: Task name to check

    Returns:
        None if the name is valid, otherwise the reason it was rejected
    """
    if not name:
        return "Task name cannot be empty"
    if len(name) > MAX_TASK_NAME_LENGTH:
        return f"Task name must be {MAX_TASK_NAME_LENGTH} characters or less"

    if not _TASK_NAME_PATTERN.match(name):
        return (
            "Task name must start with a letter and contain only "
            "letters, numbers, hyphens, and underscores"
        )

    if ".." in name or "/" in name or "\\" in name:
        return "Task name cannot contain path separators"

    return None


def validate_path(path: str, base: Optional[str] = None) -> Optional[str]:
    """
    Validate that a path does not escape through traversal sequences.

    Args:
        path: Path to check, absolute or relative
        base: Optional directory the path must stay inside. Relative paths
            are resolved against it.

    Returns:
        None if the path is safe, otherwise the reason it was rejected
    """
    if "\x00" in path:
        return "Path contains null bytes"

    normalized = os.path.normpath(path)
    if ".." in normalized.replace("\\", "/").split("/"):
        return "Path contains directory traversal sequences"

    if base is not None:
        candidate = path if os.path.isabs(path) else os.path.join(base, path)
        resolved_path = os.path.normpath(os.path.abspath(candidate))
        resolved_base = os.path.normpath(os.path.abspath(base))

        if resolved_path != resolved_base and not resolved_path.startswith(
            resolved_base.rstrip(os.sep) + os.sep
        ):
            return "Path escapes base directory"

    return None


def is_valid_branch_name(name: str) -> bool:
    """Check if a git branch name is valid."""
    return validate_branch_name(name) is None


def is_valid_task_name(name: str) -> bool:
    """Check if a task name is valid."""
    return validate_task_name(name) is None


def is_path_safe(path: str, base: Optional[str] = None) -> bool:
    """Check if a path is safe (no traversal, within optional base)."""
    return validate_path(path, base) is None


def sanitize_for_console(text: str) -> str:
    """Strip ANSI escape codes and control characters other than newline and tab."""
    text = _ANSI_PATTERN.sub("", text)
    return "".join(ch for ch in text if ord(ch) >= 32 or ch in "\n\t")
