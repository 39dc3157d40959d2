"""Git operations service"""

import os
import re
from typing import TYPE_CHECKING, Optional, Tuple, Union

from git_task_keeper.exceptions import (
    ExternalToolError,
    NotAGitRepositoryError,
    RepoRootUnresolvableError,
    ValidationError,
)
from git_task_keeper.services.git.process import ProcessGateway, ProcessResult
from git_task_keeper.services.validation_service import validate_branch_name
from git_task_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_task_keeper.config import Config

logger = get_logger(__name__)

DEFAULT_BRANCH_CANDIDATES = ("main", "master")


class GitOperations:
    """Service for Git queries and branch operations."""

    def __init__(self, gateway: ProcessGateway, config: Union["Config", dict, None] = None):
        """Initialize the service.

        Args:
            gateway: Process gateway used to run git
            config: Configuration dictionary or Config object
        """
        self.gateway = gateway
        self.config = config or {}
        self.remote_name = self.config.get("remote_name", "origin")

    def _git(self, path: str, *args: str) -> ProcessResult:
        return self.gateway.run("git", list(args), path)

    def is_git_repo(self, path: str) -> bool:
        """Check if a path is inside a git work tree."""
        result = self._git(path, "rev-parse", "--is-inside-work-tree")
        return result.success and result.stdout.strip() == "true"

    def get_repo_root(self, path: str) -> Optional[str]:
        """Get the top-level directory of the repository containing ``path``."""
        result = self._git(path, "rev-parse", "--show-toplevel")
        if result.success and result.stdout.strip():
            return result.stdout.strip()
        return None

    def resolve_repo_root(self, path: str) -> str:
        """Resolve the repository root, raising if ``path`` is not in a work tree.

        Raises:
            NotAGitRepositoryError: ``path`` is not inside a git work tree
            RepoRootUnresolvableError: git could not report the top-level directory
        """
        if not self.is_git_repo(path):
            raise NotAGitRepositoryError(path)
        repo_root = self.get_repo_root(path)
        if repo_root is None:
            raise RepoRootUnresolvableError(path)
        return repo_root

    def get_current_branch(self, path: str) -> str:
        """Get the branch checked out at ``path``, ``HEAD`` when detached or unknown."""
        result = self._git(path, "rev-parse", "--abbrev-ref", "HEAD")
        if result.success and result.stdout.strip():
            return result.stdout.strip()
        return "HEAD"

    def get_main_branch(self, repo_root: str) -> str:
        """Get the default branch: origin's HEAD, then main, then master, else main."""
        result = self._git(repo_root, "symbolic-ref", f"refs/remotes/{self.remote_name}/HEAD", "--short")
        if result.success and result.stdout.strip():
            # Returns something like "origin/main"
            branch = result.stdout.strip()
            prefix = f"{self.remote_name}/"
            if branch.startswith(prefix):
                branch = branch[len(prefix):]
            logger.debug(f"Default branch from {self.remote_name}/HEAD: {branch}")
            return branch

        for candidate in DEFAULT_BRANCH_CANDIDATES:
            if self.branch_exists(repo_root, candidate):
                logger.debug(f"Default branch from local refs: {candidate}")
                return candidate

        return DEFAULT_BRANCH_CANDIDATES[0]

    def branch_exists(self, repo_root: str, branch_name: str) -> bool:
        """Check if a local branch exists. Invalid names never exist."""
        if validate_branch_name(branch_name):
            return False
        result = self._git(repo_root, "show-ref", "--verify", "--quiet", f"refs/heads/{branch_name}")
        return result.success

    def get_ahead_behind(self, path: str, base_branch: str) -> Tuple[int, int]:
        """Count commits unique to the branch at ``path`` and to ``base_branch``.

        Uses ``git rev-list --left-right --count base...current``: the left
        column counts commits only on the base (behind), the right column
        commits only on the task branch (ahead).

        Returns:
            Tuple of (ahead, behind)

        Raises:
            ExternalToolError: git failed or printed something unexpected
        """
        current = self.get_current_branch(path)
        result = self._git(path, "rev-list", "--left-right", "--count", f"{base_branch}...{current}")
        if result.failed:
            raise ExternalToolError("git rev-list", result.stderr, result.exit_code)

        parts = re.split(r"\s+", result.stdout.strip())
        if len(parts) < 2 or not (parts[0].isdigit() and parts[1].isdigit()):
            raise ExternalToolError("git rev-list", f"unexpected output {result.stdout.strip()!r}")

        behind, ahead = int(parts[0]), int(parts[1])
        return ahead, behind

    def has_uncommitted_changes(self, path: str) -> bool:
        """Check if the working tree at ``path`` has uncommitted changes.

        Raises:
            ExternalToolError: git status failed
        """
        result = self._git(path, "status", "--porcelain")
        if result.failed:
            raise ExternalToolError("git status", result.stderr, result.exit_code)
        return bool(result.stdout.strip())

    def delete_branch(self, repo_root: str, branch_name: str, force: bool = False) -> ProcessResult:
        """Delete a local branch, with -D when ``force`` else the safe -d.

        Raises:
            ValidationError: the branch name is invalid
        """
        reason = validate_branch_name(branch_name)
        if reason:
            raise ValidationError("branch name", reason)

        result = self._git(repo_root, "branch", "-D" if force else "-d", branch_name)
        if result.success:
            logger.info(f"Deleted branch {branch_name}")
        else:
            logger.warning(f"Could not delete branch {branch_name}: {result.stderr.strip()}")
        return result

    @staticmethod
    def get_project_name(repo_root: str) -> str:
        """Get the project name from the repository directory."""
        return os.path.basename(os.path.normpath(repo_root)) or "project"
