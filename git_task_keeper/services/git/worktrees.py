"""Worktree operations service for git-task-keeper."""

from typing import Any, Dict, List, Optional

from git_task_keeper.models.worktree import DETACHED, WorktreeRecord
from git_task_keeper.services.git.process import ProcessGateway, ProcessResult
from git_task_keeper.logging_config import get_logger

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"


def _build_record(current: Dict[str, Any]) -> WorktreeRecord:
    return WorktreeRecord(
        path=current["path"],
        head=current.get("HEAD", ""),
        branch=current.get("branch", DETACHED),
        is_bare=current.get("bare", False),
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeRecord]:
    """Parse the output of `git worktree list --porcelain`.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached", or "bare")
        (blank line between worktrees)

    Lines with other tokens (locked, prunable, ...) are ignored. A final
    block without a trailing blank line is still returned.

    Args:
        output: Raw porcelain text

    Returns:
        WorktreeRecord list in the order git printed them
    """
    records: List[WorktreeRecord] = []
    current: Dict[str, Any] = {}

    for line in output.split("\n"):
        line = line.rstrip("\r")

        if not line.strip():
            # Empty line marks end of worktree entry
            if "path" in current:
                records.append(_build_record(current))
            current = {}
            continue

        if line.startswith("worktree "):
            current["path"] = line[len("worktree "):]
        elif line.startswith("HEAD "):
            current["HEAD"] = line[len("HEAD "):]
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):]
            if branch_ref.startswith(BRANCH_REF_PREFIX):
                branch_ref = branch_ref[len(BRANCH_REF_PREFIX):]
            current["branch"] = branch_ref
        elif line == "bare":
            current["bare"] = True
        elif line.startswith("detached"):
            current["branch"] = DETACHED

    # Handle last entry if no trailing blank line
    if "path" in current:
        records.append(_build_record(current))

    return records


class WorktreeService:
    """Service for querying and changing git worktrees."""

    def __init__(self, gateway: ProcessGateway):
        """Initialize the worktree service.

        Args:
            gateway: Process gateway used to run git
        """
        self.gateway = gateway

    def _git(self, repo_root: str, *args: str) -> ProcessResult:
        return self.gateway.run("git", list(args), repo_root)

    def list_worktrees(self, repo_root: str) -> List[WorktreeRecord]:
        """Get all worktrees of the repository, main working tree first.

        Returns:
            List of WorktreeRecord objects, empty if git could not list them
        """
        result = self._git(repo_root, "worktree", "list", "--porcelain")
        if result.failed:
            logger.warning(f"Could not list worktrees: {result.stderr.strip()}")
            return []

        records = parse_worktree_porcelain(result.stdout)
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records

    def add_worktree(self, repo_root: str, path: str, branch: str, base_branch: Optional[str] = None) -> ProcessResult:
        """Create ``branch`` and check it out in a new worktree at ``path``.

        Args:
            repo_root: Repository the worktree belongs to
            path: Directory for the new worktree (must not exist)
            branch: Name of the branch to create
            base_branch: Start point of the new branch (git's HEAD if omitted)
        """
        args = ["worktree", "add", "-b", branch, path]
        if base_branch:
            args.append(base_branch)

        result = self._git(repo_root, *args)
        if result.success:
            logger.info(f"Created worktree at {path} on branch {branch}")
        else:
            logger.error(f"Failed to create worktree at {path}: {result.stderr.strip()}")
        return result

    def remove_worktree(self, repo_root: str, path: str, force: bool = False) -> ProcessResult:
        """Remove the worktree at ``path``, with --force when requested."""
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(path)

        result = self._git(repo_root, *args)
        if result.success:
            logger.info(f"Removed worktree at {path}")
        else:
            logger.error(f"Failed to remove worktree at {path}: {result.stderr.strip()}")
        return result

    def prune_worktrees(self, repo_root: str) -> ProcessResult:
        """Prune stale worktree metadata."""
        result = self._git(repo_root, "worktree", "prune")
        if result.success:
            logger.info("Pruned stale worktree metadata")
        else:
            logger.warning(f"Failed to prune worktrees: {result.stderr.strip()}")
        return result
