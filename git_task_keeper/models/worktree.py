"""Worktree data models."""

from dataclasses import dataclass

DETACHED = "detached"


@dataclass
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: str
    head: str
    branch: str  # Bare branch name, or DETACHED
    is_bare: bool = False

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED

    def __str__(self) -> str:
        """String representation of worktree."""
        bare_marker = " (bare)" if self.is_bare else ""
        return f"{self.branch} @ {self.path}{bare_marker} [{self.head[:7] or '-'}]"
