"""Task model and related enums"""
from dataclasses import dataclass, replace
from enum import Enum

from git_task_keeper.exceptions import ValidationError
from git_task_keeper.services.validation_service import validate_branch_name, validate_task_name


class TaskType(Enum):
    """Kind of work a task represents, with its branch prefix."""
    FEAT = ("feat", "feature", "Feature")
    FIX = ("fix", "bugfix", "Bug Fix")
    REF = ("refactor", "refactor", "Refactor")

    def __init__(self, branch_prefix: str, label: str, title: str):
        self.branch_prefix = branch_prefix
        self.label = label
        self.title = title

    @classmethod
    def from_string(cls, value: str) -> "TaskType":
        """Parse a loose type alias.

        Unrecognised values fall back to FEAT rather than raising, so a typo
        in a type flag still yields a usable feature task.
        """
        return _TYPE_ALIASES.get((value or "").strip().lower(), cls.FEAT)

    @classmethod
    def from_branch(cls, branch: str) -> "TaskType":
        """Best-effort classification of a branch by its prefix, FEAT by default."""
        for task_type in (cls.FEAT, cls.FIX, cls.REF):
            if branch.startswith(f"{task_type.branch_prefix}/"):
                return task_type
        return cls.FEAT

    def branch_for(self, task_name: "TaskName") -> "BranchRef":
        return BranchRef(f"{self.branch_prefix}/{task_name}")

    def directory_for(self, task_name: "TaskName") -> str:
        return f"{self.branch_prefix}-{task_name}"


_TYPE_ALIASES = {
    "feat": TaskType.FEAT,
    "feature": TaskType.FEAT,
    "fix": TaskType.FIX,
    "bugfix": TaskType.FIX,
    "ref": TaskType.REF,
    "refactor": TaskType.REF,
}


@dataclass(frozen=True)
class BranchRef:
    """A branch name that passed validation."""
    name: str

    def __post_init__(self):
        reason = validate_branch_name(self.name)
        if reason:
            raise ValidationError("branch name", reason)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TaskName:
    """A task name that passed validation."""
    value: str

    def __post_init__(self):
        reason = validate_task_name(self.value)
        if reason:
            raise ValidationError("task name", reason)

    def __str__(self) -> str:
        return self.value


@dataclass
class TaskInfo:
    """A task worktree, optionally enriched with status against a base branch."""
    name: str
    path: str
    branch: str
    type: TaskType
    commits_ahead: int = 0
    commits_behind: int = 0
    has_changes: bool = False

    @property
    def is_up_to_date(self) -> bool:
        return self.commits_behind == 0

    @property
    def has_commits(self) -> bool:
        return self.commits_ahead > 0

    def with_status(self, commits_ahead: int, commits_behind: int, has_changes: bool) -> "TaskInfo":
        """Return a copy carrying ahead/behind counts and the dirty flag."""
        return replace(
            self,
            commits_ahead=commits_ahead,
            commits_behind=commits_behind,
            has_changes=has_changes,
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.branch}) @ {self.path}"
