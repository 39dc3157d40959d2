"""Shared constants for git-task-keeper."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "NAME", 20),
    ColumnDefinition("branch", "BRANCH", 25),
    ColumnDefinition("path", "PATH"),
]

STATUS_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "NAME", 20),
    ColumnDefinition("branch", "BRANCH", 25),
    ColumnDefinition("status", "STATUS"),
]


# Symbol constants
SYMBOL_UP_TO_DATE = "✓"
SYMBOL_BEHIND = "⚠"
SYMBOL_DIRTY = " *"
