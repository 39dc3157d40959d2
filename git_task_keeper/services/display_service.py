"""Display and formatting service for task information"""
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_task_keeper.constants import COLUMNS, STATUS_COLUMNS, SYMBOL_DIRTY, SYMBOL_UP_TO_DATE, SYMBOL_BEHIND
from git_task_keeper.models.task import TaskInfo
from git_task_keeper.services.task_lifecycle import AddResult, RemoveResult
from git_task_keeper.services.validation_service import sanitize_for_console
from git_task_keeper.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


def format_task_status(task: TaskInfo) -> str:
    """Format ahead/behind counts as Rich markup."""
    if task.commits_ahead == 0 and task.commits_behind == 0:
        return f"[green]up to date {SYMBOL_UP_TO_DATE}[/green]"

    parts = []
    if task.commits_ahead > 0:
        parts.append(f"+{task.commits_ahead} commits")
    if task.commits_behind > 0:
        parts.append(f"[yellow]-{task.commits_behind} behind {SYMBOL_BEHIND}[/yellow]")
    return ", ".join(parts)


class DisplayService:
    """Renders task data on the console."""

    def display_task_table(self, tasks: List[TaskInfo]) -> None:
        """Display a table of task worktrees."""
        if not tasks:
            self._print_empty()
            return

        table = Table(title=f"Tasks - {len(tasks)} active", title_justify="left")
        for col in COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for task in tasks:
            table.add_row(escape(task.name), task.branch, escape(task.path))

        console.print(table)

    def display_status_table(self, tasks: List[TaskInfo]) -> None:
        """Display a table of task worktrees with status against the base branch."""
        if not tasks:
            self._print_empty()
            return

        table = Table(title=f"Tasks - {len(tasks)} active", title_justify="left")
        for col in STATUS_COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for task in tasks:
            changes = f"[yellow]{SYMBOL_DIRTY}[/yellow]" if task.has_changes else ""
            table.add_row(escape(task.name), task.branch, format_task_status(task) + changes)

        console.print(table)
        console.print("[dim]Tip: git-task-keeper task remove <name> to clean up[/dim]")

    def display_add_result(self, result: AddResult) -> None:
        """Display the outcome of creating a task."""
        if result.error:
            self.display_error(result.error)
            return

        if result.dry_run:
            console.print("[bold]Dry Run - Would create:[/bold]")
            console.print(f"  Branch: {result.branch_name} (from {result.base_branch})")
            console.print(f"  Worktree: {escape(result.worktree_path)}")
            return

        console.print(f"  Path: {escape(result.worktree_path)}")
        console.print(f"  Branch: {result.branch_name}")
        if result.brief_path:
            console.print(f"[green]Created {escape(result.brief_path)}[/green]")
        self._print_warnings(result.warnings)
        console.print("[green]Ready for AI Agent:[/green]")
        console.print(result.worktree_path, markup=False, highlight=False)

    def display_remove_result(self, result: RemoveResult) -> None:
        """Display the outcome of removing a task."""
        if result.error:
            self.display_error(result.error)
            return

        if result.branch_deleted and result.task:
            console.print(f"[green]Deleted branch: {result.task.branch}[/green]")
        self._print_warnings(result.warnings)
        console.print(f"[green]Task removed: {result.task_name}[/green]")

    def display_error(self, error: Exception) -> None:
        """Display an error with external tool output made safe for the terminal."""
        console.print(f"[red]Error: {escape(sanitize_for_console(str(error)))}[/red]", highlight=False)

    def _print_warnings(self, warnings: List[str]) -> None:
        for warning in warnings:
            console.print(f"[yellow]Warning: {escape(sanitize_for_console(warning))}[/yellow]", highlight=False)

    def _print_empty(self) -> None:
        console.print("No task worktrees found.")
        console.print("[dim]Create one with: git-task-keeper task add <name>[/dim]")
