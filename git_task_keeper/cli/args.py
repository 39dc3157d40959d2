"""Command-line argument parsing for git-task-keeper."""

import argparse
from typing import List, Optional

from git_task_keeper.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``task`` command family."""
    parser = argparse.ArgumentParser(
        prog="git-task-keeper",
        description="Manage git worktrees for isolated task and AI agent workflows",
        epilog="Environment: GIT_TASK_KEEPER_BASE_BRANCH, GIT_TASK_KEEPER_REMOTE and "
        "GIT_TASK_KEEPER_SETUP_CMD override the defaults.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-task-keeper {__version__}")

    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.required = True

    task = commands.add_parser(
        "task",
        aliases=["t"],
        help="Manage task worktrees (add, list, remove, status)",
    )
    task_commands = task.add_subparsers(dest="task_command", metavar="subcommand")
    task_commands.required = True

    add = task_commands.add_parser("add", help="Create a new task worktree with a branch")
    add.add_argument("name", help="Task name (letters, digits, hyphens, underscores)")
    add.add_argument(
        "-t",
        "--type",
        choices=["feat", "fix", "ref"],
        default="feat",
        help="Branch type prefix (default: feat)",
    )
    add.add_argument("-b", "--base", help="Base branch to create from (default: origin's default branch)")
    add.add_argument(
        "-a",
        "--agent",
        action="store_true",
        help="Setup for AI agent (runs the setup command, creates .claude/TASK.md)",
    )
    add.add_argument(
        "--setup-cmd",
        help="Dependency setup command run with --agent (default: pip install -e .)",
    )
    add.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created without making changes",
    )

    task_commands.add_parser("list", aliases=["ls"], help="List all task worktrees")

    remove = task_commands.add_parser("remove", aliases=["rm"], help="Remove a task worktree")
    remove.add_argument("name", help="Task name")
    remove.add_argument(
        "-f", "--force", action="store_true", help="Force remove even with uncommitted changes"
    )
    remove.add_argument(
        "--keep-branch", action="store_true", help="Keep the branch after removing the worktree"
    )

    task_commands.add_parser("status", aliases=["st"], help="Show status of all task worktrees")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    aliases = {"ls": "list", "rm": "remove", "st": "status"}
    args.task_command = aliases.get(args.task_command, args.task_command)
    return args
