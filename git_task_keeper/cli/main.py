"""Command-line interface for git-task-keeper"""

import sys
from typing import List, Optional

from rich.console import Console

from git_task_keeper.cli.args import parse_args
from git_task_keeper.config import Config
from git_task_keeper.core import TaskKeeper
from git_task_keeper.exceptions import TaskKeeperError
from git_task_keeper.logging_config import setup_logging
from git_task_keeper.services.display_service import DisplayService

console = Console()


def _run(keeper: TaskKeeper, args, display: DisplayService) -> int:
    if args.task_command == "add":
        result = keeper.add(
            args.name,
            args.type,
            base_branch=args.base,
            with_agent=args.agent,
            dry_run=args.dry_run,
        )
        display.display_add_result(result)
        return 0 if result.success else result.error.exit_code

    if args.task_command == "remove":
        result = keeper.remove(args.name, force=args.force, keep_branch=args.keep_branch)
        display.display_remove_result(result)
        return 0 if result.success else result.error.exit_code

    if args.task_command == "list":
        display.display_task_table(keeper.list())
        return 0

    if args.task_command == "status":
        display.display_status_table(keeper.status())
        return 0

    console.print(f"[red]Unknown command: {args.task_command}[/red]")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    display = DisplayService()
    try:
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = Config.from_env(
            setup_command=getattr(parsed_args, "setup_cmd", None),
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        keeper = TaskKeeper(config)
        return _run(keeper, parsed_args, display)
    except TaskKeeperError as e:
        display.display_error(e)
        return e.exit_code
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        return 2
    except OSError as e:
        display.display_error(e)
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
