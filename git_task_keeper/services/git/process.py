"""Process execution for git-task-keeper.

Every external command (git itself and the agent setup command) goes through
a ``ProcessGateway``. The default gateway runs commands with GitPython's
``Git.execute``; tests swap in a fake that returns canned results.
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

import git

from git_task_keeper.logging_config import get_logger

logger = get_logger(__name__)

# Exit status reported when the executable itself cannot be found
COMMAND_NOT_FOUND = 127


@dataclass
class ProcessResult:
    """Captured output of one external command."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def failed(self) -> bool:
        return self.exit_code != 0


class ProcessGateway(Protocol):
    """Runs one external command and returns its captured output."""

    def run(self, command: str, args: Sequence[str], working_directory: Optional[str] = None) -> ProcessResult:
        ...


class GitPythonGateway:
    """Gateway backed by GitPython's command runner."""

    def run(self, command: str, args: Sequence[str], working_directory: Optional[str] = None) -> ProcessResult:
        """Run ``command`` with ``args`` in ``working_directory`` and capture its output.

        Args:
            command: Executable name, resolved through PATH
            args: Arguments passed to the executable
            working_directory: Directory to run in (defaults to the current one)

        Returns:
            ProcessResult with stdout, stderr and the exit code. Failures are
            reported through the exit code, never raised.
        """
        cwd = working_directory or os.getcwd()
        argv: List[str] = [command, *args]
        logger.debug(f"Running {' '.join(argv)} in {cwd}")

        try:
            status, stdout, stderr = git.cmd.Git(cwd).execute(
                argv,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            logger.debug(f"Command not found: {e}")
            return ProcessResult(stdout="", stderr=str(e), exit_code=COMMAND_NOT_FOUND)

        result = ProcessResult(stdout=stdout or "", stderr=stderr or "", exit_code=status or 0)
        if result.failed:
            logger.debug(f"{command} exited with {result.exit_code}: {result.stderr.strip()}")
        return result
