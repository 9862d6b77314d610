"""Command execution for wrkt.

All git interaction goes through a ``CommandRunner`` so the worktree logic can
be exercised against a fake without spawning processes.
"""

import shlex
from abc import ABC, abstractmethod
from typing import Optional

import git

from wrkt.constants import SHELL_SPECIAL_CHARS
from wrkt.exceptions import CommandExecutionError
from wrkt.logging_config import get_logger

logger = get_logger(__name__)

GIT_STDERR_PREFIX = "stderr: '"


def shell_escape(value: str) -> str:
    """Quote a value for interpolation into a command line.

    Values without whitespace or shell metacharacters are returned as is.
    """
    if any(char in SHELL_SPECIAL_CHARS for char in value):
        return "'" + value.replace("'", "'\"'\"'") + "'"
    return value


def _git_stderr(error: git.exc.GitCommandError) -> str:
    """Git's own stderr text from a GitCommandError.

    GitPython stores it wrapped as ``stderr: '...'`` on its own line.
    """
    stderr = (error.stderr or "").strip()
    if stderr.startswith(GIT_STDERR_PREFIX) and stderr.endswith("'"):
        stderr = stderr[len(GIT_STDERR_PREFIX):-1]
    return stderr.strip()


class CommandRunner(ABC):
    """Runs a command line and returns its standard output."""

    @abstractmethod
    def run(self, command: str) -> str:
        """Run ``command``.

        Returns:
            Captured standard output

        Raises:
            CommandExecutionError: If the command cannot be started or exits non-zero
        """


class GitCommandRunner(CommandRunner):
    """Runs command lines through GitPython's process wrapper."""

    def __init__(self, working_dir: Optional[str] = None):
        """Initialize the runner.

        Args:
            working_dir: Directory commands run in (defaults to the process cwd)
        """
        self.working_dir = working_dir

    def _get_git(self) -> git.Git:
        """Get a fresh git.Git command wrapper bound to the working directory."""
        return git.Git(self.working_dir)

    def run(self, command: str) -> str:
        try:
            args = shlex.split(command)
        except ValueError as e:
            raise CommandExecutionError(command, stderr=f"cannot parse command line: {e}") from e
        if not args:
            raise CommandExecutionError(command, stderr="empty command")

        logger.debug(f"Running: {command}")
        try:
            return self._get_git().execute(args)
        except git.exc.GitCommandError as e:
            stderr = _git_stderr(e)
            status = e.status if hasattr(e, "status") else None
            logger.debug(f"Command failed (exit {status}): {command}: {stderr}")
            raise CommandExecutionError(command, status, stderr) from e
        except git.exc.CommandError as e:
            # Executable missing or process could not be started
            raise CommandExecutionError(command, stderr=str(e)) from e
