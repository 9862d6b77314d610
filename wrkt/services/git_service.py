"""Git queries for wrkt"""
from typing import List

from wrkt.exceptions import CommandExecutionError
from wrkt.logging_config import get_logger
from wrkt.models.worktree import WorktreeRecord
from wrkt.services.parsing import (
    parse_status_lines,
    parse_worktree_list,
    parse_worktree_status,
    stale_status,
)
from wrkt.services.runner import CommandRunner, shell_escape

logger = get_logger(__name__)


class GitService:
    """Read-only git queries behind a command runner."""

    def __init__(self, runner: CommandRunner):
        """Initialize the service.

        Args:
            runner: Command runner used for every git invocation
        """
        self.runner = runner

    def get_repo_root(self) -> str:
        """Get the top-level directory of the current repository.

        Raises:
            CommandExecutionError: If not inside a git repository or git returns nothing
        """
        command = "git rev-parse --show-toplevel"
        repo_root = self.runner.run(command).strip()
        if not repo_root:
            raise CommandExecutionError(command, stderr="git rev-parse returned empty path")
        return repo_root

    def get_main_worktree_path(self) -> str:
        """Get the root of the primary worktree.

        git lists the primary worktree first, so unlike get_repo_root this does
        not change when run from inside a secondary worktree.
        """
        records = self.list_worktree_records()
        if records:
            return records[0].path
        return self.get_repo_root()

    def list_worktree_records(self) -> List[WorktreeRecord]:
        """List registered worktrees without querying their status."""
        output = self.runner.run("git worktree list --porcelain")
        records = parse_worktree_list(output)
        logger.debug(f"Found {len(records)} worktrees")
        return records

    def list_worktrees(self) -> List[WorktreeRecord]:
        """List registered worktrees with freshly computed status.

        A worktree whose status cannot be queried is marked stale; the error
        is not propagated.
        """
        worktrees = self.list_worktree_records()

        for worktree in worktrees:
            try:
                output = self._status_output(worktree.path)
            except CommandExecutionError as e:
                logger.debug(f"Could not check worktree status for {worktree.path}: {e}")
                worktree.status = stale_status()
            else:
                worktree.status = parse_worktree_status(output)
            logger.debug(f"  {worktree}")

        return worktrees

    def get_detailed_status(self, worktree_path: str) -> List[str]:
        """Get per-file change descriptions for a worktree.

        Returns:
            Lines of the form ``"<label>: <path>"``, empty for a clean worktree

        Raises:
            CommandExecutionError: If the status query fails
        """
        try:
            output = self._status_output(worktree_path)
        except CommandExecutionError as e:
            logger.warning(f"Could not check worktree status for {worktree_path}: {e}")
            raise
        return parse_status_lines(output)

    def prune_worktrees(self) -> None:
        """Prune registry entries of worktrees whose directories are gone."""
        self.runner.run("git worktree prune")
        logger.info("Pruned orphaned worktree metadata")

    def _status_output(self, worktree_path: str) -> str:
        return self.runner.run(f"git -C {shell_escape(worktree_path)} status --porcelain")
