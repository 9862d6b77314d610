"""Worktree lifecycle operations for wrkt.

Secondary worktrees are created under ``<repo>/worktrees/``::

    repo/
    ├── .git/
    ├── .gitignore          # contains "worktrees/"
    └── worktrees/
        ├── feature-auth/   # branch feature/auth
        └── bugfix-login/   # branch bugfix/login

Every removal is checked against a fresh listing: the primary worktree (the
one outside ``worktrees/``) is never removed, and neither is a worktree with
uncommitted changes. Batch removal validates every target before removing
any of them.
"""

import os
from typing import List, Optional

from wrkt.config import Config
from wrkt.exceptions import (
    BranchNameCollisionError,
    CannotRemoveMainError,
    CommandExecutionError,
    DirectoryCreationError,
    EmptyNameError,
    InvalidBranchNameError,
    InvalidRepositoryPathError,
    UncommittedChangesError,
    WorktreeAddError,
    WorktreeNotFoundError,
    WorktreeRemoveError,
)
from wrkt.constants import INVALID_BRANCH_CHARS
from wrkt.logging_config import get_logger
from wrkt.models.worktree import WorktreeRecord, WorktreeStatus
from wrkt.naming import derive_path, is_managed_path, worktree_name
from wrkt.services.git_service import GitService
from wrkt.services.runner import CommandRunner, shell_escape

logger = get_logger(__name__)


def validate_branch_name(branch: str) -> None:
    """Reject branch names that are empty or unsafe on a git command line.

    Raises:
        InvalidBranchNameError: If the name is empty, contains shell
            metacharacters or starts with a dash
    """
    if not branch:
        raise InvalidBranchNameError(branch, "branch name cannot be empty")

    if any(char in INVALID_BRANCH_CHARS for char in branch):
        raise InvalidBranchNameError(branch, f"invalid characters in branch name: {branch!r}")

    if branch.startswith("-"):
        raise InvalidBranchNameError(branch, f"branch name cannot start with dash: {branch!r}")


def validate_repo_path(path: str) -> None:
    """Require a non-empty absolute repository path.

    Raises:
        InvalidRepositoryPathError: If the path is empty or relative
    """
    if not path:
        raise InvalidRepositoryPathError(path, "path cannot be empty")

    if not os.path.isabs(path):
        raise InvalidRepositoryPathError(path, f"path must be absolute: {path!r}")


class WorktreeManager:
    """Adds and removes worktrees in the managed directory."""

    def __init__(self, git_service: GitService, runner: CommandRunner, config: Optional[Config] = None):
        """Initialize the manager.

        Args:
            git_service: Service used for listings and status queries
            runner: Command runner used for mutating git commands
            config: Configuration (defaults to Config())
        """
        self.git_service = git_service
        self.runner = runner
        self.config = config or Config()

    @property
    def managed_dir(self) -> str:
        return self.config.managed_dir

    def get_worktree_path(self, repo_path: str, branch: str) -> str:
        """Get the location the worktree for ``branch`` is created at."""
        return derive_path(repo_path, branch, self.managed_dir)

    def add_worktree(self, repo_path: str, branch: str) -> str:
        """Create a worktree for ``branch`` under the managed directory.

        The branch is created from HEAD when it does not exist yet.

        Args:
            repo_path: Absolute path of the repository root
            branch: Branch to check out

        Returns:
            Path of the new worktree

        Raises:
            InvalidBranchNameError: If the branch name is rejected
            InvalidRepositoryPathError: If repo_path is empty or relative
            BranchNameCollisionError: If another branch already owns the derived path
            DirectoryCreationError: If the managed directory cannot be created
            WorktreeAddError: If git refuses to add the worktree
        """
        validate_branch_name(branch)
        validate_repo_path(repo_path)

        worktree_path = self.get_worktree_path(repo_path, branch)

        if self.config.detect_collisions:
            self._check_collision(branch, worktree_path)

        self._ensure_worktrees_directory(os.path.dirname(worktree_path))

        # Best-effort; the worktree is usable without the ignore rule
        try:
            self.ensure_gitignore_entry(repo_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to setup {self.config.gitignore_name} entry: {e}")

        logger.info(f"Creating worktree for {branch} at {worktree_path}")
        self._add_git_worktree(repo_path, worktree_path, branch)
        logger.info(f"Successfully created worktree for {branch}")

        return worktree_path

    def remove_worktree(self, repo_path: str, name: str) -> None:
        """Remove the worktree with display name ``name``.

        Raises:
            InvalidRepositoryPathError: If repo_path is empty or relative
            EmptyNameError: If name is empty
            WorktreeNotFoundError: If no worktree has that name
            CannotRemoveMainError: If the name resolves to the primary worktree
            UncommittedChangesError: If the worktree is dirty
            WorktreeRemoveError: If git refuses the removal
            CommandExecutionError: If the worktrees cannot be listed
        """
        validate_repo_path(repo_path)

        if not name:
            raise EmptyNameError()

        worktrees = self.git_service.list_worktrees()
        target = self._check_removable(repo_path, worktrees, name)
        self._remove_git_worktree(repo_path, target, name)

    def remove_multiple_worktrees(self, repo_path: str, names: List[str]) -> None:
        """Remove several worktrees, all or nothing.

        Every name is resolved and checked against a single listing before
        the first removal is issued; one invalid target leaves every
        worktree in place. A name given more than once is removed once.

        Raises:
            The errors of remove_worktree, for the first invalid name
        """
        validate_repo_path(repo_path)

        if not names:
            raise EmptyNameError()
        if any(not name for name in names):
            raise EmptyNameError()

        # Repeated names would issue a second removal for an already removed path
        unique_names = list(dict.fromkeys(names))

        worktrees = self.git_service.list_worktrees()

        targets = []
        for name in unique_names:
            targets.append((name, self._check_removable(repo_path, worktrees, name)))

        for name, target in targets:
            self._remove_git_worktree(repo_path, target, name)

        logger.info(f"Removed {len(targets)} worktree(s)")

    def find_worktree(self, name: str) -> WorktreeRecord:
        """Find a worktree by display name; the primary worktree included.

        Raises:
            WorktreeNotFoundError: If no worktree has that name
        """
        return self._find_by_name(self.git_service.list_worktrees(), name)

    def stale_worktrees(self) -> List[WorktreeRecord]:
        """Worktrees whose status could not be queried."""
        return [wt for wt in self.git_service.list_worktrees() if wt.status == WorktreeStatus.STALE]

    def prune_worktrees(self) -> None:
        """Drop registry entries of stale worktrees."""
        self.git_service.prune_worktrees()

    def ensure_gitignore_entry(self, repo_path: str) -> bool:
        """Make sure the ignore file at the repository root ignores the managed directory.

        Returns:
            True if the file was created or extended, False if the rule was already there

        Raises:
            OSError: If the ignore file cannot be read or written
        """
        gitignore_path = os.path.join(repo_path, self.config.gitignore_name)
        entry = self.config.gitignore_entry

        if not os.path.exists(gitignore_path):
            with open(gitignore_path, "w", encoding="utf-8") as f:
                f.write(f"{entry}\n")
            logger.info(f"Created {gitignore_path} with {entry} entry")
            return True

        with open(gitignore_path, "r", encoding="utf-8") as f:
            content = f.read()

        if any(line.strip() == entry for line in content.splitlines()):
            return False

        with open(gitignore_path, "a", encoding="utf-8") as f:
            # Keep the rule on its own line when the file lacks a trailing newline
            if content and not content.endswith("\n"):
                f.write("\n")
            f.write(f"{entry}\n")
        logger.info(f"Added {entry} to {gitignore_path}")
        return True

    def _find_by_name(self, worktrees: List[WorktreeRecord], name: str) -> WorktreeRecord:
        for worktree in worktrees:
            if worktree_name(worktree, self.managed_dir) == name:
                return worktree
        raise WorktreeNotFoundError(name)

    def _check_removable(self, repo_path: str, worktrees: List[WorktreeRecord], name: str) -> WorktreeRecord:
        """Resolve ``name`` and apply the removal safety checks."""
        target = self._find_by_name(worktrees, name)

        if not (
            is_managed_path(target.path, self.managed_dir)
            and is_managed_path(target.path, self.managed_dir, repo_root=repo_path)
        ):
            raise CannotRemoveMainError(name)

        # Stale worktrees stay removable; cleaning them up is the point
        if target.status == WorktreeStatus.DIRTY:
            raise UncommittedChangesError(name)

        return target

    def _check_collision(self, branch: str, worktree_path: str) -> None:
        for worktree in self.git_service.list_worktree_records():
            if worktree.path == worktree_path and worktree.branch != branch:
                raise BranchNameCollisionError(branch, worktree.branch, worktree_path)

    def _ensure_worktrees_directory(self, worktrees_dir: str) -> None:
        try:
            os.makedirs(worktrees_dir, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(worktrees_dir, str(e)) from e

    def _add_git_worktree(self, repo_path: str, worktree_path: str, branch: str) -> None:
        repo = shell_escape(repo_path)

        # Fails when the branch already exists; worktree add below handles both cases
        create_error = None
        try:
            self.runner.run(f"git -C {repo} branch {shell_escape(branch)}")
            logger.debug(f"Created branch {branch}")
        except CommandExecutionError as e:
            create_error = e
            logger.debug(f"Branch {branch} not created (might already exist): {e}")

        try:
            self.runner.run(
                f"git -C {repo} worktree add {shell_escape(worktree_path)} {shell_escape(branch)}"
            )
        except CommandExecutionError as e:
            logger.error(f"Failed to create worktree: {e}")
            if create_error is not None:
                raise WorktreeAddError(
                    branch, f"git worktree add failed (branch {branch} might not exist): {e}"
                ) from e
            raise WorktreeAddError(branch, f"git worktree add failed: {e}") from e

    def _remove_git_worktree(self, repo_path: str, target: WorktreeRecord, name: str) -> None:
        logger.info(f"Removing worktree {name} at {target.path}")
        try:
            self.runner.run(
                f"git -C {shell_escape(repo_path)} worktree remove {shell_escape(target.path)}"
            )
        except CommandExecutionError as e:
            logger.error(f"Failed to remove worktree at {target.path}: {e}")
            raise WorktreeRemoveError(name, f"git worktree remove failed: {e}") from e
        logger.info(f"Removed worktree at {target.path}")
