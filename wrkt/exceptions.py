"""Custom exceptions for wrkt"""

from typing import Optional


class WrktError(Exception):
    """Base exception for all wrkt errors."""
    pass


class CommandExecutionError(WrktError):
    """Exception raised when an external command cannot be run or exits non-zero."""

    def __init__(self, command: str, status=None, stderr: Optional[str] = None):
        self.command = command
        self.status = status
        self.stderr = stderr

        if status is None:
            error_msg = f"command execution failed: {command}"
        else:
            error_msg = f"command failed (exit {status}): {command}"
        if stderr:
            error_msg += f": {stderr}"

        super().__init__(error_msg)


class WorktreeOperationError(WrktError):
    """Exception raised for errors in worktree operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Worktree operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class InvalidBranchNameError(WorktreeOperationError):
    """Exception raised when a branch name is empty or unsafe to pass to git."""

    def __init__(self, branch: str, reason: str):
        super().__init__("add", branch, reason)


class InvalidRepositoryPathError(WorktreeOperationError):
    """Exception raised when the repository path is empty or relative."""

    def __init__(self, path: str, reason: str):
        super().__init__("validate_path", path, f"invalid repository path: {reason}")


class DirectoryCreationError(WorktreeOperationError):
    """Exception raised when the managed worktrees directory cannot be created."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__("create_directory", path, message)


class WorktreeAddError(WorktreeOperationError):
    """Exception raised when git refuses to register a new worktree."""

    def __init__(self, branch: str, message: Optional[str] = None):
        super().__init__("add", branch, message)


class BranchNameCollisionError(WorktreeAddError):
    """Exception raised when two branches map to the same worktree directory."""

    def __init__(self, branch: str, existing_branch: str, path: str):
        self.existing_branch = existing_branch
        self.path = path
        super().__init__(
            branch,
            f"worktree path {path} is already used by branch '{existing_branch}'",
        )


class EmptyNameError(WorktreeOperationError):
    """Exception raised when a worktree name is empty."""

    def __init__(self):
        super().__init__("remove", message="worktree name cannot be empty")


class WorktreeNotFoundError(WorktreeOperationError):
    """Exception raised when no worktree resolves to the given name."""

    def __init__(self, name: str):
        super().__init__("find_worktree", name, "Worktree not found")


class CannotRemoveMainError(WorktreeOperationError):
    """Exception raised when attempting to remove the primary worktree."""

    def __init__(self, name: str):
        super().__init__("remove", name, "cannot remove main worktree")


class UncommittedChangesError(WorktreeOperationError):
    """Exception raised when a worktree to be removed has uncommitted changes."""

    def __init__(self, name: str):
        super().__init__("remove", name, "worktree has uncommitted changes, commit or stash them first")


class WorktreeRemoveError(WorktreeOperationError):
    """Exception raised when git refuses to remove a worktree."""

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__("remove", name, message)
