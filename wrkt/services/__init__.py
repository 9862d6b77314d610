"""Git-facing services for wrkt."""

from .runner import CommandRunner, GitCommandRunner, shell_escape
from .git_service import GitService
from .worktree_manager import WorktreeManager

__all__ = [
    "CommandRunner",
    "GitCommandRunner",
    "shell_escape",
    "GitService",
    "WorktreeManager",
]
