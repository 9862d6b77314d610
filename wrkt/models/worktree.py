"""Worktree data models."""

from dataclasses import dataclass
from enum import Enum


class WorktreeStatus(Enum):
    """Modification state of a worktree."""
    CLEAN = "clean"
    DIRTY = "dirty"
    STALE = "stale"  # Status query failed, directory missing or registry entry orphaned


@dataclass
class WorktreeRecord:
    """Information about a git worktree, as reported by `git worktree list`."""

    path: str
    head: str
    branch: str  # Branch name or DETACHED_BRANCH
    status: WorktreeStatus = WorktreeStatus.CLEAN

    def __str__(self) -> str:
        """String representation of worktree."""
        return f"{self.branch} @ {self.path} [{self.status.value}]"
