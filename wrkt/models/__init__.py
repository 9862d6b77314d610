"""Data models for wrkt."""

from .worktree import WorktreeRecord, WorktreeStatus

__all__ = ["WorktreeRecord", "WorktreeStatus"]
