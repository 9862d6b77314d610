"""Status formatting utilities."""

from wrkt.models.worktree import WorktreeStatus


def format_status(status: WorktreeStatus) -> str:
    """Display text for a worktree status: ``clean``, ``dirty`` or ``stale``."""
    return status.value
