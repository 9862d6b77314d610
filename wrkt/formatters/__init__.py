"""Formatting utilities for wrkt.

- status: Status display text
- worktree: Worktree listings, pure functions of records and options
"""

from .status import format_status
from .worktree import (
    ColumnWidths,
    calculate_column_widths,
    filter_worktrees,
    format_stale_worktrees,
    format_worktree_list,
    format_worktree_list_verbose,
    format_worktree_names,
    render_worktree_list,
)

__all__ = [
    # Status
    "format_status",
    # Worktree listings
    "ColumnWidths",
    "calculate_column_widths",
    "filter_worktrees",
    "format_stale_worktrees",
    "format_worktree_list",
    "format_worktree_list_verbose",
    "format_worktree_names",
    "render_worktree_list",
]
