"""Worktree listing formatting utilities.

Every function here is a pure function of the records and the options it is
given; nothing reads global flags.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from wrkt.config import ListOptions
from wrkt.constants import MANAGED_DIR
from wrkt.formatters.status import format_status
from wrkt.models.worktree import WorktreeRecord, WorktreeStatus
from wrkt.naming import worktree_name


@dataclass
class ColumnWidths:
    """Maximum width of each listing column."""

    name: int = 0
    branch: int = 0
    path: int = 0


def filter_worktrees(worktrees: List[WorktreeRecord], dirty_only: bool = False) -> List[WorktreeRecord]:
    """Keep only dirty worktrees when ``dirty_only`` is set."""
    if not dirty_only:
        return list(worktrees)
    return [wt for wt in worktrees if wt.status == WorktreeStatus.DIRTY]


def calculate_column_widths(worktrees: List[WorktreeRecord], managed_dir: str = MANAGED_DIR) -> ColumnWidths:
    widths = ColumnWidths()
    for wt in worktrees:
        widths.name = max(widths.name, len(worktree_name(wt, managed_dir)))
        widths.branch = max(widths.branch, len(wt.branch))
        widths.path = max(widths.path, len(wt.path))
    return widths


def format_worktree_names(worktrees: List[WorktreeRecord], managed_dir: str = MANAGED_DIR) -> str:
    """One display name per line."""
    return "".join(f"{worktree_name(wt, managed_dir)}\n" for wt in worktrees)


def format_worktree_list(worktrees: List[WorktreeRecord], managed_dir: str = MANAGED_DIR) -> str:
    """
    Format worktrees as aligned ``name  path  (status)`` rows.

    Example:
        "main          /repo                        (clean)\\n"
        "feature-auth  /repo/worktrees/feature-auth  (dirty)\\n"
    """
    widths = calculate_column_widths(worktrees, managed_dir)
    lines = []
    for wt in worktrees:
        name = worktree_name(wt, managed_dir).ljust(widths.name)
        path = wt.path.ljust(widths.path)
        lines.append(f"{name}  {path}  ({format_status(wt.status)})\n")
    return "".join(lines)


def format_worktree_list_verbose(
    worktrees: List[WorktreeRecord],
    details: Optional[Dict[str, List[str]]] = None,
    managed_dir: str = MANAGED_DIR,
) -> str:
    """
    Format worktrees with their branch and, for dirty ones, their changes.

    Args:
        worktrees: Worktrees to format
        details: Change lines keyed by worktree path (see GitService.get_detailed_status);
            dirty worktrees without an entry are shown without changes
        managed_dir: Managed subdirectory name

    Returns:
        One block per worktree, separated by blank lines
    """
    details = details or {}
    widths = calculate_column_widths(worktrees, managed_dir)
    lines = []
    for wt in worktrees:
        name = worktree_name(wt, managed_dir).ljust(widths.name)
        branch = wt.branch.ljust(widths.branch)
        path = wt.path.ljust(widths.path)
        lines.append(f"{name}  {branch}  {path}  ({format_status(wt.status)})\n")

        if wt.status == WorktreeStatus.DIRTY and wt.path in details:
            lines.append("  Changes:\n")
            for change in details[wt.path]:
                lines.append(f"    {change}\n")
        lines.append("\n")
    return "".join(lines)


def render_worktree_list(
    worktrees: List[WorktreeRecord],
    options: ListOptions,
    details: Optional[Dict[str, List[str]]] = None,
    managed_dir: str = MANAGED_DIR,
) -> str:
    """Render a listing according to ``options``.

    Names-only output takes precedence over verbose output.
    """
    filtered = filter_worktrees(worktrees, options.dirty_only)
    if options.names_only:
        return format_worktree_names(filtered, managed_dir)
    if options.verbose:
        return format_worktree_list_verbose(filtered, details, managed_dir)
    return format_worktree_list(filtered, managed_dir)


def format_stale_worktrees(worktrees: List[WorktreeRecord], managed_dir: str = MANAGED_DIR) -> str:
    """
    Format stale worktrees for a cleanup confirmation message.

    Example:
        "  feature-old -> /repo/worktrees/feature-old\\n"
    """
    return "".join(f"  {worktree_name(wt, managed_dir)} -> {wt.path}\n" for wt in worktrees)
