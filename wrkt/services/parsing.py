"""Parsers for git's machine-readable worktree and status output."""

from typing import Dict, List, Optional

from wrkt.constants import (
    BRANCH_REF_PREFIX,
    DEFAULT_STATUS_LABEL,
    DETACHED_BRANCH,
    INDEX_STATUS_LABELS,
    LISTING_BRANCH,
    LISTING_DETACHED,
    LISTING_HEAD,
    LISTING_WORKTREE,
    STATUS_LABELS,
)
from wrkt.logging_config import get_logger
from wrkt.models.worktree import WorktreeRecord, WorktreeStatus

logger = get_logger(__name__)


def _build_record(fields: Dict[str, str]) -> Optional[WorktreeRecord]:
    """Create a WorktreeRecord from collected porcelain fields.

    Records without a path cannot be addressed and are dropped.
    """
    path = fields.get(LISTING_WORKTREE, "")
    if not path:
        logger.debug(f"Dropping incomplete worktree record: {fields}")
        return None
    return WorktreeRecord(
        path=path,
        head=fields.get(LISTING_HEAD, ""),
        branch=fields.get(LISTING_BRANCH, ""),
        status=WorktreeStatus.CLEAN,
    )


def parse_worktree_list(output: str) -> List[WorktreeRecord]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    A worktree without a branch has a bare ``detached`` line instead of the
    ``branch`` line. Unknown keys (``bare``, ``locked``, ``prunable``) are
    ignored.

    Args:
        output: Raw listing text

    Returns:
        Records in listing order, all with status CLEAN
    """
    worktrees: List[WorktreeRecord] = []
    current: Dict[str, str] = {}

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            if current:
                record = _build_record(current)
                if record:
                    worktrees.append(record)
                current = {}
            continue

        key, _, value = line.partition(" ")
        if key == LISTING_WORKTREE:
            current[LISTING_WORKTREE] = value
        elif key == LISTING_HEAD:
            current[LISTING_HEAD] = value
        elif key == LISTING_BRANCH:
            if value.startswith(BRANCH_REF_PREFIX):
                value = value[len(BRANCH_REF_PREFIX):]
            current[LISTING_BRANCH] = value
        elif key == LISTING_DETACHED:
            current[LISTING_BRANCH] = DETACHED_BRANCH

    # Handle last entry if no trailing blank line
    if current:
        record = _build_record(current)
        if record:
            worktrees.append(record)

    return worktrees


def parse_worktree_status(output: str) -> WorktreeStatus:
    """Classify `git status --porcelain` output as clean or dirty."""
    if output.strip():
        return WorktreeStatus.DIRTY
    return WorktreeStatus.CLEAN


def stale_status() -> WorktreeStatus:
    """Status assigned when a worktree cannot be queried at all."""
    return WorktreeStatus.STALE


def describe_status_code(index_status: str, worktree_status: str) -> str:
    """Label for a porcelain XY status code pair."""
    label = STATUS_LABELS.get((index_status, worktree_status))
    if label:
        return label
    return INDEX_STATUS_LABELS.get(index_status, DEFAULT_STATUS_LABEL)


def parse_status_lines(output: str) -> List[str]:
    """Decompose `git status --porcelain` output into readable lines.

    Each line ``XY path`` becomes ``"<label>: path"``. Lines too short to
    carry a code pair and a path are skipped.
    """
    status_lines = []
    for line in output.split("\n"):
        # Leading spaces are part of the status code
        line = line.rstrip()
        if len(line) < 4:
            continue

        index_status = line[0]  # Staged changes
        worktree_status = line[1]  # Working tree changes
        filename = line[3:]

        status_lines.append(f"{describe_status_code(index_status, worktree_status)}: {filename}")

    return status_lines

