"""Mapping between branch names, worktree paths and display names.

Secondary worktrees live in ``<repo>/<managed_dir>/<segment>`` where the
segment is the branch name with every ``/`` replaced by ``-``. The mapping
is lossy: ``feature/auth`` and ``feature-auth`` share a segment.
"""

import os
from typing import Optional

from wrkt.constants import MANAGED_DIR
from wrkt.models.worktree import WorktreeRecord


def branch_to_segment(branch: str) -> str:
    """Turn a branch name into a single path segment."""
    return branch.replace("/", "-")


def derive_path(repo_root: str, branch: str, managed_dir: str = MANAGED_DIR) -> str:
    """Absolute location of the worktree for ``branch``."""
    return os.path.join(repo_root, managed_dir, branch_to_segment(branch))


def is_managed_path(path: str, managed_dir: str = MANAGED_DIR, repo_root: Optional[str] = None) -> bool:
    """Whether ``path`` lies inside a managed worktrees directory.

    The primary worktree is the one checkout that never does. With
    ``repo_root`` the directory must be the one directly under that root.
    """
    if repo_root is not None:
        managed_root = os.path.realpath(os.path.join(repo_root, managed_dir))
        return os.path.realpath(path).startswith(managed_root + os.sep)
    return f"/{managed_dir}/" in path


def worktree_name(record: WorktreeRecord, managed_dir: str = MANAGED_DIR) -> str:
    """Display name of a worktree.

    Managed worktrees are named after their directory, anything else after
    its branch.
    """
    if is_managed_path(record.path, managed_dir):
        return os.path.basename(record.path.rstrip("/"))
    return branch_to_segment(record.branch)
