"""
wrkt - Git worktree management made simple
"""

from .__version__ import __version__
from .services import GitService, WorktreeManager
from .cli.commands import main

__all__ = ["GitService", "WorktreeManager", "main", "__version__"]
