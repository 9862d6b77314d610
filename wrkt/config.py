"""Configuration handling for wrkt"""

from dataclasses import dataclass

from wrkt.constants import GITIGNORE_NAME, MANAGED_DIR


@dataclass
class Config:
    """Configuration for wrkt with validation."""

    # Layout
    managed_dir: str = MANAGED_DIR
    gitignore_name: str = GITIGNORE_NAME

    # Safety
    detect_collisions: bool = True  # Refuse branches that map onto an existing worktree path

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_managed_dir()
        self._validate_gitignore_name()

    def _validate_managed_dir(self):
        """Validate managed_dir is a single, non-empty path segment."""
        if not self.managed_dir or not self.managed_dir.strip():
            raise ValueError("managed_dir cannot be empty")
        self.managed_dir = self.managed_dir.strip().strip("/")
        if not self.managed_dir or "/" in self.managed_dir:
            raise ValueError(f"managed_dir must be a single directory name, got '{self.managed_dir}'")
        if self.managed_dir in (".", ".."):
            raise ValueError(f"managed_dir must be a real directory name, got '{self.managed_dir}'")

    def _validate_gitignore_name(self):
        """Validate gitignore_name is not empty."""
        if not self.gitignore_name or not self.gitignore_name.strip():
            raise ValueError("gitignore_name cannot be empty")
        self.gitignore_name = self.gitignore_name.strip()

    @property
    def gitignore_entry(self) -> str:
        """Ignore rule for the managed directory."""
        return f"{self.managed_dir}/"


@dataclass
class ListOptions:
    """Options controlling how a worktree listing is rendered."""

    dirty_only: bool = False  # Show only worktrees with uncommitted changes
    names_only: bool = False  # One display name per line, for scripting
    verbose: bool = False  # Include branch column and per-file changes (ignored with names_only)
