"""Shared constants for wrkt."""

# Managed subdirectory under the repository root that holds secondary worktrees
MANAGED_DIR = "worktrees"

# Ignore file maintained at the repository root
GITIGNORE_NAME = ".gitignore"

# Porcelain listing keys
LISTING_WORKTREE = "worktree"
LISTING_HEAD = "HEAD"
LISTING_BRANCH = "branch"
LISTING_DETACHED = "detached"
BRANCH_REF_PREFIX = "refs/heads/"

# Branch name used for worktrees without an attached branch
DETACHED_BRANCH = "detached HEAD"

# Characters rejected in branch names
INVALID_BRANCH_CHARS = ";&|`$(){}[]<>"

# Characters that force quoting when interpolated into a command line
SHELL_SPECIAL_CHARS = " \t\n\r\"'\\|&;()<>{}[]$`"


# Labels for `git status --porcelain` code pairs (index, worktree)
STATUS_LABELS = {
    ("M", " "): "modified (staged)",
    (" ", "M"): "modified",
    ("A", " "): "added (staged)",
    (" ", "A"): "added",
    ("D", " "): "deleted (staged)",
    (" ", "D"): "deleted",
    ("?", "?"): "untracked",
}

# Labels decided by the index code alone
INDEX_STATUS_LABELS = {
    "R": "renamed",
    "C": "copied",
}

DEFAULT_STATUS_LABEL = "modified"
