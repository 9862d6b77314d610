"""Command-line argument parsing for wrkt."""

import argparse
from wrkt.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="wrkt",
        description="Git worktree management made simple",
        epilog="All worktrees are organized in the worktrees/ subdirectory of the repository.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"wrkt {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    list_parser = subparsers.add_parser(
        "list", aliases=["ls"], help="List all worktrees",
        description="List all git worktrees with their status and branch information.",
    )
    list_parser.add_argument(
        "--dirty", action="store_true", help="Show only worktrees with uncommitted changes"
    )
    list_parser.add_argument(
        "--verbose", dest="list_verbose", action="store_true",
        help="Show detailed git status information",
    )
    list_parser.add_argument(
        "--names-only", action="store_true", help="Show only worktree names (useful for scripting)"
    )
    list_parser.set_defaults(command="list")

    add_parser = subparsers.add_parser(
        "add", help="Add a new worktree",
        description="Add a new git worktree in the worktrees/ subdirectory.",
    )
    add_parser.add_argument("branch", help="Branch to check out (created from HEAD if missing)")

    switch_parser = subparsers.add_parser(
        "switch", aliases=["sw"], help="Print the path of a worktree",
        description="Print the path of a worktree so a shell function can cd into it.",
    )
    switch_parser.add_argument("name", help="Worktree name")
    switch_parser.set_defaults(command="switch")

    remove_parser = subparsers.add_parser(
        "remove", aliases=["rm"], help="Remove one or more worktrees",
        description="Remove worktrees by name. The main worktree and worktrees with "
        "uncommitted changes are never removed; with several names nothing is removed "
        "unless every name passes these checks.",
    )
    remove_parser.add_argument("names", nargs="+", metavar="name", help="Worktree name")
    remove_parser.set_defaults(command="remove")

    clean_parser = subparsers.add_parser(
        "clean", help="Clean up stale worktrees",
        description="Remove worktree entries that point to missing or invalid directories.",
    )
    clean_parser.add_argument(
        "--dry-run", action="store_true",
        help="Show what would be cleaned without making changes",
    )
    clean_parser.add_argument("--force", action="store_true", help="Skip confirmation prompts")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
