"""Command-line interface for wrkt"""

import sys
from typing import Dict, List

from rich.console import Console
from rich.markup import escape

from wrkt.cli.args import parse_args
from wrkt.config import Config, ListOptions
from wrkt.exceptions import CommandExecutionError, WrktError
from wrkt.formatters import format_stale_worktrees, render_worktree_list
from wrkt.logging_config import get_logger, setup_logging
from wrkt.models.worktree import WorktreeStatus
from wrkt.services import GitCommandRunner, GitService, WorktreeManager

console = Console()
error_console = Console(stderr=True)
logger = get_logger(__name__)


def _print_plain(text: str) -> None:
    """Print text verbatim: no markup, highlighting or wrapping."""
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def cmd_list(args, manager: WorktreeManager) -> int:
    """List worktrees."""
    options = ListOptions(
        dirty_only=args.dirty,
        names_only=args.names_only,
        verbose=args.list_verbose,
    )
    worktrees = manager.git_service.list_worktrees()

    details: Dict[str, List[str]] = {}
    if options.verbose and not options.names_only:
        for wt in worktrees:
            if wt.status != WorktreeStatus.DIRTY:
                continue
            try:
                details[wt.path] = manager.git_service.get_detailed_status(wt.path)
            except CommandExecutionError:
                # Worktree changed since it was listed; show it without details
                continue

    _print_plain(render_worktree_list(worktrees, options, details, manager.managed_dir))
    return 0


def cmd_add(args, manager: WorktreeManager) -> int:
    """Add a worktree for a branch."""
    repo_path = manager.git_service.get_main_worktree_path()
    worktree_path = manager.add_worktree(repo_path, args.branch)
    _print_plain(f"Added worktree: {worktree_path}\n")
    return 0


def cmd_switch(args, manager: WorktreeManager) -> int:
    """Print the path of a worktree for the shell to cd into."""
    worktree = manager.find_worktree(args.name)
    _print_plain(f"{worktree.path}\n")
    return 0


def cmd_remove(args, manager: WorktreeManager) -> int:
    """Remove one or more worktrees."""
    repo_path = manager.git_service.get_main_worktree_path()
    names = list(dict.fromkeys(args.names))
    if len(names) == 1:
        manager.remove_worktree(repo_path, names[0])
    else:
        manager.remove_multiple_worktrees(repo_path, names)

    for name in names:
        _print_plain(f"Removed worktree: {name}\n")
    return 0


def cmd_clean(args, manager: WorktreeManager) -> int:
    """Prune stale worktree entries."""
    stale = manager.stale_worktrees()

    if not stale:
        console.print("No stale worktrees found.")
        return 0

    console.print(f"Found {len(stale)} stale worktree(s):")
    _print_plain(format_stale_worktrees(stale, manager.managed_dir))

    if args.dry_run:
        console.print("\n[yellow]Dry run mode - no changes made.[/yellow]")
        return 0

    if not args.force:
        response = console.input("\nProceed with cleanup? [y/N] ")
        if response.strip().lower() != "y":
            console.print("Cleanup cancelled.")
            return 0

    manager.prune_worktrees()
    console.print(f"[green]Cleaned {len(stale)} stale worktree(s).[/green]")
    return 0


COMMANDS = {
    "list": cmd_list,
    "add": cmd_add,
    "switch": cmd_switch,
    "remove": cmd_remove,
    "clean": cmd_clean,
}


def build_manager(config: Config, working_dir=None) -> WorktreeManager:
    """Wire a WorktreeManager to a real git runner."""
    runner = GitCommandRunner(working_dir)
    git_service = GitService(runner)
    return WorktreeManager(git_service, runner, config)


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    config = Config(verbose=parsed_args.verbose, debug=parsed_args.debug)

    # Setup logging before touching git
    setup_logging(verbose=config.verbose, debug=config.debug)

    try:
        manager = build_manager(config)
        return COMMANDS[parsed_args.command](parsed_args, manager)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except WrktError as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if config.debug:
            error_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
