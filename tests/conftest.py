"""Pytest fixtures for wrkt tests"""
import tempfile
from pathlib import Path
import pytest
import git

from wrkt.exceptions import CommandExecutionError
from wrkt.services.runner import CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner that replays canned output and records every command."""

    def __init__(self, responses=None, failures=None):
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})  # command -> stderr
        self.commands = []

    def run(self, command: str) -> str:
        self.commands.append(command)
        if command in self.failures:
            raise CommandExecutionError(command, 1, self.failures[command])
        return self.responses.get(command, "")

    def commands_containing(self, fragment: str) -> list:
        return [c for c in self.commands if fragment in c]


def make_listing(*worktrees) -> str:
    """Build `git worktree list --porcelain` output from (path, head, branch) tuples.

    A branch of None produces a detached record.
    """
    records = []
    for path, head, branch in worktrees:
        lines = [f"worktree {path}", f"HEAD {head}"]
        lines.append("detached" if branch is None else f"branch refs/heads/{branch}")
        records.append("\n".join(lines))
    return "\n\n".join(records) + "\n"


LIST_COMMAND = "git worktree list --porcelain"


def status_command(path: str) -> str:
    return f"git -C {path} status --porcelain"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_runner():
    """A FakeRunner for a repository at /repo with three worktrees.

    feature-auth is clean, feature-ui is dirty, old-work is stale.
    """
    listing = make_listing(
        ("/repo", "abc123", "main"),
        ("/repo/worktrees/feature-auth", "def456", "feature/auth"),
        ("/repo/worktrees/feature-ui", "789abc", "feature/ui"),
        ("/repo/worktrees/old-work", "fedcba", "old/work"),
    )
    return FakeRunner(
        responses={
            LIST_COMMAND: listing,
            status_command("/repo"): "",
            status_command("/repo/worktrees/feature-auth"): "",
            status_command("/repo/worktrees/feature-ui"): " M app.py\n?? notes.txt",
        },
        failures={
            status_command("/repo/worktrees/old-work"): "fatal: cannot change to '/repo/worktrees/old-work'",
        },
    )


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    # Cleanup
    repo.close()
