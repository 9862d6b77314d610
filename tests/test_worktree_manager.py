"""Tests for WorktreeManager"""
import os
from unittest.mock import patch

import pytest

from wrkt.config import Config
from wrkt.exceptions import (
    BranchNameCollisionError,
    CannotRemoveMainError,
    DirectoryCreationError,
    EmptyNameError,
    InvalidBranchNameError,
    InvalidRepositoryPathError,
    UncommittedChangesError,
    WorktreeAddError,
    WorktreeNotFoundError,
    WorktreeRemoveError,
)
from wrkt.models.worktree import WorktreeStatus
from wrkt.services.git_service import GitService
from wrkt.services.worktree_manager import (
    WorktreeManager,
    validate_branch_name,
    validate_repo_path,
)

from conftest import LIST_COMMAND, FakeRunner, make_listing


def make_manager(runner, config=None):
    return WorktreeManager(GitService(runner), runner, config)


class TestValidation:
    """Test input validation helpers."""

    @pytest.mark.parametrize("branch", ["main", "feature/auth", "fix-123", "release_1.0"])
    def test_valid_branch_names(self, branch):
        validate_branch_name(branch)

    @pytest.mark.parametrize(
        "branch,reason",
        [
            ("", "cannot be empty"),
            ("-x", "cannot start with dash"),
            ("--force", "cannot start with dash"),
            ("a;b", "invalid characters"),
            ("a`b`", "invalid characters"),
            ("$(rm)", "invalid characters"),
            ("a|b", "invalid characters"),
            ("x>y", "invalid characters"),
        ],
    )
    def test_invalid_branch_names(self, branch, reason):
        with pytest.raises(InvalidBranchNameError, match=reason):
            validate_branch_name(branch)

    def test_valid_repo_path(self):
        validate_repo_path("/repo")

    @pytest.mark.parametrize("path", ["", "repo", "./repo", "../repo"])
    def test_invalid_repo_path(self, path):
        with pytest.raises(InvalidRepositoryPathError, match="invalid repository path"):
            validate_repo_path(path)


class TestAddWorktree:
    """Test worktree creation."""

    def test_derives_path_and_runs_commands(self, temp_dir):
        runner = FakeRunner()
        repo = str(temp_dir)

        path = make_manager(runner).add_worktree(repo, "feature/auth")

        assert path == os.path.join(repo, "worktrees", "feature-auth")
        assert os.path.isdir(os.path.join(repo, "worktrees"))
        assert runner.commands == [
            LIST_COMMAND,
            f"git -C {repo} branch feature/auth",
            f"git -C {repo} worktree add {path} feature/auth",
        ]

    def test_without_collision_detection_skips_listing(self, temp_dir):
        runner = FakeRunner()
        make_manager(runner, Config(detect_collisions=False)).add_worktree(str(temp_dir), "main2")
        assert LIST_COMMAND not in runner.commands

    def test_custom_managed_dir(self, temp_dir):
        runner = FakeRunner()
        path = make_manager(runner, Config(managed_dir=".trees")).add_worktree(str(temp_dir), "x")

        assert path == os.path.join(str(temp_dir), ".trees", "x")
        assert (temp_dir / ".gitignore").read_text() == ".trees/\n"

    def test_repo_path_with_space_is_quoted(self, temp_dir):
        repo_dir = temp_dir / "my repo"
        repo_dir.mkdir()
        runner = FakeRunner()

        make_manager(runner).add_worktree(str(repo_dir), "feat")

        assert runner.commands[1] == f"git -C '{repo_dir}' branch feat"

    @pytest.mark.parametrize("branch", ["", "-x", "a;b", "a`b`"])
    def test_invalid_branch_runs_no_commands(self, temp_dir, branch):
        runner = FakeRunner()
        with pytest.raises(InvalidBranchNameError):
            make_manager(runner).add_worktree(str(temp_dir), branch)
        assert runner.commands == []
        assert not (temp_dir / "worktrees").exists()

    @pytest.mark.parametrize("repo_path", ["", "relative/repo"])
    def test_invalid_repo_path_runs_no_commands(self, repo_path):
        runner = FakeRunner()
        with pytest.raises(InvalidRepositoryPathError):
            make_manager(runner).add_worktree(repo_path, "feat")
        assert runner.commands == []

    def test_existing_branch_is_checked_out(self, temp_dir):
        repo = str(temp_dir)
        runner = FakeRunner(failures={f"git -C {repo} branch feat": "fatal: a branch named 'feat' already exists"})

        path = make_manager(runner).add_worktree(repo, "feat")

        assert runner.commands[-1] == f"git -C {repo} worktree add {path} feat"

    def test_add_failure_after_branch_failure(self, temp_dir):
        repo = str(temp_dir)
        path = os.path.join(repo, "worktrees", "feat")
        runner = FakeRunner(failures={
            f"git -C {repo} branch feat": "fatal: not a valid object name",
            f"git -C {repo} worktree add {path} feat": "fatal: invalid reference: feat",
        })

        with pytest.raises(WorktreeAddError, match="branch feat might not exist"):
            make_manager(runner).add_worktree(repo, "feat")

    def test_add_failure_after_branch_created(self, temp_dir):
        repo = str(temp_dir)
        path = os.path.join(repo, "worktrees", "feat")
        runner = FakeRunner(failures={
            f"git -C {repo} worktree add {path} feat": "fatal: already exists",
        })

        with pytest.raises(WorktreeAddError) as exc_info:
            make_manager(runner).add_worktree(repo, "feat")

        assert "git worktree add failed: " in str(exc_info.value)
        assert "might not exist" not in str(exc_info.value)

    def test_branch_collision(self, temp_dir):
        repo = str(temp_dir)
        existing = os.path.join(repo, "worktrees", "feature-auth")
        runner = FakeRunner(responses={
            LIST_COMMAND: make_listing((repo, "abc", "main"), (existing, "def", "feature-auth")),
        })

        with pytest.raises(BranchNameCollisionError) as exc_info:
            make_manager(runner).add_worktree(repo, "feature/auth")

        assert exc_info.value.existing_branch == "feature-auth"
        assert runner.commands == [LIST_COMMAND]

    def test_same_branch_is_not_a_collision(self, temp_dir):
        repo = str(temp_dir)
        existing = os.path.join(repo, "worktrees", "feat")
        runner = FakeRunner(responses={LIST_COMMAND: make_listing((existing, "def", "feat"))})

        make_manager(runner).add_worktree(repo, "feat")

        assert runner.commands_containing("worktree add")

    def test_directory_creation_failure(self, temp_dir):
        # A file where the managed directory should be
        (temp_dir / "worktrees").write_text("")
        runner = FakeRunner()

        with pytest.raises(DirectoryCreationError):
            make_manager(runner).add_worktree(str(temp_dir), "feat")
        assert runner.commands_containing("worktree add") == []

    def test_gitignore_failure_is_not_fatal(self, temp_dir):
        runner = FakeRunner()
        manager = make_manager(runner)

        with patch.object(manager, "ensure_gitignore_entry", side_effect=PermissionError("denied")):
            path = manager.add_worktree(str(temp_dir), "feat")

        assert path.endswith(os.path.join("worktrees", "feat"))
        assert runner.commands_containing("worktree add")


class TestGitignoreEntry:
    """Test ignore file maintenance."""

    def test_creates_file(self, temp_dir):
        assert make_manager(FakeRunner()).ensure_gitignore_entry(str(temp_dir)) is True
        assert (temp_dir / ".gitignore").read_text() == "worktrees/\n"

    def test_appends_to_existing(self, temp_dir):
        (temp_dir / ".gitignore").write_text("*.pyc\n")
        assert make_manager(FakeRunner()).ensure_gitignore_entry(str(temp_dir)) is True
        assert (temp_dir / ".gitignore").read_text() == "*.pyc\nworktrees/\n"

    def test_appends_after_missing_trailing_newline(self, temp_dir):
        (temp_dir / ".gitignore").write_text("*.pyc")
        make_manager(FakeRunner()).ensure_gitignore_entry(str(temp_dir))
        assert (temp_dir / ".gitignore").read_text() == "*.pyc\nworktrees/\n"

    def test_no_duplicate(self, temp_dir):
        (temp_dir / ".gitignore").write_text("node_modules/\n  worktrees/  \n")
        assert make_manager(FakeRunner()).ensure_gitignore_entry(str(temp_dir)) is False
        assert (temp_dir / ".gitignore").read_text() == "node_modules/\n  worktrees/  \n"

    def test_substring_is_not_a_match(self, temp_dir):
        (temp_dir / ".gitignore").write_text("old-worktrees/\n")
        assert make_manager(FakeRunner()).ensure_gitignore_entry(str(temp_dir)) is True

    def test_repeated_adds_keep_single_entry(self, temp_dir):
        manager = make_manager(FakeRunner())
        manager.add_worktree(str(temp_dir), "one")
        manager.add_worktree(str(temp_dir), "two")
        assert (temp_dir / ".gitignore").read_text().count("worktrees/") == 1


class TestRemoveWorktree:
    """Test single worktree removal."""

    def test_remove_clean(self, fake_runner):
        make_manager(fake_runner).remove_worktree("/repo", "feature-auth")

        assert fake_runner.commands_containing("worktree remove") == [
            "git -C /repo worktree remove /repo/worktrees/feature-auth"
        ]

    def test_remove_stale_is_allowed(self, fake_runner):
        make_manager(fake_runner).remove_worktree("/repo", "old-work")

        assert fake_runner.commands_containing("worktree remove") == [
            "git -C /repo worktree remove /repo/worktrees/old-work"
        ]

    def test_remove_main(self, fake_runner):
        with pytest.raises(CannotRemoveMainError):
            make_manager(fake_runner).remove_worktree("/repo", "main")
        assert fake_runner.commands_containing("worktree remove") == []

    def test_remove_managed_dir_of_other_repo(self):
        """A path containing /worktrees/ outside the repository is not removable."""
        runner = FakeRunner(responses={
            LIST_COMMAND: make_listing(("/srv/worktrees/repo", "abc", "main")),
        })
        with pytest.raises(CannotRemoveMainError):
            make_manager(runner).remove_worktree("/srv/worktrees/repo", "repo")

    def test_remove_with_custom_managed_dir(self):
        runner = FakeRunner(responses={
            LIST_COMMAND: make_listing(("/repo", "abc", "main"), ("/repo/.trees/x", "def", "feature/x")),
        })

        make_manager(runner, Config(managed_dir=".trees")).remove_worktree("/repo", "x")

        assert runner.commands_containing("worktree remove") == ["git -C /repo worktree remove /repo/.trees/x"]

    def test_remove_dirty(self, fake_runner):
        with pytest.raises(UncommittedChangesError, match="uncommitted changes"):
            make_manager(fake_runner).remove_worktree("/repo", "feature-ui")
        assert fake_runner.commands_containing("worktree remove") == []

    def test_remove_not_found(self, fake_runner):
        with pytest.raises(WorktreeNotFoundError):
            make_manager(fake_runner).remove_worktree("/repo", "nope")

    def test_remove_empty_name(self, fake_runner):
        with pytest.raises(EmptyNameError):
            make_manager(fake_runner).remove_worktree("/repo", "")
        assert fake_runner.commands == []

    def test_remove_relative_repo_path(self, fake_runner):
        with pytest.raises(InvalidRepositoryPathError):
            make_manager(fake_runner).remove_worktree("repo", "feature-auth")
        assert fake_runner.commands == []

    def test_remove_failure(self, fake_runner):
        fake_runner.failures["git -C /repo worktree remove /repo/worktrees/feature-auth"] = "fatal: locked"

        with pytest.raises(WorktreeRemoveError) as exc_info:
            make_manager(fake_runner).remove_worktree("/repo", "feature-auth")

        assert "locked" in str(exc_info.value)


class TestRemoveMultipleWorktrees:
    """Test all-or-nothing batch removal."""

    def test_removes_in_input_order(self, fake_runner):
        make_manager(fake_runner).remove_multiple_worktrees("/repo", ["old-work", "feature-auth"])

        assert fake_runner.commands_containing("worktree remove") == [
            "git -C /repo worktree remove /repo/worktrees/old-work",
            "git -C /repo worktree remove /repo/worktrees/feature-auth",
        ]

    def test_single_listing(self, fake_runner):
        make_manager(fake_runner).remove_multiple_worktrees("/repo", ["old-work", "feature-auth"])
        assert fake_runner.commands.count(LIST_COMMAND) == 1

    def test_dirty_target_removes_nothing(self, fake_runner):
        with pytest.raises(UncommittedChangesError):
            make_manager(fake_runner).remove_multiple_worktrees("/repo", ["feature-auth", "feature-ui"])
        assert fake_runner.commands_containing("worktree remove") == []

    def test_unknown_target_removes_nothing(self, fake_runner):
        with pytest.raises(WorktreeNotFoundError):
            make_manager(fake_runner).remove_multiple_worktrees("/repo", ["feature-auth", "nope"])
        assert fake_runner.commands_containing("worktree remove") == []

    def test_main_target_removes_nothing(self, fake_runner):
        with pytest.raises(CannotRemoveMainError):
            make_manager(fake_runner).remove_multiple_worktrees("/repo", ["feature-auth", "main"])
        assert fake_runner.commands_containing("worktree remove") == []

    def test_repeated_name_removed_once(self, fake_runner):
        path = "/repo/worktrees/feature-auth"
        make_manager(fake_runner).remove_multiple_worktrees(
            "/repo", ["feature-auth", "old-work", "feature-auth"]
        )

        assert fake_runner.commands_containing("worktree remove") == [
            f"git -C /repo worktree remove {path}",
            "git -C /repo worktree remove /repo/worktrees/old-work",
        ]

    def test_empty_list(self, fake_runner):
        with pytest.raises(EmptyNameError):
            make_manager(fake_runner).remove_multiple_worktrees("/repo", [])
        assert fake_runner.commands == []

    def test_empty_name_in_list(self, fake_runner):
        with pytest.raises(EmptyNameError):
            make_manager(fake_runner).remove_multiple_worktrees("/repo", ["feature-auth", ""])
        assert fake_runner.commands == []


class TestQueries:
    """Test lookups that do not modify anything."""

    def test_find_worktree(self, fake_runner):
        worktree = make_manager(fake_runner).find_worktree("feature-ui")

        assert worktree.path == "/repo/worktrees/feature-ui"
        assert worktree.branch == "feature/ui"
        assert worktree.status == WorktreeStatus.DIRTY

    def test_find_main_worktree(self, fake_runner):
        assert make_manager(fake_runner).find_worktree("main").path == "/repo"

    def test_find_missing(self, fake_runner):
        with pytest.raises(WorktreeNotFoundError):
            make_manager(fake_runner).find_worktree("nope")

    def test_stale_worktrees(self, fake_runner):
        stale = make_manager(fake_runner).stale_worktrees()
        assert [wt.path for wt in stale] == ["/repo/worktrees/old-work"]

    def test_prune(self, fake_runner):
        make_manager(fake_runner).prune_worktrees()
        assert fake_runner.commands == ["git worktree prune"]

    def test_get_worktree_path(self):
        manager = make_manager(FakeRunner())
        assert manager.get_worktree_path("/repo", "bugfix/login") == "/repo/worktrees/bugfix-login"
