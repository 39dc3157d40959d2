"""Tests for the process gateway and GitOperations"""
import os
from pathlib import Path
from unittest.mock import patch

import git
import pytest

from git_task_keeper.exceptions import (
    ExternalToolError,
    NotAGitRepositoryError,
    RepoRootUnresolvableError,
    ValidationError,
)
from git_task_keeper.services.git import GitOperations, GitPythonGateway
from git_task_keeper.services.git.process import COMMAND_NOT_FOUND, ProcessResult


class TestGitPythonGateway:
    """Test running commands through GitPython."""

    def test_captures_stdout(self, git_repo):
        """Test capturing stdout of git."""
        result = GitPythonGateway().run("git", ["rev-parse", "--abbrev-ref", "HEAD"], git_repo.working_dir)

        assert result.success
        assert result.stdout.strip() == "main"

    def test_failure_is_returned_not_raised(self, git_repo):
        """Test failure is returned not raised."""
        result = GitPythonGateway().run("git", ["show-ref", "--verify", "refs/heads/nope"], git_repo.working_dir)

        assert result.failed
        assert result.exit_code != 0
        assert "refs/heads/nope" in result.stderr

    def test_missing_executable(self, temp_dir):
        """Test a missing executable reports exit 127."""
        result = GitPythonGateway().run("definitely-not-a-real-tool-xyz", ["--help"], str(temp_dir))

        assert result.exit_code == COMMAND_NOT_FOUND
        assert result.stderr

    def test_command_not_found_from_gitpython(self, temp_dir):
        """Test command not found from gitpython."""
        with patch("git.cmd.Git.execute", side_effect=git.exc.GitCommandNotFound("git", "missing")):
            result = GitPythonGateway().run("git", ["status"], str(temp_dir))

        assert result.exit_code == COMMAND_NOT_FOUND


class TestProcessResult:
    """Test ProcessResult flags."""

    def test_success_and_failed(self):
        """Test success and failed."""
        assert ProcessResult("out", "", 0).success
        assert ProcessResult("", "err", 1).failed


class TestGitOperations:
    """Test git queries against a real repository."""

    def test_is_git_repo(self, git_repo, temp_dir):
        """Test is git repo."""
        ops = GitOperations(GitPythonGateway())

        assert ops.is_git_repo(git_repo.working_dir)
        assert not ops.is_git_repo(str(temp_dir))

    def test_resolve_repo_root_from_subdirectory(self, git_repo):
        """Test resolve repo root from subdirectory."""
        sub = f"{git_repo.working_dir}/sub/dir"
        os.makedirs(sub)
        ops = GitOperations(GitPythonGateway())

        assert os.path.realpath(ops.resolve_repo_root(sub)) == os.path.realpath(git_repo.working_dir)

    def test_resolve_repo_root_outside_repo(self, temp_dir):
        """Test resolve repo root outside repo."""
        with pytest.raises(NotAGitRepositoryError):
            GitOperations(GitPythonGateway()).resolve_repo_root(str(temp_dir))

    def test_branch_exists(self, git_repo):
        """Test detecting existing and missing branches."""
        ops = GitOperations(GitPythonGateway())

        assert ops.branch_exists(git_repo.working_dir, "main")
        assert not ops.branch_exists(git_repo.working_dir, "feat/missing")

    def test_main_branch_without_origin(self, git_repo):
        """Test main branch without origin."""
        assert GitOperations(GitPythonGateway()).get_main_branch(git_repo.working_dir) == "main"

    def test_main_branch_from_origin_head(self, git_repo):
        """Test main branch from origin head."""
        git_repo.git.update_ref("refs/remotes/origin/trunk", "HEAD")
        git_repo.git.symbolic_ref("refs/remotes/origin/HEAD", "refs/remotes/origin/trunk")

        assert GitOperations(GitPythonGateway()).get_main_branch(git_repo.working_dir) == "trunk"

    def test_current_branch(self, git_repo):
        """Test reading the checked-out branch."""
        assert GitOperations(GitPythonGateway()).get_current_branch(git_repo.working_dir) == "main"

    def test_uncommitted_changes(self, git_repo):
        """Test detecting an untracked file."""
        ops = GitOperations(GitPythonGateway())
        assert not ops.has_uncommitted_changes(git_repo.working_dir)

        Path(git_repo.working_dir, "new.txt").write_text("new\n")
        assert ops.has_uncommitted_changes(git_repo.working_dir)

    def test_project_name(self):
        """Test deriving the project name from the root."""
        assert GitOperations.get_project_name("/work/proj") == "proj"
        assert GitOperations.get_project_name("/work/proj/") == "proj"
        assert GitOperations.get_project_name("/") == "project"


class TestGitOperationsWithFakes:
    """Test GitOperations error paths with a fake gateway."""

    def test_repo_root_unresolvable(self, fake_gateway):
        """Test repo root unresolvable."""
        fake_gateway.set("git", "rev-parse", "--is-inside-work-tree", stdout="true")

        with pytest.raises(RepoRootUnresolvableError):
            GitOperations(fake_gateway).resolve_repo_root("/w")

    def test_inside_git_dir_is_not_a_work_tree(self, fake_gateway):
        """Test inside git dir is not a work tree."""
        fake_gateway.set("git", "rev-parse", "--is-inside-work-tree", stdout="false")

        assert not GitOperations(fake_gateway).is_git_repo("/w/.git")

    def test_custom_remote(self, fake_gateway):
        """Test default branch lookup with a custom remote."""
        fake_gateway.set("git", "symbolic-ref", "refs/remotes/upstream/HEAD", "--short", stdout="upstream/develop\n")

        ops = GitOperations(fake_gateway, {"remote_name": "upstream"})

        assert ops.get_main_branch("/w") == "develop"

    def test_invalid_branch_never_queried(self, fake_gateway):
        """Test invalid branch never queried."""
        assert not GitOperations(fake_gateway).branch_exists("/w", "bad..name")
        assert fake_gateway.calls == []

    def test_ahead_behind_failure_raises(self, fake_gateway):
        """Test ahead behind failure raises."""
        with pytest.raises(ExternalToolError):
            GitOperations(fake_gateway).get_ahead_behind("/w", "main")

    def test_ahead_behind_parses_left_right(self, fake_gateway):
        """Test ahead behind parses left right."""
        fake_gateway.set("git", "rev-parse", "--abbrev-ref", "HEAD", stdout="fix/x")
        fake_gateway.set("git", "rev-list", "--left-right", "--count", "main...fix/x", stdout="5   2\n")

        assert GitOperations(fake_gateway).get_ahead_behind("/w", "main") == (2, 5)

    def test_status_failure_raises(self, fake_gateway):
        """Test status failure raises."""
        with pytest.raises(ExternalToolError, match="git status"):
            GitOperations(fake_gateway).has_uncommitted_changes("/w")

    def test_delete_branch_validates_name(self, fake_gateway):
        """Test delete branch validates name."""
        with pytest.raises(ValidationError):
            GitOperations(fake_gateway).delete_branch("/w", "-rf")
        assert fake_gateway.calls == []

    def test_delete_branch_flags(self, fake_gateway):
        """Test delete branch flags."""
        ops = GitOperations(fake_gateway)
        ops.delete_branch("/w", "feat/a")
        ops.delete_branch("/w", "feat/b", force=True)

        assert fake_gateway.ran("git", "branch", "-d", "feat/a")
        assert fake_gateway.ran("git", "branch", "-D", "feat/b")
