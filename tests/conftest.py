"""Pytest fixtures for git-task-keeper tests"""
import tempfile
from pathlib import Path
import pytest
import git

from git_task_keeper.services.git.process import ProcessResult


class FakeGateway:
    """Process gateway returning canned results per argument vector.

    Responses registered with a working directory take precedence over
    ones registered without. Unknown commands get ``default``.
    """

    def __init__(self, default=None):
        self.responses = {}
        self.calls = []
        self.default = default or ProcessResult(stderr="fatal: unexpected command", exit_code=128)

    def set(self, *argv, stdout="", stderr="", exit_code=0, cwd=None):
        self.responses[(tuple(argv), cwd and str(cwd))] = ProcessResult(stdout, stderr, exit_code)

    def run(self, command, args, working_directory=None):
        argv = (command, *args)
        self.calls.append((argv, working_directory))
        for key in ((argv, working_directory), (argv, None)):
            if key in self.responses:
                return self.responses[key]
        return self.default

    def ran(self, *argv):
        return any(call[0] == argv for call in self.calls)

    def ran_starting_with(self, *prefix):
        return any(call[0][:len(prefix)] == prefix for call in self.calls)


def porcelain_block(path, branch=None, head="a" * 40, detached=False, bare=False):
    """Build one `git worktree list --porcelain` block, with trailing blank line."""
    lines = [f"worktree {path}"]
    if bare:
        lines.append("bare")
    else:
        lines.append(f"HEAD {head}")
        if detached:
            lines.append("detached")
        else:
            lines.append(f"branch refs/heads/{branch}")
    return "\n".join(lines) + "\n\n"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'remote_name': 'origin',
        'tasks_dir_suffix': '-tasks',
        'setup_command': ['pip', 'install', '-e', '.'],
    }


@pytest.fixture
def fake_gateway():
    """Create an empty FakeGateway."""
    return FakeGateway()


@pytest.fixture
def fake_repo(temp_dir, fake_gateway):
    """A FakeGateway answering like a repository at <temp_dir>/proj.

    origin/HEAD points at main; the only worktree is the main one.
    """
    repo_root = temp_dir / "proj"
    repo_root.mkdir()
    root = str(repo_root)

    fake_gateway.set("git", "rev-parse", "--is-inside-work-tree", stdout="true")
    fake_gateway.set("git", "rev-parse", "--show-toplevel", stdout=root)
    fake_gateway.set("git", "symbolic-ref", "refs/remotes/origin/HEAD", "--short", stdout="origin/main")
    fake_gateway.set("git", "worktree", "list", "--porcelain", stdout=porcelain_block(root, "main"))
    return repo_root


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
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


def commit_file(repo_path, name, content="content\n", message=None):
    """Write a file in ``repo_path`` and commit it there."""
    (Path(repo_path) / name).write_text(content)
    runner = git.Git(str(repo_path))
    runner.add(name)
    runner.commit("-m", message or f"Add {name}")
