"""Tests for Config"""
import pytest

from git_task_keeper.config import ENV_BASE_BRANCH, ENV_REMOTE, ENV_SETUP_CMD, Config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove GIT_TASK_KEEPER_* variables for the test."""
    for name in (ENV_BASE_BRANCH, ENV_REMOTE, ENV_SETUP_CMD):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Test Config defaults."""

    def test_defaults(self):
        """Test default configuration values."""
        config = Config()

        assert config.remote_name == "origin"
        assert config.tasks_dir_suffix == "-tasks"
        assert config.base_branch is None
        assert config.setup_command == ["pip", "install", "-e", "."]
        assert config.brief_path == ".claude/TASK.md"

    def test_setup_commands_are_not_shared(self):
        """Test setup commands are not shared."""
        first, second = Config(), Config()
        first.setup_command.append("--quiet")

        assert second.setup_command == ["pip", "install", "-e", "."]


class TestConfigValidation:
    """Test rejection of unusable values."""

    @pytest.mark.parametrize("remote", ["", "   ", "bad..remote", "-origin"])
    def test_invalid_remote(self, remote):
        """Test rejecting unusable remote names."""
        with pytest.raises(ValueError, match="remote_name"):
            Config(remote_name=remote)

    @pytest.mark.parametrize("suffix", ["", "/tasks", "..", "a\\b"])
    def test_invalid_suffix(self, suffix):
        """Test rejecting suffixes that leave the parent directory."""
        with pytest.raises(ValueError, match="tasks_dir_suffix"):
            Config(tasks_dir_suffix=suffix)

    def test_invalid_base_branch(self):
        """Test invalid base branch."""
        with pytest.raises(ValueError, match="base_branch"):
            Config(base_branch="main~1")

    def test_setup_command_string_is_split(self):
        """Test setup command string is split."""
        assert Config(setup_command="npm ci --silent").setup_command == ["npm", "ci", "--silent"]

    @pytest.mark.parametrize("command", [[], "", ["npm", ""], ["npm", 3]])
    def test_invalid_setup_command(self, command):
        """Test invalid setup command."""
        with pytest.raises(ValueError, match="setup_command"):
            Config(setup_command=command)

    @pytest.mark.parametrize("path", ["", "/etc/TASK.md", "../TASK.md", "docs/../../TASK.md"])
    def test_invalid_brief_path(self, path):
        """Test invalid brief path."""
        with pytest.raises(ValueError, match="brief_path"):
            Config(brief_path=path)


class TestConfigConversion:
    """Test dict conversion."""

    def test_from_dict_drops_unknown_keys(self):
        """Test from dict drops unknown keys."""
        config = Config.from_dict({"remote_name": "upstream", "github_token": "x"})

        assert config.remote_name == "upstream"
        assert not hasattr(config, "github_token")

    def test_to_dict_round_trip(self):
        """Test to dict round trip."""
        config = Config(base_branch="develop", verbose=True)

        assert Config.from_dict(config.to_dict()) == config

    def test_get(self):
        """Test reading values with a fallback."""
        config = Config()

        assert config.get("remote_name") == "origin"
        assert config.get("missing", "fallback") == "fallback"


class TestConfigFromEnv:
    """Test environment overrides."""

    def test_no_environment(self, clean_env):
        """Test an empty environment gives the defaults."""
        assert Config.from_env() == Config()

    def test_environment_values(self, clean_env):
        """Test reading every supported variable."""
        clean_env.setenv(ENV_BASE_BRANCH, "develop")
        clean_env.setenv(ENV_REMOTE, "upstream")
        clean_env.setenv(ENV_SETUP_CMD, "uv sync --frozen")

        config = Config.from_env()

        assert config.base_branch == "develop"
        assert config.remote_name == "upstream"
        assert config.setup_command == ["uv", "sync", "--frozen"]

    def test_overrides_take_precedence(self, clean_env):
        """Test overrides take precedence."""
        clean_env.setenv(ENV_SETUP_CMD, "uv sync")

        config = Config.from_env(setup_command="make deps", verbose=True)

        assert config.setup_command == ["make", "deps"]
        assert config.verbose

    def test_none_overrides_are_ignored(self, clean_env):
        """Test none overrides are ignored."""
        clean_env.setenv(ENV_BASE_BRANCH, "develop")

        assert Config.from_env(base_branch=None).base_branch == "develop"

    def test_invalid_environment_value(self, clean_env):
        """Test invalid environment value."""
        clean_env.setenv(ENV_BASE_BRANCH, "bad branch")

        with pytest.raises(ValueError):
            Config.from_env()
