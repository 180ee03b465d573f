"""Unit tests for configuration."""

import pytest

from hunkline.core.config import Config, get_config


@pytest.fixture
def config(temp_dir, monkeypatch):
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', temp_dir / 'hunklinerc')
    for key in ('CORE_COMMAND', 'CORE_VERSION', 'YADM_ENABLE', 'BLAME_IGNORE_WHITESPACE'):
        monkeypatch.delenv(f"HUNKLINE_{key}", raising=False)
    return Config(temp_dir / 'hunkline.ini')


def test_defaults(config):
    """Test built-in defaults."""
    assert config.get('core', 'command') == 'git'
    assert config.get('core', 'version') == 'auto'
    assert config.get('diff', 'algorithm') == 'myers'
    assert config.get_bool('yadm', 'enable') is False


def test_fallback(config):
    """Test an explicit fallback wins over defaults."""
    assert config.get('core', 'command', fallback='yadm') == 'yadm'
    assert config.get('nothing', 'here') is None


def test_global_config(config):
    """Test global config is read."""
    config.GLOBAL_CONFIG_PATH.write_text("[core]\ncommand = /usr/local/bin/git\n")
    assert Config(config.repo_config_path).get('core', 'command') == '/usr/local/bin/git'


def test_repo_overrides_global(config):
    """Test repository config takes precedence."""
    config.GLOBAL_CONFIG_PATH.write_text("[blame]\nignore_whitespace = false\n")
    config.repo_config_path.write_text("[blame]\nignore_whitespace = true\n")
    assert Config(config.repo_config_path).get_bool('blame', 'ignore_whitespace') is True


def test_env_overrides_everything(config, monkeypatch):
    """Test environment variables take highest precedence."""
    config.repo_config_path.write_text("[yadm]\nenable = false\n")
    monkeypatch.setenv('HUNKLINE_YADM_ENABLE', 'yes')
    assert Config(config.repo_config_path).get_bool('yadm', 'enable') is True


def test_get_bool_invalid(config, monkeypatch):
    """Test a bad boolean is rejected."""
    monkeypatch.setenv('HUNKLINE_YADM_ENABLE', 'maybe')
    with pytest.raises(ValueError):
        config.get_bool('yadm', 'enable')


def test_get_config(temp_dir):
    """Test the repository config lives in the git directory."""
    assert get_config(str(temp_dir)).repo_config_path == temp_dir / 'hunkline.ini'
    assert get_config().repo_config_path is None
