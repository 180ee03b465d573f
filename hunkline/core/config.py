"""Configuration management for hunkline.

Settings are read from INI files and can be overridden from the
environment, so editors embedding the layer and the command line
share one set of defaults.
"""

import os
import configparser
from pathlib import Path
from typing import Optional

DEFAULTS = {
    'core': {
        'command': 'git',
        'version': 'auto',
    },
    'yadm': {
        'enable': 'false',
    },
    'blame': {
        'ignore_whitespace': 'false',
    },
    'diff': {
        'algorithm': 'myers',
        'indent_heuristic': 'false',
    },
}

_TRUE = {'1', 'yes', 'true', 'on'}
_FALSE = {'0', 'no', 'false', 'off'}


class Config:
    """
    Manages hunkline configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.hunklinerc
    - Repository config: <gitdir>/hunkline.ini

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.hunklinerc'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (HUNKLINE_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value
        5. Built-in default

        Args:
            section: Config section (e.g., 'core', 'blame')
            key: Config key (e.g., 'command')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_key = f"HUNKLINE_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback

        return DEFAULTS.get(section, {}).get(key)

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """
        Get a boolean configuration value.

        Raises:
            ValueError: If the value is not a recognised boolean
        """
        value = self.get(section, key)
        if value is None:
            return fallback
        value = value.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ValueError(f"Not a boolean for {section}.{key}: {value!r}")


def get_config(gitdir: Optional[str] = None) -> Config:
    """
    Get a Config instance.

    Args:
        gitdir: Repository metadata directory, or None for global-only config

    Returns:
        Config instance
    """
    if gitdir:
        return Config(Path(gitdir) / 'hunkline.ini')
    return Config()
