"""
Configuration management for Lyrics-Resolver

This module handles loading, validation, and management of application settings
from multiple sources including YAML files and environment variables. It provides
a centralized configuration system that supports reloading and validation.

The configuration is organized into logical sections using dataclasses:
- Lyrics engine settings (service URL, cache capacity, worker pool, scoring weights)
- Network settings (user agent, connect/read timeouts)
- Logging settings (level, file output, rotation)

Values can be overridden from environment variables (optionally loaded from a
.env file), which take precedence over file-based configuration.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

from ..exceptions import ConfigError

# Load environment variables from .env file if present
load_dotenv()


def _default_scoring() -> Dict[str, Any]:
    """Default candidate scoring weights (see lyrics.ranker.ScoringWeights)"""
    return {
        'synced_bonus': 15.0,
        # (max seconds difference, bonus) checked in order
        'duration_tiers': [[3, 10.0], [10, 7.0], [30, 3.0]],
        'length_chars_per_point': 100,
        'length_bonus_cap': 5.0,
        'latin_script_bonus': 8.0,
        'latin_script_threshold': 0.5,
    }


@dataclass
class LyricsConfig:
    """
    Lyrics engine configuration

    Controls which lookup service is queried, how many resolved results are
    kept in memory, how many background workers serve asynchronous requests,
    and how fuzzy-search candidates are scored against each other.
    """
    base_url: str = "https://lrclib.net/api"
    source_name: str = "lrclib"
    cache_capacity: int = 50
    max_workers: int = 4
    scoring: Dict[str, Any] = field(default_factory=_default_scoring)


@dataclass
class NetworkConfig:
    """
    Network and HTTP configuration settings

    Every lookup call uses bounded connect/read timeouts; a timed out call is
    treated as a failed search strategy, never as a fatal error.
    """
    user_agent: str = "Lyrics-Resolver/1.0"
    connect_timeout: float = 8.0
    read_timeout: float = 10.0


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Controls application logging behavior including log levels, file output,
    rotation, and console formatting.
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


class Settings:
    """
    Main settings class that manages all configuration

    Loads settings from YAML files and environment variables and provides
    a unified interface for accessing configuration throughout the application.

    The class handles:
    - Loading configuration from YAML files
    - Overriding with environment variables
    - Validating configuration values
    - Saving configuration back to files
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file or environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations

        Raises:
            ConfigError: If config_path was given explicitly and cannot be loaded
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".lyrics-resolver"

        # Initialize all configuration objects with default values
        self.lyrics = LyricsConfig()
        self.network = NetworkConfig()
        self.logging = LoggingConfig()

        # Load configuration from various sources in order of precedence
        self._load_config()
        self._load_environment_variables()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file

        Searches for configuration files in multiple locations in order of
        precedence. The first file found will be used. A broken file in one of
        the implicit locations only produces a warning; an explicitly requested
        file that cannot be read is an error.
        """
        if self.config_path:
            path = Path(self.config_path).expanduser()
            if not path.exists():
                raise ConfigError(
                    f"Config file not found: {path}",
                    details={'file_path': str(path)}
                )
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    config_data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(
                    f"Failed to load config from {path}: {e}",
                    details={'file_path': str(path)}
                ) from e
            self._apply_config(config_data)
            return

        config_paths = [
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path.exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        config_data = yaml.safe_load(f) or {}
                    break
                except (OSError, yaml.YAMLError) as e:
                    print(f"Warning: Failed to load config from {path}: {e}")

        # Apply loaded configuration to dataclass instances
        self._apply_config(config_data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Maps configuration sections from the YAML file to the appropriate
        dataclass instances, updating only the attributes that exist in
        both the config file and the dataclass definition. The scoring
        section is merged key by key so a partial override keeps the
        remaining defaults.

        Args:
            config_data: Dictionary containing configuration sections
        """
        if not isinstance(config_data, dict):
            return

        config_mapping = {
            'lyrics': self.lyrics,
            'network': self.network,
            'logging': self.logging,
        }

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if not hasattr(config_obj, key):
                        continue
                    if key == 'scoring' and isinstance(value, dict):
                        merged = _default_scoring()
                        merged.update(value)
                        value = merged
                    setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """
        Load configuration overrides from environment variables

        Environment variables take precedence over file-based configuration.
        Malformed numeric values are ignored with a warning.
        """
        env_mappings = {
            'LYRICS_RESOLVER_BASE_URL': lambda v: setattr(self.lyrics, 'base_url', v),
            'LYRICS_RESOLVER_USER_AGENT': lambda v: setattr(self.network, 'user_agent', v),
            'LYRICS_RESOLVER_CACHE_CAPACITY': lambda v: setattr(self.lyrics, 'cache_capacity', int(v)),
            'LYRICS_RESOLVER_LOG_LEVEL': lambda v: setattr(self.logging, 'level', v),
        }

        # Apply environment variables if they exist
        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    setter(value)
                except ValueError:
                    print(f"Warning: Ignoring invalid value for {env_var}: {value!r}")

    def get_config_directory(self) -> Path:
        """
        Get the expanded config directory path

        Returns:
            Path object for the configuration directory
        """
        return self.config_dir.expanduser()

    def save_config(self, path: Optional[str] = None) -> Path:
        """
        Save current configuration to file

        Args:
            path: Custom path to save config, defaults to user config directory

        Returns:
            Path the configuration was written to

        Raises:
            ConfigError: If the configuration cannot be saved
        """
        target = Path(path) if path else self.get_config_directory() / "config.yaml"

        config_data = {
            'lyrics': self._dataclass_to_dict(self.lyrics),
            'network': self._dataclass_to_dict(self.network),
            'logging': self._dataclass_to_dict(self.logging),
        }

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'w', encoding='utf-8') as f:
                yaml.safe_dump(config_data, f, default_flow_style=False, indent=2)
        except OSError as e:
            raise ConfigError(
                f"Failed to save config to {target}: {e}",
                details={'file_path': str(target)}
            ) from e
        return target

    def _dataclass_to_dict(self, obj) -> Dict[str, Any]:
        """Convert dataclass to dictionary for YAML output"""
        result = {}
        for key, value in obj.__dict__.items():
            result[key] = value
        return result

    def get_validation_errors(self) -> List[str]:
        """
        Collect configuration problems

        Returns:
            List of human-readable error strings (empty if configuration is valid)
        """
        errors = []

        if not self.lyrics.base_url.startswith(('http://', 'https://')):
            errors.append(f"Invalid lyrics service URL: {self.lyrics.base_url}")

        if not isinstance(self.lyrics.cache_capacity, int) or self.lyrics.cache_capacity <= 0:
            errors.append(f"Cache capacity must be a positive integer: {self.lyrics.cache_capacity}")

        if not isinstance(self.lyrics.max_workers, int) or self.lyrics.max_workers <= 0:
            errors.append(f"Worker count must be a positive integer: {self.lyrics.max_workers}")

        if self.network.connect_timeout <= 0 or self.network.read_timeout <= 0:
            errors.append("Network timeouts must be positive")

        if self.logging.level.upper() not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            errors.append(f"Invalid logging level: {self.logging.level}")

        return errors

    def validate(self) -> bool:
        """
        Validate current configuration

        Returns:
            True if configuration is valid, False otherwise
        """
        errors = self.get_validation_errors()

        # Display validation errors if any exist
        if errors:
            print("Configuration validation errors:")
            for error in errors:
                print(f"  - {error}")
            return False

        return True

    def __str__(self) -> str:
        """String summary of key configuration values"""
        sections = [
            f"Service: {self.lyrics.base_url}",
            f"Cache: {self.lyrics.cache_capacity} entries",
            f"Workers: {self.lyrics.max_workers}",
            f"Timeouts: {self.network.connect_timeout}s/{self.network.read_timeout}s",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance, created on first access
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance

    Provides access to the singleton settings instance that is shared
    throughout the application.

    Returns:
        The global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files

    Creates a new settings instance with updated configuration from files
    and environment variables.

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global _settings
    _settings = Settings(config_path)
    return _settings
