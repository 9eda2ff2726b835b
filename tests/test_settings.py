# tests/test_settings.py
"""Test configuration loading"""

import pytest
import yaml

from lyrics_resolver.config.settings import Settings, get_settings, reload_settings
from lyrics_resolver.exceptions import ConfigError


class TestSettings:
    """Test settings sources and validation"""

    def test_defaults(self):
        """Test built-in defaults without any config file"""
        settings = Settings()

        assert settings.lyrics.base_url == "https://lrclib.net/api"
        assert settings.lyrics.source_name == "lrclib"
        assert settings.lyrics.cache_capacity == 50
        assert settings.lyrics.max_workers == 4
        assert settings.lyrics.scoring['synced_bonus'] == 15.0
        assert settings.network.connect_timeout == 8.0
        assert settings.network.read_timeout == 10.0
        assert settings.validate()

    def test_explicit_yaml(self, temp_dir):
        """Test values from an explicit config file, with partial scoring merge"""
        config_file = temp_dir / "custom.yaml"
        config_file.write_text(yaml.safe_dump({
            'lyrics': {'cache_capacity': 10, 'scoring': {'synced_bonus': 20.0}, 'unknown_key': 1},
            'network': {'user_agent': 'Custom/2.0'},
        }))

        settings = Settings(str(config_file))

        assert settings.lyrics.cache_capacity == 10
        assert settings.lyrics.scoring['synced_bonus'] == 20.0
        assert settings.lyrics.scoring['latin_script_bonus'] == 8.0
        assert settings.network.user_agent == 'Custom/2.0'
        assert not hasattr(settings.lyrics, 'unknown_key')

    def test_implicit_config_file(self, tmp_path):
        """Test config.yaml in the working directory is picked up"""
        (tmp_path / "config.yaml").write_text("lyrics:\n  max_workers: 2\n")

        assert Settings().lyrics.max_workers == 2

    def test_missing_explicit_file(self, temp_dir):
        with pytest.raises(ConfigError):
            Settings(str(temp_dir / "missing.yaml"))

    def test_invalid_explicit_yaml(self, temp_dir):
        """Test broken YAML is an error only when requested explicitly"""
        config_file = temp_dir / "broken.yaml"
        config_file.write_text("lyrics: [unclosed")

        with pytest.raises(ConfigError):
            Settings(str(config_file))

    def test_invalid_implicit_yaml_falls_back(self, tmp_path):
        (tmp_path / "config.yaml").write_text("lyrics: [unclosed")

        assert Settings().lyrics.cache_capacity == 50

    def test_environment_overrides(self, temp_dir, monkeypatch):
        """Test environment variables win over the config file"""
        config_file = temp_dir / "custom.yaml"
        config_file.write_text("lyrics:\n  cache_capacity: 10\n")
        monkeypatch.setenv('LYRICS_RESOLVER_CACHE_CAPACITY', '7')
        monkeypatch.setenv('LYRICS_RESOLVER_BASE_URL', 'http://localhost:3000/api')
        monkeypatch.setenv('LYRICS_RESOLVER_LOG_LEVEL', 'DEBUG')

        settings = Settings(str(config_file))

        assert settings.lyrics.cache_capacity == 7
        assert settings.lyrics.base_url == 'http://localhost:3000/api'
        assert settings.logging.level == 'DEBUG'

    def test_invalid_environment_value_ignored(self, monkeypatch):
        monkeypatch.setenv('LYRICS_RESOLVER_CACHE_CAPACITY', 'lots')

        assert Settings().lyrics.cache_capacity == 50

    def test_validation_errors(self):
        settings = Settings()
        settings.lyrics.cache_capacity = 0
        settings.lyrics.base_url = "lrclib.net"

        errors = settings.get_validation_errors()

        assert len(errors) == 2
        assert not settings.validate()

    def test_save_and_reload(self, temp_dir):
        """Test saved configuration loads back identically"""
        settings = Settings()
        settings.lyrics.cache_capacity = 12
        settings.lyrics.scoring['synced_bonus'] = 11.0

        saved_path = settings.save_config(str(temp_dir / "saved.yaml"))
        reloaded = Settings(str(saved_path))

        assert reloaded.lyrics.cache_capacity == 12
        assert reloaded.lyrics.scoring == settings.lyrics.scoring

    def test_singleton(self, temp_dir):
        """Test get_settings/reload_settings share one instance"""
        config_file = temp_dir / "custom.yaml"
        config_file.write_text("lyrics:\n  source_name: mirror\n")

        assert get_settings() is get_settings()
        reloaded = reload_settings(str(config_file))

        assert get_settings() is reloaded
        assert get_settings().lyrics.source_name == "mirror"
