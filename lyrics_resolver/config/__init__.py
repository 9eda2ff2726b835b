"""
Configuration management package for Lyrics-Resolver

Settings are loaded from YAML files and environment variables into
dataclass sections (lyrics, network, logging) and exposed through a
process-wide singleton:

    from lyrics_resolver.config import get_settings

    settings = get_settings()
    timeout = settings.network.read_timeout

reload_settings() rebuilds the singleton, optionally from an explicit file.
"""

from .settings import (
    get_settings,
    reload_settings,
    Settings,
    LyricsConfig,
    NetworkConfig,
    LoggingConfig,
)

__all__ = [
    'get_settings',
    'reload_settings',
    'Settings',
    'LyricsConfig',
    'NetworkConfig',
    'LoggingConfig',
]
