"""Test configuration and fixtures"""

import threading

import pytest
import tempfile
from pathlib import Path

from lyrics_resolver.config import settings as settings_module
from lyrics_resolver.lyrics.cache import LyricsCache
from lyrics_resolver.lyrics.models import ExternalLyricsRecord
from lyrics_resolver.lyrics.ranker import ScoringWeights
from lyrics_resolver.lyrics.resolver import LyricsResolver


ENV_VARS = [
    'LYRICS_RESOLVER_BASE_URL',
    'LYRICS_RESOLVER_USER_AGENT',
    'LYRICS_RESOLVER_CACHE_CAPACITY',
    'LYRICS_RESOLVER_LOG_LEVEL',
]

SAMPLE_LRC = """[ar:The Weeknd]
[ti:Blinding Lights]
[00:27.12]Yeah
[00:43.50]I've been tryna call
[00:47.80]I've been on my own for long enough
"""

SAMPLE_PLAIN = """Yeah
I've been tryna call
I've been on my own for long enough"""


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep user config files and environment overrides out of every test"""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))
    monkeypatch.chdir(tmp_path)
    settings_module._settings = None
    yield
    settings_module._settings = None


def make_record(
    track_name="Blinding Lights",
    artist_name="The Weeknd",
    duration=200.0,
    plain=SAMPLE_PLAIN,
    synced=None,
    instrumental=False
):
    """Build an ExternalLyricsRecord with sensible defaults"""
    return ExternalLyricsRecord(
        track_name=track_name,
        artist_name=artist_name,
        duration_seconds=duration,
        plain_lyrics=plain,
        synced_lyrics=synced,
        instrumental=instrumental
    )


class FakeLyricsClient:
    """In-memory stand-in for LrclibClient that records every call"""

    def __init__(self, exact=None, search=None):
        # (title, artist, duration_seconds) -> record
        self.exact = exact or {}
        # query -> list of records
        self.search_results = search or {}
        self.exact_calls = []
        self.search_calls = []
        self.closed = False
        self._lock = threading.Lock()

    def get_exact(self, title, artist, duration_seconds=None):
        with self._lock:
            self.exact_calls.append((title, artist, duration_seconds))
        return self.exact.get((title, artist, duration_seconds))

    def search(self, query):
        with self._lock:
            self.search_calls.append(query)
        return list(self.search_results.get(query, []))

    @property
    def call_count(self):
        return len(self.exact_calls) + len(self.search_calls)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    """Empty fake client, tests fill in the responses"""
    return FakeLyricsClient()


@pytest.fixture
def make_resolver():
    """Factory for resolvers wired to a fake client, closed after the test"""
    resolvers = []

    def factory(client, capacity=10):
        resolver = LyricsResolver(
            client=client,
            cache=LyricsCache(capacity),
            weights=ScoringWeights(),
            max_workers=2,
            source_name="lrclib"
        )
        resolvers.append(resolver)
        return resolver

    yield factory

    for resolver in resolvers:
        resolver.close()
