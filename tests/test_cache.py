# tests/test_cache.py
"""Test the LRU lyrics cache"""

import threading

import pytest

from lyrics_resolver.lyrics.cache import LyricsCache
from lyrics_resolver.lyrics.models import LyricsResult, make_cache_key


def result(text="Some lyrics"):
    return LyricsResult(plain_text=text, source="lrclib")


class TestLyricsCache:
    """Test cache semantics"""

    def test_put_and_get(self):
        """Test basic storage"""
        cache = LyricsCache(capacity=2)
        stored = result()
        cache.put("a", stored)

        assert cache.get("a") is stored
        assert cache.get("missing") is None
        assert len(cache) == 1

    def test_lru_eviction(self):
        """Test the least recently used entry is evicted"""
        cache = LyricsCache(capacity=2)
        cache.put("a", result())
        cache.put("b", result())
        cache.put("c", result())

        assert not cache.contains("a")
        assert cache.keys() == ["b", "c"]

    def test_get_refreshes_recency(self):
        """Test an entry read with get() survives the next eviction"""
        cache = LyricsCache(capacity=2)
        cache.put("a", result())
        cache.put("b", result())
        cache.get("a")
        cache.put("c", result())

        assert cache.contains("a")
        assert cache.contains("c")
        assert not cache.contains("b")

    def test_peek_and_contains_do_not_refresh(self):
        """Test side-effect free reads"""
        cache = LyricsCache(capacity=2)
        cache.put("a", result())
        cache.put("b", result())

        assert cache.peek("a") is not None
        assert "a" in cache
        cache.put("c", result())

        assert not cache.contains("a")

    def test_put_replaces_and_refreshes(self):
        """Test writing an existing key"""
        cache = LyricsCache(capacity=2)
        cache.put("a", result("old"))
        cache.put("b", result())
        cache.put("a", result("new"))
        cache.put("c", result())

        assert cache.peek("a").plain_text == "new"
        assert cache.keys() == ["a", "c"]

    def test_rejects_non_displayable(self):
        """Test blank results are never cached"""
        cache = LyricsCache()
        with pytest.raises(ValueError):
            cache.put("a", LyricsResult(plain_text="  \n  "))
        assert len(cache) == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            LyricsCache(capacity=0)

    def test_clear(self):
        cache = LyricsCache()
        cache.put("a", result())
        cache.clear()
        assert len(cache) == 0
        assert cache.keys() == []

    def test_concurrent_puts(self):
        """Test capacity holds under concurrent writers"""
        cache = LyricsCache(capacity=50)

        def writer(thread_index):
            for item in range(100):
                key = f"{thread_index}-{item}"
                cache.put(key, result())
                cache.get(key)

        threads = [threading.Thread(target=writer, args=(index,)) for index in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 50
        assert len(set(cache.keys())) == 50


class TestCacheKey:
    """Test cache key construction"""

    def test_track_id_wins(self):
        assert make_cache_key("Title", "Artist", "abc123") == "abc123"

    def test_raw_title_artist(self):
        """Test the unnormalized pair is used as-is"""
        assert make_cache_key("Tum Hi Ho (Official Video)", "T-Series") == "Tum Hi Ho (Official Video)|T-Series"
