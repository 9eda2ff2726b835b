"""
Lyrics resolution engine

LyricsResolver is the entry point of the package. A resolution runs:

1. Cache lookup (returns immediately on hit)
2. Search variation generation from the noisy title/artist
3. Sequential execution of the variations against the lookup service
   until one yields displayable lyrics
4. Result construction (plain text plus optional synced lines)
5. Cache write

Individual variations failing is normal and only logged at DEBUG. The one
terminal failure, every variation exhausted, is raised as LyricsNotFoundError.

Concurrent resolutions of the same uncached key are not coalesced: both may
hit the network, and the later put simply replaces the earlier entry.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Set

from .cache import LyricsCache
from .lrc import build_lyrics_result
from .lrclib import LrclibClient
from .models import LyricsQuery, LyricsResult, SearchStrategy, SearchVariation, make_cache_key
from .ranker import ScoringWeights, rank_candidates
from .variations import generate_search_variations
from ..config.settings import get_settings
from ..exceptions import LyricsNotFoundError
from ..utils.logger import get_logger, log_performance


class LyricsResolver:
    """Resolves lyrics for noisy title/artist pairs with caching and fallback searches"""

    def __init__(
        self,
        client: Optional[LrclibClient] = None,
        cache: Optional[LyricsCache] = None,
        weights: Optional[ScoringWeights] = None,
        max_workers: Optional[int] = None,
        source_name: Optional[str] = None
    ):
        """
        Initialize resolver

        Args:
            client: Lookup client (created from settings when omitted)
            cache: Result cache (created with the configured capacity when omitted)
            weights: Candidate scoring weights (taken from settings when omitted)
            max_workers: Thread pool size for resolve_async/prefetch
            source_name: Source label stored on results
        """
        self.settings = get_settings()
        self.logger = get_logger(__name__)

        self._owns_client = client is None
        self.client = client or LrclibClient()
        self.cache = cache if cache is not None else LyricsCache(self.settings.lyrics.cache_capacity)
        self.weights = weights or ScoringWeights.from_settings()
        self.source_name = source_name or self.settings.lyrics.source_name

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or self.settings.lyrics.max_workers,
            thread_name_prefix="lyrics-resolver"
        )
        self._closed = False

    @log_performance
    def resolve(
        self,
        title: str,
        artist: str,
        duration_ms: Optional[int] = None,
        track_id: Optional[str] = None
    ) -> LyricsResult:
        """
        Resolve lyrics synchronously

        Blocks on network I/O; call from a worker thread or use resolve_async().

        Args:
            title: Raw title (e.g. video title)
            artist: Raw artist or channel name
            duration_ms: Approximate duration in milliseconds
            track_id: Caller identifier, used as cache key when given

        Returns:
            LyricsResult with displayable content

        Raises:
            LyricsNotFoundError: If no search variation produced lyrics
        """
        query = LyricsQuery(title=title or "", artist=artist or "", duration_ms=duration_ms, track_id=track_id)
        return self._resolve(query, logging.INFO)

    def _resolve(self, query: LyricsQuery, outcome_level: int) -> LyricsResult:
        """Run the resolution pipeline, logging the final outcome at outcome_level"""
        cached = self.cache.get(query.cache_key)
        if cached is not None:
            self.logger.debug(f"Cache hit for '{query.cache_key}'")
            return cached

        variations = generate_search_variations(query.title, query.artist)
        duration_seconds = query.duration_seconds
        target_duration = query.target_duration
        failed_queries: Set[str] = set()
        attempted = 0

        for variation in variations:
            # Same free-text query already failed for an earlier variation
            if variation.strategy.is_fuzzy and variation.search_query in failed_queries:
                self.logger.debug(f"Skipping {variation}: query already failed")
                continue

            attempted += 1
            result = self._execute_variation(variation, duration_seconds, target_duration)
            if result is not None:
                self.logger.log(
                    outcome_level,
                    f"Lyrics found for '{query.artist} - {query.title}' via {variation} "
                    f"({'synced' if result.is_synced else 'plain'})"
                )
                self.cache.put(query.cache_key, result)
                return result

            if variation.strategy.is_fuzzy:
                failed_queries.add(variation.search_query)

        self.logger.log(
            outcome_level,
            f"No lyrics found for '{query.artist} - {query.title}' "
            f"after {attempted} of {len(variations)} search variations"
        )
        raise LyricsNotFoundError(query.title, query.artist, variations_tried=attempted)

    def _execute_variation(self, variation: SearchVariation, duration_seconds: Optional[int],
                           target_duration: Optional[float] = None) -> Optional[LyricsResult]:
        """
        Run one search variation

        Search candidates are tried in ranking order until one builds a
        displayable result.

        Args:
            variation: Variation to execute
            duration_seconds: Target duration in whole seconds for the exact endpoint
            target_duration: Unrounded target duration in seconds for ranking

        Returns:
            LyricsResult or None when the strategy failed
        """
        if variation.strategy is SearchStrategy.EXACT_MATCH:
            result = None
            if duration_seconds:
                result = self._exact_lookup(variation, duration_seconds)
            if result is None:
                result = self._exact_lookup(variation, None)
            return result

        candidates = self.client.search(variation.search_query)
        if not candidates:
            self.logger.debug(f"{variation} failed: no candidates")
            return None

        ranked = rank_candidates(candidates, target_duration, self.weights)
        for candidate in ranked:
            result = build_lyrics_result(candidate, self.source_name)
            if result is not None:
                return result
            self.logger.debug(
                f"{variation}: candidate '{candidate.artist_name} - {candidate.track_name}' "
                f"has no displayable content"
            )

        self.logger.debug(f"{variation} failed: {len(candidates)} candidates, none usable")
        return None

    def _exact_lookup(self, variation: SearchVariation,
                      duration_seconds: Optional[int]) -> Optional[LyricsResult]:
        record = self.client.get_exact(variation.query_title, variation.query_artist, duration_seconds)
        with_duration = f" with duration {duration_seconds}s" if duration_seconds else ""

        if record is None:
            self.logger.debug(f"{variation}{with_duration} failed: no record")
            return None
        if not record.is_usable:
            reason = "instrumental" if record.instrumental else "no lyrics"
            self.logger.debug(f"{variation}{with_duration} failed: {reason}")
            return None

        result = build_lyrics_result(record, self.source_name)
        if result is None:
            self.logger.debug(f"{variation}{with_duration} failed: no displayable content")
        return result

    def resolve_async(
        self,
        title: str,
        artist: str,
        duration_ms: Optional[int] = None,
        track_id: Optional[str] = None
    ) -> "Future[LyricsResult]":
        """
        Resolve lyrics on the resolver's worker pool

        Returns:
            Future completing with a LyricsResult or with LyricsNotFoundError
        """
        return self._executor.submit(self.resolve, title, artist, duration_ms, track_id)

    def prefetch(
        self,
        title: str,
        artist: str,
        duration_ms: Optional[int] = None,
        track_id: Optional[str] = None
    ) -> None:
        """
        Warm the cache for a track that is likely to be requested soon

        Fire and forget: the outcome is discarded, failures are only logged at
        DEBUG and never written to the cache.
        """
        if self._closed:
            self.logger.debug(f"Prefetch ignored for '{artist} - {title}': resolver closed")
            return
        if self.cache.contains(make_cache_key(title or "", artist or "", track_id)):
            return
        try:
            self._executor.submit(self._prefetch_task, title, artist, duration_ms, track_id)
        except RuntimeError as e:
            # close() won the race after the _closed check
            self.logger.debug(f"Prefetch ignored for '{artist} - {title}': {e}")

    def _prefetch_task(self, title: str, artist: str,
                       duration_ms: Optional[int], track_id: Optional[str]) -> None:
        try:
            query = LyricsQuery(title=title or "", artist=artist or "", duration_ms=duration_ms, track_id=track_id)
            self._resolve(query, logging.DEBUG)
        except Exception as e:
            self.logger.debug(f"Prefetch failed for '{artist} - {title}': {e}")

    def is_cached(self, track_id: str) -> bool:
        """Check whether a result is cached under a key, without touching recency"""
        return self.cache.contains(track_id)

    def get_cached(self, track_id: str) -> Optional[LyricsResult]:
        """Get a cached result without resolving"""
        return self.cache.get(track_id)

    def close(self) -> None:
        """Shut down the worker pool and the HTTP session"""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "LyricsResolver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Global resolver instance
_lyrics_resolver: Optional[LyricsResolver] = None


def get_lyrics_resolver() -> LyricsResolver:
    """Get global lyrics resolver instance"""
    global _lyrics_resolver
    if not _lyrics_resolver:
        _lyrics_resolver = LyricsResolver()
    return _lyrics_resolver


def reset_lyrics_resolver() -> None:
    """Close and reset global lyrics resolver instance"""
    global _lyrics_resolver
    if _lyrics_resolver:
        _lyrics_resolver.close()
    _lyrics_resolver = None
