# lyrics_resolver/lyrics/__init__.py
"""
Lyrics resolution engine package

Key components:
- LyricsResolver: Coordinates cache, search variations, lookups and ranking
- LrclibClient: HTTP client for the LRCLIB lookup service
- LyricsCache: Thread-safe LRU cache of resolved results
- Normalizer, variation generator, ranker and LRC parser as plain functions

Usage:
Typically accessed through the resolver:
    resolver = get_lyrics_resolver()
    result = resolver.resolve(title, artist, duration_ms=duration)

Or the building blocks can be used directly:
    variations = generate_search_variations(title, artist)
    lines = parse_synced_lyrics(lrc_text)
"""

# Main resolver - primary interface for lyrics resolution
from .resolver import LyricsResolver, get_lyrics_resolver, reset_lyrics_resolver

# Lookup service client and result cache
from .lrclib import LrclibClient
from .cache import LyricsCache

# Value objects
from .models import (
    LyricsQuery,
    SearchStrategy,
    SearchVariation,
    ExternalLyricsRecord,
    LyricLine,
    LyricsResult,
    make_cache_key
)

# Pure building blocks
from .normalizer import (
    clean_title,
    clean_artist,
    extract_core_song_name,
    extract_artist_from_title,
    remove_featuring
)
from .variations import generate_search_variations
from .ranker import ScoringWeights, rank_candidates, score_candidate, select_best_candidate
from .lrc import parse_synced_lyrics, strip_timestamps, has_synced_content, build_lyrics_result

__all__ = [
    # Resolver
    'LyricsResolver',
    'get_lyrics_resolver',
    'reset_lyrics_resolver',

    # Infrastructure
    'LrclibClient',
    'LyricsCache',

    # Models
    'LyricsQuery',
    'SearchStrategy',
    'SearchVariation',
    'ExternalLyricsRecord',
    'LyricLine',
    'LyricsResult',
    'make_cache_key',

    # Normalization and search
    'clean_title',
    'clean_artist',
    'extract_core_song_name',
    'extract_artist_from_title',
    'remove_featuring',
    'generate_search_variations',

    # Ranking and parsing
    'ScoringWeights',
    'score_candidate',
    'rank_candidates',
    'select_best_candidate',
    'parse_synced_lyrics',
    'strip_timestamps',
    'has_synced_content',
    'build_lyrics_result'
]
