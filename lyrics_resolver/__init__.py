"""
Lyrics-Resolver: Find lyrics for tracks known only by noisy video metadata

Video-site titles and channel names make poor lyrics lookup keys:
"Arijit Singh - Tum Hi Ho (Official Video) | Aashiqui 2" uploaded by
"T-Series" is, for a lyrics database, the song "Tum Hi Ho" by "Arijit Singh".
Lyrics-Resolver bridges that gap with a small resolution engine.

## Core Architecture

**Configuration Management (`lyrics_resolver/config/`)**
- Dataclass settings loaded from YAML with environment variable overrides
- Scoring weights, cache size, worker pool and network timeouts

**Lyrics Engine (`lyrics_resolver/lyrics/`)**
- normalizer: conservative title/artist cleanup and aggressive core-name extraction
- variations: ordered, deduplicated fallback queries
- lrclib: LRCLIB HTTP client that turns every failure into "no result"
- ranker: candidate scoring (synced lyrics, duration, length, script)
- lrc: synchronized lyrics parsing
- cache: thread-safe LRU cache of resolved results
- resolver: LyricsResolver, the public entry point (sync, async and prefetch)

**Utilities (`lyrics_resolver/utils/`)**
- Colored console and rotating file logging
- Text and time formatting helpers

## Usage

    from lyrics_resolver.lyrics import LyricsResolver

    with LyricsResolver() as resolver:
        result = resolver.resolve("Tum Hi Ho (Official Video)", "T-Series", duration_ms=262000)
        print(result.get_preview())

The `lyrics-resolver` command line tool exposes the same engine.
"""

# Version information for the Lyrics-Resolver package
__version__ = "0.3.0"

# Concise description of package functionality for package managers
__description__ = "Resolve song lyrics from noisy video titles using LRCLIB"

__all__ = [
    "__version__",
    "__description__"
]
