"""
Data models for the lyrics resolution engine

This module contains the value objects passed between the components of the
engine. All of them are immutable dataclasses:

- LyricsQuery: What the caller asked for (noisy title/artist + duration/track id)
- SearchStrategy / SearchVariation: One prioritized query to run against the service
- ExternalLyricsRecord: One candidate as returned by the lookup service
- LyricLine: One time-synchronized lyric line
- LyricsResult: The resolved, cacheable artifact handed back to the caller

Only LyricsResult outlives a single resolve() call (it is stored in the cache).
"""

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..utils.helpers import has_non_blank_line, is_blank


class SearchStrategy(Enum):
    """
    How a SearchVariation is executed against the lookup service

    Values:
        EXACT_MATCH: Direct lookup keyed by title, artist and duration
        FUZZY_SEARCH: Free-text search with title and artist combined
        FUZZY_SEARCH_TITLE_ONLY: Free-text search with the title alone
    """
    EXACT_MATCH = "exact_match"
    FUZZY_SEARCH = "fuzzy_search"
    FUZZY_SEARCH_TITLE_ONLY = "fuzzy_search_title_only"

    @property
    def is_fuzzy(self) -> bool:
        """True for the two search-endpoint strategies"""
        return self is not SearchStrategy.EXACT_MATCH


@dataclass(frozen=True)
class LyricsQuery:
    """
    Lyrics request as supplied by the caller

    Attributes:
        title: Raw title, usually straight from video metadata
        artist: Raw artist or channel name
        duration_ms: Approximate track duration in milliseconds (optional)
        track_id: Opaque caller identifier used as cache key when present
    """
    title: str
    artist: str
    duration_ms: Optional[int] = None
    track_id: Optional[str] = None

    @property
    def cache_key(self) -> str:
        """Cache key: track id if given, else the literal unnormalized "title|artist" pair"""
        return make_cache_key(self.title, self.artist, self.track_id)

    @property
    def duration_seconds(self) -> Optional[int]:
        """Duration rounded to whole seconds, None when unknown"""
        if self.duration_ms is None or self.duration_ms <= 0:
            return None
        return int(round(self.duration_ms / 1000))

    @property
    def target_duration(self) -> Optional[float]:
        """Unrounded duration in seconds for candidate ranking, None when unknown"""
        if self.duration_ms is None or self.duration_ms <= 0:
            return None
        return self.duration_ms / 1000


def make_cache_key(title: str, artist: str, track_id: Optional[str] = None) -> str:
    """
    Build the cache key for a request

    Args:
        title: Title exactly as supplied by the caller
        artist: Artist exactly as supplied by the caller
        track_id: Optional caller track identifier

    Returns:
        track_id when provided, otherwise "title|artist"
    """
    if track_id:
        return track_id
    return f"{title}|{artist}"


@dataclass(frozen=True)
class SearchVariation:
    """
    One candidate query for the lookup service

    Variations are generated fresh per request in priority order and are
    compared by the full (query_title, query_artist, strategy) triple for
    deduplication.

    Attributes:
        query_title: Title to send
        query_artist: Artist to send (may be empty)
        strategy: Which endpoint and parameter shape to use
    """
    query_title: str
    query_artist: str
    strategy: SearchStrategy

    @property
    def search_query(self) -> str:
        """Free-text query string for the fuzzy-search endpoint"""
        if self.strategy is SearchStrategy.FUZZY_SEARCH_TITLE_ONLY or not self.query_artist:
            return self.query_title
        return f"{self.query_title} {self.query_artist}"

    def __str__(self) -> str:
        if self.strategy is SearchStrategy.FUZZY_SEARCH_TITLE_ONLY:
            return f"{self.strategy.value}: {self.query_title!r}"
        return f"{self.strategy.value}: {self.query_title!r} / {self.query_artist!r}"


def _clean_field(value: Any) -> Optional[str]:
    """
    Normalize a textual field from the service response

    Some client JSON decoders report missing values as the literal string
    "null"; those, empty and whitespace-only strings all become None.
    """
    if value is None or not isinstance(value, str):
        return None
    if value.strip().lower() == "null" or is_blank(value):
        return None
    return value


def _to_float(value: Any) -> float:
    """Coerce a numeric field, falling back to 0.0"""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


@dataclass(frozen=True)
class ExternalLyricsRecord:
    """
    Single candidate returned by the lyrics lookup service

    Attributes:
        track_name: Track name as stored by the service
        artist_name: Artist name as stored by the service
        duration_seconds: Track duration (0.0 when absent)
        plain_lyrics: Plain text lyrics or None
        synced_lyrics: Raw LRC text or None
        instrumental: Service flags the track as instrumental
    """
    track_name: str
    artist_name: str
    duration_seconds: float = 0.0
    plain_lyrics: Optional[str] = None
    synced_lyrics: Optional[str] = None
    instrumental: bool = False

    @classmethod
    def from_api_data(cls, data: Dict[str, Any]) -> "ExternalLyricsRecord":
        """
        Create a record from a service JSON object

        Args:
            data: One JSON object from the exact-match or search endpoint

        Returns:
            ExternalLyricsRecord with absent/"null"/blank fields mapped to None
        """
        return cls(
            track_name=_clean_field(data.get('trackName')) or "",
            artist_name=_clean_field(data.get('artistName')) or "",
            duration_seconds=_to_float(data.get('duration')),
            plain_lyrics=_clean_field(data.get('plainLyrics')),
            synced_lyrics=_clean_field(data.get('syncedLyrics')),
            instrumental=data.get('instrumental') is True,
        )

    @property
    def has_synced(self) -> bool:
        return not is_blank(self.synced_lyrics)

    @property
    def has_plain(self) -> bool:
        return not is_blank(self.plain_lyrics)

    @property
    def has_lyrics(self) -> bool:
        """At least one of the two lyric fields carries text"""
        return self.has_plain or self.has_synced

    @property
    def is_usable(self) -> bool:
        """Candidate may be considered at all: not instrumental and has lyrics"""
        return not self.instrumental and self.has_lyrics


@dataclass(frozen=True)
class LyricLine:
    """
    One time-synchronized lyric line

    Attributes:
        timestamp_ms: Offset from track start in milliseconds (non-negative)
        text: Line text, empty for instrumental breaks
    """
    timestamp_ms: int
    text: str


@dataclass(frozen=True)
class LyricsResult:
    """
    Resolved lyrics for one song

    Created once per successful resolution and stored in the cache.

    Attributes:
        plain_text: Plain lyrics text
        synced_lines: Time-ordered lines, None when no synced lyrics were available
        source: Name of the lookup service that supplied the lyrics
    """
    plain_text: str
    synced_lines: Optional[Tuple[LyricLine, ...]] = None
    source: str = ""

    @property
    def is_synced(self) -> bool:
        return bool(self.synced_lines)

    def has_displayable_content(self) -> bool:
        """True if plain text or synced lines contain at least one non-blank line"""
        if has_non_blank_line(self.plain_text):
            return True
        if self.synced_lines:
            return any(not is_blank(line.text) for line in self.synced_lines)
        return False

    def get_preview(self, line_count: int = 5) -> str:
        """
        Get preview text (first few non-blank lines)

        Args:
            line_count: Maximum number of lines to include

        Returns:
            Newline-joined preview
        """
        lines = [line for line in self.plain_text.splitlines() if line.strip()]
        return "\n".join(lines[:max(0, line_count)])

    def line_index_at(self, position_ms: int) -> int:
        """
        Find the synced line active at a playback position

        Args:
            position_ms: Playback position in milliseconds

        Returns:
            Index into synced_lines, or -1 before the first line / without synced lyrics
        """
        if not self.synced_lines:
            return -1
        timestamps = [line.timestamp_ms for line in self.synced_lines]
        return bisect_right(timestamps, position_ms) - 1
