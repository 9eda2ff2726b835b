"""
Search variation generator
Turns one noisy title/artist pair into an ordered list of lookup attempts
"""

from typing import List, Set, Tuple

from .models import SearchStrategy, SearchVariation
from .normalizer import (
    clean_artist,
    clean_title,
    extract_artist_from_title,
    extract_core_song_name,
    remove_featuring,
)
from ..utils.helpers import collapse_whitespace, is_blank
from ..utils.logger import get_logger


logger = get_logger(__name__)


class _VariationList:
    """Ordered, deduplicated collector for variations"""

    def __init__(self):
        self.items: List[SearchVariation] = []
        self._seen: Set[Tuple[str, str, SearchStrategy]] = set()

    def add(self, query_title: str, query_artist: str, strategy: SearchStrategy) -> None:
        if is_blank(query_title):
            return
        if strategy is SearchStrategy.EXACT_MATCH and is_blank(query_artist):
            # Exact endpoint requires an artist name
            return

        key = (query_title, query_artist, strategy)
        if key in self._seen:
            return
        self._seen.add(key)
        self.items.append(SearchVariation(query_title, query_artist, strategy))


def generate_search_variations(title: str, artist: str) -> List[SearchVariation]:
    """
    Generate prioritized search variations for a lyrics request

    Order (duplicates by title/artist/strategy dropped, first wins):
    1. Exact match with cleaned title and artist
    2. Fuzzy search with cleaned title and artist
    3. Fuzzy search with the core song name, if it differs from the cleaned title
    4. Title-only fuzzy search with the cleaned title
    5. Fuzzy search then exact match with an artist embedded in the title
    6. Title-only fuzzy search with the core song name, if different
    7. Title-only fuzzy search with the raw title, if different
    8. Fuzzy search with the featuring clause removed, if different

    Args:
        title: Raw title as supplied by the caller
        artist: Raw artist as supplied by the caller

    Returns:
        List of SearchVariation in the order they should be tried
    """
    title = title or ""
    artist = artist or ""

    cleaned_title = clean_title(title)
    cleaned_artist = clean_artist(artist)
    core_name = extract_core_song_name(title)
    embedded = extract_artist_from_title(title)
    raw_title = collapse_whitespace(title)
    without_featuring = remove_featuring(cleaned_title)

    variations = _VariationList()

    variations.add(cleaned_title, cleaned_artist, SearchStrategy.EXACT_MATCH)
    variations.add(cleaned_title, cleaned_artist, SearchStrategy.FUZZY_SEARCH)

    if core_name != cleaned_title:
        variations.add(core_name, cleaned_artist, SearchStrategy.FUZZY_SEARCH)

    variations.add(cleaned_title, "", SearchStrategy.FUZZY_SEARCH_TITLE_ONLY)

    if embedded:
        embedded_artist, embedded_song = embedded
        variations.add(embedded_song, embedded_artist, SearchStrategy.FUZZY_SEARCH)
        variations.add(embedded_song, embedded_artist, SearchStrategy.EXACT_MATCH)

    if core_name != cleaned_title:
        variations.add(core_name, "", SearchStrategy.FUZZY_SEARCH_TITLE_ONLY)

    if raw_title != cleaned_title:
        variations.add(raw_title, "", SearchStrategy.FUZZY_SEARCH_TITLE_ONLY)

    if without_featuring != cleaned_title:
        variations.add(without_featuring, cleaned_artist, SearchStrategy.FUZZY_SEARCH)

    logger.debug(f"Generated {len(variations.items)} search variations for '{title}' / '{artist}'")
    return variations.items
