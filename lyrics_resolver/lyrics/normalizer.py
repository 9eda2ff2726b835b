"""
Title and artist normalization for noisy video metadata

Titles taken from video-sharing sites rarely match what a lyrics database
stores. The same recording shows up as "Song (Official Video)",
"Artist - Song | Movie Name | 4K", "Song ft. Other [Lyrical]" and so on.
This module strips that presentation noise without touching the actual
song name, and offers two more aggressive extractors that are only used to
widen the search net:

- clean_title / clean_artist: conservative cleanup, safe to use as exact-match keys
- extract_core_song_name: best-effort reduction to the bare song name
- extract_artist_from_title: detects "Artist - Song" titles
- remove_featuring: drops a "feat./ft." clause

All functions are pure, never raise on malformed input and return the input
(with whitespace collapsed) when no rule applies.
"""

import re
from typing import Optional, Tuple

from ..utils.helpers import collapse_whitespace, count_words


# Bracketed annotation vocabulary (matched case-insensitively, whole bracket content)
_ANNOTATION_TERMS = [
    r'official\s*(?:music\s*video|lyric\s*video|video|audio|visuali[sz]er|lyrics?|mv|m/v)',
    r'official',
    r'(?:lyric|lyrics|lyrical)\s*video',
    r'lyrics?',
    r'lyrical',
    r'audio',
    r'video',
    r'visuali[sz]er',
    r'mv',
    r'm/v',
    r'full\s*(?:video\s*song|audio\s*song|song|video|audio)',
    r'video\s*song',
    r'(?:full\s*)?hd',
    r'hq',
    r'[48]k(?:\s*(?:video|uhd))?',
    r'\d{3,4}\s*p(?:\s*hd)?',
    r'(?:original\s*)?motion\s*picture\s*soundtrack',
    r'from\s+["\'“‘].*?',
]

_ANNOTATION_RE = re.compile(
    r'\s*[\(\[]\s*(?:' + '|'.join(_ANNOTATION_TERMS) + r')\s*[\)\]]\s*',
    re.IGNORECASE
)

_FEATURING_RE = re.compile(r'\s*\b(?:featuring|feat|ft)\b\.?\s*', re.IGNORECASE)
_PIPE_SUFFIX_RE = re.compile(r'\s*\|.*$', re.DOTALL)
_OFFICIAL_SUFFIX_RE = re.compile(r'\s+[-–—]\s*official\b.*$', re.IGNORECASE)
_OPEN_BRACKET_SPACE_RE = re.compile(r'([\(\[])\s+')
_CLOSE_BRACKET_SPACE_RE = re.compile(r'\s+([\)\]])')
_TRAILING_SEPARATORS_RE = re.compile(r'[\s\-–—:|,]+$')

# Artist/channel suffixes, stripped repeatedly until none applies
_ARTIST_SUFFIX_RES = [
    re.compile(r'\s*-\s*topic$', re.IGNORECASE),
    re.compile(r'\s*vevo$', re.IGNORECASE),
    re.compile(r'\s+official(?:\s+channel)?$', re.IGNORECASE),
    re.compile(r'\s+music(?:\s+channel)?$', re.IGNORECASE),
]

# Segment noise for the core-name extractor
_SEGMENT_NOISE_RE = re.compile(
    r'\b(?:official|full\s+video|video\s+song|lyric\w*|audio|hd|4k|movie|film|soundtrack)\b',
    re.IGNORECASE
)
_SUFFIX_NOISE_RE = re.compile(r'\b(?:official|video|audio|full\s+song)\b', re.IGNORECASE)

_REMOVE_FEAT_BRACKET_RE = re.compile(
    r'\s*[\(\[]\s*(?:featuring|feat|ft)\b.*?[\)\]]', re.IGNORECASE
)
_REMOVE_FEAT_TAIL_RE = re.compile(r'\s+(?:featuring|feat|ft)\b\.?(?:\s.*)?$', re.IGNORECASE)

# Separators between an embedded artist and the song name, tried in order
ARTIST_SEPARATORS = (' - ', ' – ', ' — ', ': ')


def strip_annotations(text: str) -> str:
    """
    Remove bracketed annotation tags such as "(Official Video)" or "[4K]"

    Args:
        text: Raw title text

    Returns:
        Text without annotation tags, whitespace collapsed
    """
    if not text:
        return ""
    previous = None
    result = text
    # Removing one tag can bring two others next to each other
    while result != previous:
        previous = result
        result = _ANNOTATION_RE.sub(' ', result)
    return collapse_whitespace(result)


def normalize_featuring(text: str) -> str:
    """Rewrite ft/ft./feat/featuring variants to the canonical " feat. " token"""
    result = _FEATURING_RE.sub(' feat. ', text)
    result = _OPEN_BRACKET_SPACE_RE.sub(r'\1', result)
    result = _CLOSE_BRACKET_SPACE_RE.sub(r'\1', result)
    return collapse_whitespace(result)


def _clean_title_once(title: str) -> str:
    result = strip_annotations(title)
    result = _PIPE_SUFFIX_RE.sub('', result)
    result = _OFFICIAL_SUFFIX_RE.sub('', result)
    result = normalize_featuring(result)
    result = _TRAILING_SEPARATORS_RE.sub('', result)
    return collapse_whitespace(result)


def clean_title(title: str) -> str:
    """
    Clean a song title by removing common video-site presentation noise

    Rules:
    - Bracketed annotation tags (Official Video/Audio, Lyric Video, Visualizer,
      HD/4K/1080p, (From "Movie"), soundtrack and full song/video tags)
    - Everything after a pipe and after a trailing "- Official ..." suffix
    - ft./feat. variants normalized to " feat. "
    - Whitespace collapsed

    Args:
        title: Raw title

    Returns:
        Cleaned title. clean_title(clean_title(x)) == clean_title(x)

    Example:
        clean_title("Tum Hi Ho (Official Video) | Aashiqui 2") == "Tum Hi Ho"
    """
    if not title:
        return ""
    result = collapse_whitespace(title)
    # Iterate to a fixed point so the cleaner is idempotent
    for _ in range(5):
        cleaned = _clean_title_once(result)
        if cleaned == result:
            break
        result = cleaned
    return result


def clean_artist(artist: str) -> str:
    """
    Clean an artist or channel name

    Applies the title annotation and featuring rules, then strips channel
    suffixes: "- Topic", "VEVO", "Official", "Official Channel", "Music",
    "Music Channel". A suffix is never stripped if nothing would remain.

    Args:
        artist: Raw artist/channel name

    Returns:
        Cleaned artist name

    Example:
        clean_artist("Arijit Singh - Topic") == "Arijit Singh"
    """
    if not artist:
        return ""
    result = normalize_featuring(strip_annotations(artist))

    changed = True
    while changed:
        changed = False
        for pattern in _ARTIST_SUFFIX_RES:
            stripped = pattern.sub('', result).strip()
            if stripped and stripped != result:
                result = stripped
                changed = True

    return collapse_whitespace(result)


def extract_core_song_name(title: str) -> str:
    """
    Aggressively reduce a title to the probable song name

    This is heuristic and best-effort. Its output is only used for looser
    fallback queries, never as ground truth.

    Algorithm:
    1. Split on "|". With several segments, drop segments containing noise
       terms (official, full video, video song, lyric, audio, hd, 4k, movie,
       film, soundtrack) once their bracketed tags are removed, and keep the
       first survivor.
    2. Split on " - ". With exactly two parts keep part 1 if part 2 carries
       suffix noise (official/video/audio/full song). Otherwise assume
       "Artist - Song" when part 1 has at most 2 words and part 2 at least 2,
       else keep part 1.
    3. Apply clean_title to the result.

    Args:
        title: Raw title

    Returns:
        Probable song name (may equal clean_title(title))

    Example:
        extract_core_song_name("Arijit Singh - Tum Hi Ho (Official Video) | Aashiqui 2") == "Tum Hi Ho"
    """
    if not title:
        return ""

    working = title
    segments = [segment.strip() for segment in title.split('|') if segment.strip()]
    if len(segments) > 1:
        survivors = [
            stripped for stripped in (strip_annotations(segment) for segment in segments)
            if stripped and not _SEGMENT_NOISE_RE.search(stripped)
        ]
        if survivors:
            working = survivors[0]
    working = strip_annotations(working)

    parts = working.split(' - ')
    if len(parts) == 2:
        first, second = parts[0].strip(), parts[1].strip()
        if _SUFFIX_NOISE_RE.search(second):
            working = first
        elif count_words(first) <= 2 and count_words(second) >= 2:
            working = second
        else:
            working = first

    return clean_title(working)


def extract_artist_from_title(title: str) -> Optional[Tuple[str, str]]:
    """
    Detect an artist name embedded at the start of a title

    Separators are tried in order: " - ", " – ", " — ", ": ". The first one
    that splits the title into exactly two non-empty parts, where the first
    part has at most 4 words and the cleaned second part is not blank, wins.

    Args:
        title: Raw title

    Returns:
        (artist, song) tuple or None when no separator qualifies

    Example:
        extract_artist_from_title("Arijit Singh - Tum Hi Ho") == ("Arijit Singh", "Tum Hi Ho")
    """
    if not title:
        return None

    for separator in ARTIST_SEPARATORS:
        if separator not in title:
            continue
        parts = title.split(separator)
        if len(parts) != 2:
            continue
        artist = collapse_whitespace(parts[0])
        remainder = parts[1].strip()
        if not artist or not remainder or count_words(artist) > 4:
            continue
        song = clean_title(remainder)
        if song:
            return artist, song

    return None


def remove_featuring(title: str) -> str:
    """
    Drop a "feat./ft." clause from a title

    Handles both bracketed "(feat. X)" and trailing "feat. X" forms.

    Args:
        title: Title (usually already cleaned)

    Returns:
        Title without the featuring clause
    """
    if not title:
        return ""
    result = _REMOVE_FEAT_BRACKET_RE.sub('', title)
    result = _REMOVE_FEAT_TAIL_RE.sub('', result)
    return collapse_whitespace(result)
