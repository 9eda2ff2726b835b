"""
LRC (synchronized lyrics) parsing
Turns raw LRC text into ordered LyricLine entries and builds LyricsResult objects
"""

import re
from typing import List, Optional

from .models import ExternalLyricsRecord, LyricLine, LyricsResult
from ..utils.helpers import collapse_whitespace, is_blank


# [mm:ss] or [mm:ss.xx] / [mm:ss.xxx]; fraction digits optional
TIMESTAMP_PATTERN = r'\[(\d{1,3}):(\d{1,2}(?:\.\d{1,3})?)\]'

_TIMESTAMP_RE = re.compile(TIMESTAMP_PATTERN)
_LEADING_TIMESTAMPS_RE = re.compile(r'^\s*((?:' + TIMESTAMP_PATTERN + r'\s*)+)(.*)$')
_STRIP_RE = re.compile(r'\s*' + TIMESTAMP_PATTERN + r'\s*')
_HEADER_RE = re.compile(r'^\s*\[[A-Za-z#]+:[^\]]*\]\s*$')


def _to_milliseconds(minutes: str, seconds: str) -> int:
    return int(minutes) * 60000 + int(round(float(seconds) * 1000))


def parse_synced_lyrics(lrc: Optional[str]) -> List[LyricLine]:
    """
    Parse LRC text into time-ordered lyric lines

    Lines not starting with a timestamp (metadata headers like [ar:...],
    comments, garbage) are dropped silently. A line carrying several
    timestamps yields one LyricLine per timestamp.

    Args:
        lrc: Raw LRC text

    Returns:
        Lines sorted by timestamp (stable). Empty when nothing matched.

    Example:
        "[01:02.50]Hello there\\n[00:10.00]First line" ->
        [LyricLine(10000, "First line"), LyricLine(62500, "Hello there")]
    """
    if not lrc:
        return []

    lines: List[LyricLine] = []
    for raw_line in lrc.splitlines():
        match = _LEADING_TIMESTAMPS_RE.match(raw_line)
        if not match:
            continue

        text = match.group(4).strip()
        for minutes, seconds in _TIMESTAMP_RE.findall(match.group(1)):
            lines.append(LyricLine(_to_milliseconds(minutes, seconds), text))

    # sorted() is stable, equal timestamps keep document order
    return sorted(lines, key=lambda line: line.timestamp_ms)


def strip_timestamps(lrc: Optional[str]) -> str:
    """
    Remove timestamp tags from LRC text

    Metadata header lines like [ar:...] are dropped. Lines without a
    timestamp are kept as lyric text, so the result is every lyric line in
    document order.

    Args:
        lrc: Raw LRC text

    Returns:
        Plain lyrics text
    """
    if not lrc:
        return ""

    text_lines = []
    for raw_line in lrc.splitlines():
        if _HEADER_RE.match(raw_line):
            continue
        text_lines.append(collapse_whitespace(_STRIP_RE.sub(' ', raw_line)))

    return "\n".join(text_lines).strip()


def has_synced_content(lrc: Optional[str]) -> bool:
    """Check whether LRC text parses into at least one timed line with text"""
    return any(not is_blank(line.text) for line in parse_synced_lyrics(lrc))


def build_lyrics_result(record: ExternalLyricsRecord, source: str) -> Optional[LyricsResult]:
    """
    Build a LyricsResult from a service record

    Plain text comes from the record's plain lyrics, or from the synced
    lyrics with timestamps stripped when plain lyrics are missing. Synced
    lines are attached only if at least one of them has text.

    Args:
        record: Selected candidate
        source: Name of the lookup service

    Returns:
        LyricsResult or None when nothing displayable is left
    """
    synced_lines = parse_synced_lyrics(record.synced_lyrics) if record.has_synced else []
    if not any(not is_blank(line.text) for line in synced_lines):
        synced_lines = []

    if record.has_plain:
        plain_text = record.plain_lyrics.strip()
    elif record.has_synced:
        plain_text = strip_timestamps(record.synced_lyrics)
    else:
        plain_text = ""

    result = LyricsResult(
        plain_text=plain_text,
        synced_lines=tuple(synced_lines) if synced_lines else None,
        source=source,
    )

    if not result.has_displayable_content():
        return None
    return result
