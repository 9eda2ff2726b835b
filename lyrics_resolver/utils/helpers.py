"""
Utility functions and helpers for Lyrics-Resolver
Common functions for string processing, script detection and time formatting
"""

import re
import unicodedata
from typing import Optional, Union


_WHITESPACE_RE = re.compile(r'\s+')


def collapse_whitespace(text: str) -> str:
    """
    Collapse runs of whitespace into single spaces and trim

    Args:
        text: Input text

    Returns:
        Text with normalized spacing
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(' ', text).strip()


def is_blank(text: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings"""
    return text is None or not text.strip()


def count_words(text: str) -> int:
    """Number of whitespace separated words in text"""
    return len(text.split())


def has_non_blank_line(text: Optional[str]) -> bool:
    """True if at least one line of text contains something other than whitespace"""
    if not text:
        return False
    return any(line.strip() for line in text.splitlines())


def _is_latin_letter(char: str) -> bool:
    """Check whether an alphabetic character belongs to the Latin script"""
    if char.isascii():
        return True
    try:
        return 'LATIN' in unicodedata.name(char)
    except ValueError:
        # Unnamed code point
        return False


def latin_letter_ratio(text: Optional[str]) -> float:
    """
    Calculate the fraction of Latin-alphabet letters among all letters

    Digits, punctuation and whitespace are ignored. Accented Latin letters
    (é, ñ, ü ...) count as Latin.

    Args:
        text: Text to analyse

    Returns:
        Ratio between 0.0 and 1.0 (0.0 when the text has no letters)

    Example:
        latin_letter_ratio("Tum Hi Ho") == 1.0
        latin_letter_ratio("तुम ही हो") == 0.0
    """
    if not text:
        return 0.0

    letters = 0
    latin = 0
    for char in text:
        if char.isalpha():
            letters += 1
            if _is_latin_letter(char):
                latin += 1

    if letters == 0:
        return 0.0
    return latin / letters


def format_duration(seconds: Union[int, float]) -> str:
    """
    Format duration in seconds to human readable string

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "3:45", "1:23:45")
    """
    if seconds < 0:
        return "0:00"

    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_lrc_timestamp(timestamp_ms: int) -> str:
    """
    Format a millisecond offset as an LRC timestamp tag body

    Args:
        timestamp_ms: Offset from the start of the track in milliseconds

    Returns:
        String in mm:ss.xx format (hundredths of a second)

    Example:
        format_lrc_timestamp(62500) == "01:02.50"
    """
    timestamp_ms = max(0, int(timestamp_ms))
    minutes = timestamp_ms // 60000
    centiseconds = (timestamp_ms % 60000) // 10
    return f"{minutes:02d}:{centiseconds // 100:02d}.{centiseconds % 100:02d}"


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length with suffix

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    truncate_length = max_length - len(suffix)
    if truncate_length <= 0:
        return suffix[:max_length]

    return text[:truncate_length] + suffix
