# lyrics_resolver/utils/__init__.py
"""
Utilities package
Common helpers, logging, and utility functions
"""

from .logger import (
    get_logger,
    configure_from_settings,
    setup_logging,
    log_performance,
    get_current_log_file
)
from .helpers import (
    collapse_whitespace,
    is_blank,
    count_words,
    has_non_blank_line,
    latin_letter_ratio,
    format_duration,
    format_lrc_timestamp,
    truncate_string
)

__all__ = [
    # Logger exports
    'get_logger',
    'configure_from_settings',
    'setup_logging',
    'log_performance',
    'get_current_log_file',

    # Helper exports
    'collapse_whitespace',
    'is_blank',
    'count_words',
    'has_non_blank_line',
    'latin_letter_ratio',
    'format_duration',
    'format_lrc_timestamp',
    'truncate_string'
]
