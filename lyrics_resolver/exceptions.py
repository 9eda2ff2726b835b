"""
Exception classes for lyrics-resolver.

This module defines the custom exceptions used throughout the application.
Most failures inside the resolution engine are NOT exceptional: a network
error, a bad status or an empty candidate set simply means "try the next
search variation". Exceptions are reserved for the few outcomes a caller
actually has to handle.

Exception Hierarchy:
    LyricsResolverError (base)
        ConfigError - Configuration file issues
        LyricsServiceError - HTTP/service failures (caught inside the client)
        LyricsNotFoundError - Every search variation was exhausted
"""

from typing import Any, Dict, Optional


class LyricsResolverError(Exception):
    """
    Base exception for all lyrics-resolver errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all lyrics-resolver errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., query, URL).
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'title' / 'artist': The query that failed
                     - 'url': URL that caused the error
                     - 'status_code': HTTP status returned by the service
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(LyricsResolverError):
    """
    Raised when there's an issue with the configuration file.

    Only raised when the user explicitly points at a config file that
    cannot be read or parsed. Implicit config locations fall back to
    defaults with a warning instead.

    Example:
        raise ConfigError(
            "Invalid YAML in config file",
            details={'file_path': '/path/to/config.yaml'}
        )
    """
    pass


class LyricsServiceError(LyricsResolverError):
    """
    Raised by the HTTP layer when a lookup call fails.

    Covers transport errors, timeouts, non-success status codes, empty
    bodies and malformed JSON. This error never escapes the retrieval
    client: it is converted into "strategy failed" there.

    Attributes:
        status_code: HTTP status code if a response was received, None otherwise.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class LyricsNotFoundError(LyricsResolverError):
    """
    Raised when no search variation produced displayable lyrics.

    This is the single terminal failure surfaced to callers of
    LyricsResolver.resolve(). No detailed per-strategy reason is attached;
    those are logged at DEBUG level while the search runs.

    Attributes:
        title: Title as supplied by the caller.
        artist: Artist as supplied by the caller.
        variations_tried: Number of search variations that were attempted.
    """

    def __init__(self, title: str, artist: str, variations_tried: int = 0) -> None:
        super().__init__(
            f"No lyrics found for: {artist} - {title}",
            details={'title': title, 'artist': artist, 'variations_tried': variations_tried}
        )
        self.title = title
        self.artist = artist
        self.variations_tried = variations_tried
