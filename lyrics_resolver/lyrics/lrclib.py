"""
LRCLIB lyrics service client

Talks to an LRCLIB-compatible HTTP API:

    GET {base_url}/get?track_name=...&artist_name=...[&duration=...]   single JSON object
    GET {base_url}/search?q=...                                        JSON array

Lookups are best effort. Transport errors, timeouts, non-2xx statuses,
empty bodies and malformed or unexpected JSON are all logged at DEBUG and
reported as "no result" (None or an empty list), so that a failing lookup
simply moves the resolver on to its next search variation.
"""

from typing import Any, Dict, List, Optional

import requests

from .models import ExternalLyricsRecord
from ..config.settings import get_settings
from ..exceptions import LyricsServiceError
from ..utils.logger import get_logger


class LrclibClient:
    """LRCLIB API client"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize LRCLIB client

        Args:
            base_url: API base URL (defaults to lyrics.base_url setting)
            user_agent: User-Agent header (defaults to network.user_agent setting)
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
            session: Pre-configured requests session (mainly for tests)
        """
        self.settings = get_settings()
        self.logger = get_logger(__name__)

        self.base_url = (base_url or self.settings.lyrics.base_url).rstrip('/')
        self.timeout = (
            connect_timeout if connect_timeout is not None else self.settings.network.connect_timeout,
            read_timeout if read_timeout is not None else self.settings.network.read_timeout,
        )

        # HTTP session
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent or self.settings.network.user_agent,
            'Accept': 'application/json'
        })

    def _request_json(self, endpoint: str, params: Dict[str, Any]) -> Any:
        """
        Perform a GET request and decode the JSON body

        Args:
            endpoint: Endpoint name relative to the base URL ("get" or "search")
            params: Query parameters

        Returns:
            Decoded JSON value

        Raises:
            LyricsServiceError: On any transport, status or decoding failure
        """
        url = f"{self.base_url}/{endpoint}"

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise LyricsServiceError(f"Request to {endpoint} timed out", details={'error': str(e)})
        except requests.exceptions.RequestException as e:
            raise LyricsServiceError(f"Request to {endpoint} failed", details={'error': str(e)})

        if not 200 <= response.status_code < 300:
            raise LyricsServiceError(
                f"{endpoint} returned HTTP {response.status_code}",
                status_code=response.status_code
            )

        if not response.text or not response.text.strip():
            raise LyricsServiceError(f"{endpoint} returned an empty body", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise LyricsServiceError(f"{endpoint} returned malformed JSON", details={'error': str(e)})

    def get_exact(
        self,
        title: str,
        artist: str,
        duration_seconds: Optional[int] = None
    ) -> Optional[ExternalLyricsRecord]:
        """
        Look up a single track by title, artist and optional duration

        Args:
            title: Track title
            artist: Artist name
            duration_seconds: Track duration in whole seconds (omitted when None)

        Returns:
            ExternalLyricsRecord or None on any failure
        """
        params: Dict[str, Any] = {'track_name': title, 'artist_name': artist}
        if duration_seconds:
            params['duration'] = duration_seconds

        try:
            data = self._request_json('get', params)
        except LyricsServiceError as e:
            self.logger.debug(f"Exact lookup failed for '{artist} - {title}': {e}")
            return None

        if not isinstance(data, dict):
            self.logger.debug(f"Exact lookup for '{artist} - {title}' returned {type(data).__name__}, expected object")
            return None

        return ExternalLyricsRecord.from_api_data(data)

    def search(self, query: str) -> List[ExternalLyricsRecord]:
        """
        Free-text search

        Args:
            query: Search query (title, optionally followed by artist)

        Returns:
            Candidate records in service order (empty on any failure)
        """
        try:
            data = self._request_json('search', {'q': query})
        except LyricsServiceError as e:
            self.logger.debug(f"Search failed for '{query}': {e}")
            return []

        if not isinstance(data, list):
            self.logger.debug(f"Search for '{query}' returned {type(data).__name__}, expected array")
            return []

        records = [ExternalLyricsRecord.from_api_data(item) for item in data if isinstance(item, dict)]
        self.logger.debug(f"Search for '{query}' returned {len(records)} candidates")
        return records

    def get_api_status(self) -> Dict[str, Any]:
        """Get client configuration summary"""
        return {
            'base_url': self.base_url,
            'user_agent': self.session.headers.get('User-Agent'),
            'connect_timeout': self.timeout[0],
            'read_timeout': self.timeout[1]
        }

    def close(self) -> None:
        """Close the underlying HTTP session"""
        self.session.close()
