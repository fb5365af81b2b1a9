"""
Async Spotify Web API collaborators for spot-dashboard.

This module wraps spotipy behind three coroutine functions that the views
consume. Every call is authenticated with an opaque bearer token supplied
by the session gate, and every call returns a Result envelope.

Outcomes:
    - Spotify answered with data          -> Result.success(payload)
    - Spotify answered with an error      -> Result.failure(message)
      (expired token, rate limiting, not found, forbidden, ...)
    - The request never got an answer     -> raises SpotifyError
      (connection refused, timeout, ...)

No retries:
    spotipy retries failed requests with backoff by default. The client is
    built with retries disabled so that a failure surfaces immediately.

Threading:
    spotipy is blocking; each call runs in the default executor through
    asyncio.to_thread() so several calls can be outstanding at once.

Usage:
    api = SpotifyApi()
    result = await api.fetch_user_top_artists(token, 5, TimeRange.LONG_TERM)
    if result.error:
        print(result.error)
"""

import asyncio
from typing import Any, Callable

import requests
import spotipy

from spot_dashboard.core.exceptions import SpotifyError
from spot_dashboard.core.logger import get_logger
from spot_dashboard.spotify.models import TimeRange
from spot_dashboard.spotify.result import Result

logger = get_logger(__name__)

MAX_TOP_ITEMS_LIMIT = 50
DEFAULT_REQUESTS_TIMEOUT = 10.0

ClientFactory = Callable[[str], spotipy.Spotify]


def _error_message(error: spotipy.SpotifyException) -> str:
    """
    Extract Spotify's own error message from a SpotifyException.

    spotipy formats msg as "<request url>:\\n <message>"; only the message
    part is meaningful to a user.
    """
    if error.http_status == 429:
        return "API rate limit exceeded"
    message = str(error.msg or "").rsplit(":\n", 1)[-1].strip()
    return message or f"Spotify request failed with status {error.http_status}"


def _validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_TOP_ITEMS_LIMIT:
        raise ValueError(f"limit must be an integer between 1 and {MAX_TOP_ITEMS_LIMIT}, got {limit!r}")
    return limit


class SpotifyApi:
    """
    Spotify Web API client returning Result envelopes.

    A new spotipy.Spotify instance is built per call because the bearer
    token belongs to the caller's session, not to this object.

    Attributes:
        requests_timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        requests_timeout: float = DEFAULT_REQUESTS_TIMEOUT,
        client_factory: ClientFactory | None = None
    ) -> None:
        """
        Args:
            requests_timeout: Per-request timeout in seconds.
            client_factory: Builds a spotipy client for a token. Defaults to
                            a spotipy.Spotify with retries disabled.
        """
        self.requests_timeout = requests_timeout
        self._client_factory = client_factory or self._default_client

    def _default_client(self, token: str) -> spotipy.Spotify:
        return spotipy.Spotify(
            auth=token,
            requests_timeout=self.requests_timeout,
            retries=0,
            status_retries=0,
        )

    # =========================================================================
    # Fetch Operations
    # =========================================================================

    async def fetch_user_top_artists(
        self,
        token: str,
        limit: int,
        time_range: TimeRange | str = TimeRange.SHORT_TERM
    ) -> Result[dict[str, Any]]:
        """
        Get the current user's top artists.

        Args:
            token: Bearer access token.
            limit: Number of artists to return (1-50).
            time_range: Affinity time frame.

        Returns:
            Result whose data is the paging object ({"items": [...], ...}).

        Raises:
            ValueError: If limit or time_range is invalid.
            SpotifyError: If Spotify could not be reached.
        """
        limit = _validate_limit(limit)
        time_range = TimeRange(time_range)
        return await self._call(
            token, "current_user_top_artists",
            limit=limit, time_range=time_range.value
        )

    async def fetch_user_top_tracks(
        self,
        token: str,
        limit: int,
        time_range: TimeRange | str = TimeRange.SHORT_TERM
    ) -> Result[dict[str, Any]]:
        """Get the current user's top tracks. See fetch_user_top_artists()."""
        limit = _validate_limit(limit)
        time_range = TimeRange(time_range)
        return await self._call(
            token, "current_user_top_tracks",
            limit=limit, time_range=time_range.value
        )

    async def fetch_playlist_by_id(self, token: str, playlist_id: str) -> Result[dict[str, Any]]:
        """
        Get a playlist including its first page of track items.

        Args:
            token: Bearer access token.
            playlist_id: Spotify playlist ID, URI or URL.

        Returns:
            Result whose data is the full playlist object.

        Raises:
            SpotifyError: If Spotify could not be reached.
        """
        return await self._call(token, "playlist", playlist_id)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _call(self, token: str, method: str, *args: Any, **kwargs: Any) -> Result[dict[str, Any]]:
        logger.debug(f"Spotify request: {method} {args or ''}")
        try:
            data = await asyncio.to_thread(self._invoke, token, method, *args, **kwargs)
        except spotipy.SpotifyException as e:
            message = _error_message(e)
            logger.debug(f"Spotify returned an error for {method}: {message} (status {e.http_status})")
            return Result.failure(message)
        except requests.exceptions.RequestException as e:
            raise SpotifyError(
                f"Network error while contacting Spotify: {e}",
                details={"method": method, "original_error": str(e)}
            ) from e

        if data is None:
            return Result.failure(f"Empty response from Spotify for {method}")
        return Result.success(data)

    def _invoke(self, token: str, method: str, *args: Any, **kwargs: Any) -> Any:
        client = self._client_factory(token)
        return getattr(client, method)(*args, **kwargs)
