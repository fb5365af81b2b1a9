"""
Artist appearance frequency over a playlist's track list.

count_artists() is pure and tolerant of partial data:
    - no traversable tracks.items list      -> {}
    - item without a nested track mapping   -> skipped
    - track without an artists list         -> contributes nothing
    - artist key                            -> name if non-empty, else id
    - artist with neither name nor id       -> skipped

artist_count_for_playlist() fetches the playlist first and returns None
when the fetch fails, so callers can tell "could not compute" (None) from
"no artists" ({}). Given a navigate callback, an expired token sends the
user to login instead of being logged as a failure.
"""

from collections import Counter
from typing import TYPE_CHECKING, Any, Mapping

from spot_dashboard.core.logger import get_logger
from spot_dashboard.session.navigation import LOGIN_PATH, Navigate
from spot_dashboard.session.token_errors import handle_token_error

if TYPE_CHECKING:
    from spot_dashboard.spotify.api import SpotifyApi

logger = get_logger(__name__)


def artist_key(artist: Any) -> str | None:
    """Return the counting key for an artist object, or None if it has none."""
    if not isinstance(artist, Mapping):
        return None
    name = artist.get("name")
    if isinstance(name, str) and name:
        return name
    artist_id = artist.get("id")
    if isinstance(artist_id, str) and artist_id:
        return artist_id
    return None


def count_artists(playlist: Any) -> dict[str, int]:
    """
    Count how many times each artist appears across a playlist's tracks.

    Args:
        playlist: A playlist object as returned by the Spotify API. Any
                  other value yields an empty mapping.

    Returns:
        Mapping of artist key to number of appearances.

    Example:
        >>> count_artists({"tracks": {"items": [
        ...     {"track": {"artists": [{"name": "A"}]}},
        ...     {"track": {"artists": [{"name": "B"}, {"name": "A"}]}},
        ... ]}})
        {'A': 2, 'B': 1}
    """
    tracks = playlist.get("tracks") if isinstance(playlist, Mapping) else None
    items = tracks.get("items") if isinstance(tracks, Mapping) else None
    if not isinstance(items, list):
        return {}

    counts: Counter[str] = Counter()
    for item in items:
        track = item.get("track") if isinstance(item, Mapping) else None
        if not isinstance(track, Mapping):
            continue
        for artist in track.get("artists") or ():
            key = artist_key(artist)
            if key is not None:
                counts[key] += 1
    return dict(counts)


def top_artists(counts: Mapping[str, int], n: int | None = None) -> list[tuple[str, int]]:
    """Most frequent artists first; ties ordered by key."""
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return ranked if n is None else ranked[:n]


async def artist_count_for_playlist(
    api: "SpotifyApi",
    token: str,
    playlist_id: str,
    navigate: Navigate | None = None,
    login_path: str = LOGIN_PATH
) -> dict[str, int] | None:
    """
    Fetch a playlist and count its artists.

    Args:
        api: Object providing fetch_playlist_by_id(token, playlist_id).
        token: Bearer access token.
        playlist_id: Spotify playlist ID.
        navigate: Optional navigation callback. An expired-token error is
                  routed to login_path through it and not logged.
        login_path: Login route used with navigate.

    Returns:
        The artist frequency map, or None if the playlist could not be
        fetched. Failures are logged as "Error fetching playlist" with the
        raw fault or error string as the log argument.
    """
    try:
        result = await api.fetch_playlist_by_id(token, playlist_id)
    except Exception as e:
        logger.error("Error fetching playlist: %s", e)
        return None

    if result.error is not None:
        if navigate is not None and handle_token_error(result.error, navigate, login_path):
            return None
        logger.error("Error fetching playlist: %s", result.error)
        return None

    return count_artists(result.data)
