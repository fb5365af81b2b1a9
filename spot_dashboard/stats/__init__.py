"""Listening statistics computed from Spotify payloads."""

from spot_dashboard.stats.artist_count import (
    artist_count_for_playlist,
    artist_key,
    count_artists,
    top_artists,
)

__all__ = [
    "artist_count_for_playlist",
    "artist_key",
    "count_artists",
    "top_artists",
]
