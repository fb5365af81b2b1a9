"""
Spotify integration package for spot-dashboard.

Modules:
    models: Frozen dataclasses for artists, tracks and playlists, plus TimeRange
    result: The Result envelope every fetch operation returns
    api:    SpotifyApi, the async fetch collaborators backed by spotipy

Usage:
    from spot_dashboard.spotify import SpotifyApi, TimeRange

    api = SpotifyApi()
    result = await api.fetch_user_top_tracks(token, 10, TimeRange.SHORT_TERM)
"""

from spot_dashboard.spotify.models import Artist, Playlist, TimeRange, Track
from spot_dashboard.spotify.result import Result
from spot_dashboard.spotify.api import SpotifyApi

__all__ = [
    # Models
    "Artist",
    "Track",
    "Playlist",
    "TimeRange",
    # Envelope
    "Result",
    # Client
    "SpotifyApi",
]
