"""
Data models for Spotify entities.

This module defines immutable dataclasses for the objects the views
display: top artists, top tracks and playlists.

Design Decisions:
    - All dataclasses are frozen (immutable)
    - Fields follow the Spotify API response structure where possible
    - from_spotify_api() never raises on missing or malformed nested fields;
      missing images, descriptions or URLs become None / empty values. Only
      a top-level value that is not an object raises ValueError
    - Playlist entries without a nested track object are dropped

Usage:
    from spot_dashboard.spotify.models import Playlist

    playlist = Playlist.from_spotify_api(playlist_data)
    for track in playlist.tracks:
        print(f"{track.artist_names} - {track.name}")
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class TimeRange(str, Enum):
    """
    Time frame over which Spotify computes a user's top items.

    SHORT_TERM is roughly the last 4 weeks, MEDIUM_TERM the last 6 months,
    LONG_TERM roughly one year.
    """
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


def _first_image_url(images: Any) -> str | None:
    if not isinstance(images, list) or not images:
        return None
    first = images[0]
    if not isinstance(first, Mapping):
        return None
    return first.get("url") or None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected a Spotify {kind} object, got {type(data).__name__}")
    return data


def _spotify_url(data: Mapping[str, Any]) -> str | None:
    return _mapping(data.get("external_urls")).get("spotify") or None


@dataclass(frozen=True)
class Artist:
    """
    Immutable representation of a Spotify artist.

    Attributes:
        spotify_id: Spotify artist ID.
        name: Artist name.
        genres: Tuple of genre names (may be empty).
        image_url: URL of the first (largest) artist image, or None.
        spotify_url: Link to the artist on Spotify, or None.
    """

    spotify_id: str
    name: str
    genres: tuple[str, ...] = ()
    image_url: str | None = None
    spotify_url: str | None = None

    @classmethod
    def from_spotify_api(cls, artist_data: Mapping[str, Any]) -> "Artist":
        """Create an Artist from a full or simplified artist object."""
        artist_data = _require_mapping(artist_data, "artist")
        return cls(
            spotify_id=artist_data.get("id") or "",
            name=artist_data.get("name") or "",
            genres=tuple(g for g in _list(artist_data.get("genres")) if isinstance(g, str)),
            image_url=_first_image_url(artist_data.get("images")),
            spotify_url=_spotify_url(artist_data),
        )

    @property
    def genres_str(self) -> str:
        """Genres joined for display, e.g. "pop, rock"."""
        return ", ".join(self.genres)


@dataclass(frozen=True)
class Track:
    """
    Immutable representation of a Spotify track.

    Attributes:
        spotify_id: Spotify track ID.
        name: Track title.
        artists: Names of all credited artists, in API order.
        album_name: Album title, or empty string.
        image_url: URL of the first album cover image, or None.
        duration_ms: Track length in milliseconds.
        spotify_url: Link to the track on Spotify, or None.
    """

    spotify_id: str
    name: str
    artists: tuple[str, ...] = ()
    album_name: str = ""
    image_url: str | None = None
    duration_ms: int = 0
    spotify_url: str | None = None

    @classmethod
    def from_spotify_api(cls, track_data: Mapping[str, Any]) -> "Track":
        """
        Create a Track from a track object.

        Args:
            track_data: A track object as returned by the top-tracks
                        endpoint, or the nested 'track' of a playlist item.

        Raises:
            ValueError: If track_data is not a mapping.
        """
        track_data = _require_mapping(track_data, "track")
        album = _mapping(track_data.get("album"))
        artists = tuple(
            a.get("name") or a.get("id") or ""
            for a in _list(track_data.get("artists"))
            if isinstance(a, Mapping)
        )
        return cls(
            spotify_id=track_data.get("id") or "",
            name=track_data.get("name") or "",
            artists=artists,
            album_name=album.get("name") or "",
            image_url=_first_image_url(album.get("images")),
            duration_ms=track_data.get("duration_ms") or 0,
            spotify_url=_spotify_url(track_data),
        )

    @property
    def artist_names(self) -> str:
        """All artist names joined for display."""
        return ", ".join(self.artists)

    @property
    def duration_str(self) -> str:
        """Duration as M:SS."""
        minutes, seconds = divmod(self.duration_ms // 1000, 60)
        return f"{minutes}:{seconds:02d}"


@dataclass(frozen=True)
class Playlist:
    """
    Immutable representation of a Spotify playlist.

    Attributes:
        spotify_id: Spotify playlist ID.
        name: Playlist name.
        description: Playlist description text (may contain HTML), or empty.
        owner_name: Display name of the playlist owner.
        image_url: URL of the first cover image, or None.
        spotify_url: Link to the playlist on Spotify, or None.
        tracks: Tuple of Track objects in playlist order. Entries without a
                nested track object are not included.
        total_tracks: Total number of tracks reported by Spotify. May differ
                      from len(tracks).
        artist_counts: Artist appearance frequency over the track list.
    """

    spotify_id: str
    name: str
    description: str = ""
    owner_name: str = ""
    image_url: str | None = None
    spotify_url: str | None = None
    tracks: tuple[Track, ...] = ()
    total_tracks: int = 0
    artist_counts: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_spotify_api(
        cls,
        playlist_data: Mapping[str, Any],
        artist_counts: Mapping[str, int] | None = None
    ) -> "Playlist":
        """
        Create a Playlist from a full playlist object.

        Args:
            playlist_data: Response of the get-playlist endpoint.
            artist_counts: Optional precomputed artist frequency map
                           (see spot_dashboard.stats.count_artists).

        Behavior:
            1. Extract id, name, description and owner
            2. Take the first cover image
            3. Parse every item that carries a 'track' mapping, skipping
               null or malformed items

        Raises:
            ValueError: If playlist_data is not a mapping.
        """
        playlist_data = _require_mapping(playlist_data, "playlist")
        tracks_page = _mapping(playlist_data.get("tracks"))
        items = tracks_page.get("items")
        items = items if isinstance(items, list) else []

        tracks = tuple(
            Track.from_spotify_api(item["track"])
            for item in items
            if isinstance(item, Mapping) and isinstance(item.get("track"), Mapping)
        )

        owner = _mapping(playlist_data.get("owner"))
        total = tracks_page.get("total")

        return cls(
            spotify_id=playlist_data.get("id") or "",
            name=playlist_data.get("name") or "",
            description=playlist_data.get("description") or "",
            owner_name=owner.get("display_name") or owner.get("id") or "",
            image_url=_first_image_url(playlist_data.get("images")),
            spotify_url=_spotify_url(playlist_data),
            tracks=tracks,
            total_tracks=total if isinstance(total, int) else len(tracks),
            artist_counts=dict(artist_counts or {}),
        )

    @property
    def track_count(self) -> int:
        """Number of tracks that could be parsed."""
        return len(self.tracks)
