"""Test configuration and fixtures"""

import asyncio

import pytest

from spot_dashboard.session import HistoryNavigator, KEY_ACCESS_TOKEN, MemoryTokenStore, SessionGate
from spot_dashboard.spotify import Result

TOKEN = "test-token"


class FakeSpotifyApi:
    """
    Stand-in for SpotifyApi.

    Each outcome attribute may be a Result, an exception to raise, or an
    async callable producing either.
    """

    def __init__(self, top_artists=None, top_tracks=None, playlist=None):
        self.top_artists = top_artists
        self.top_tracks = top_tracks
        self.playlist = playlist
        self.calls = []

    async def fetch_user_top_artists(self, token, limit, time_range):
        self.calls.append(("top_artists", token, limit, time_range))
        return await self._resolve(self.top_artists)

    async def fetch_user_top_tracks(self, token, limit, time_range):
        self.calls.append(("top_tracks", token, limit, time_range))
        return await self._resolve(self.top_tracks)

    async def fetch_playlist_by_id(self, token, playlist_id):
        self.calls.append(("playlist", token, playlist_id))
        return await self._resolve(self.playlist)

    @staticmethod
    async def _resolve(outcome):
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            outcome = await outcome()
            if isinstance(outcome, BaseException):
                raise outcome
        return outcome


def delayed(outcome, delay=0.01):
    """Async callable resolving to outcome after delay seconds."""
    async def produce():
        await asyncio.sleep(delay)
        return outcome
    return produce


def gated(event, outcome):
    """Async callable resolving to outcome once event is set."""
    async def produce():
        await event.wait()
        return outcome
    return produce


async def settle_loop(rounds=5):
    """Let scheduled callbacks and task steps run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def top_artist_data():
    return {
        "items": [
            {
                "id": "artist1",
                "name": "Top Artist",
                "genres": ["pop", "rock"],
                "images": [{"url": "https://via.placeholder.com/64"}],
                "external_urls": {"spotify": "https://open.spotify.com/artist/artist1"},
            },
        ],
    }


@pytest.fixture
def top_track_data():
    return {
        "items": [
            {
                "id": "track1",
                "name": "Top Track",
                "album": {"images": [{"url": "https://via.placeholder.com/64"}], "name": "Top Album"},
                "artists": [{"name": "Artist1"}],
                "external_urls": {"spotify": "https://open.spotify.com/track/track1"},
            },
        ],
    }


@pytest.fixture
def playlist_data():
    return {
        "id": "playlist1",
        "name": "My Playlist 1",
        "description": "A cool playlist",
        "images": [{"url": "https://via.placeholder.com/56"}],
        "owner": {"display_name": "User1"},
        "external_urls": {"spotify": "https://open.spotify.com/playlist/playlist1"},
        "tracks": {
            "items": [
                {
                    "track": {
                        "id": "track1",
                        "name": "Track One",
                        "artists": [{"name": "Artist A"}],
                        "album": {"name": "Album X", "images": [{"url": "https://via.placeholder.com/56"}]},
                        "duration_ms": 210000,
                        "external_urls": {"spotify": "https://open.spotify.com/track/track1"},
                    },
                },
                {
                    "track": {
                        "id": "track2",
                        "name": "Track Two",
                        "artists": [{"name": "Artist B"}, {"name": "Artist A"}],
                        "album": {"name": "Album Y", "images": [{"url": "https://via.placeholder.com/56"}]},
                        "duration_ms": 180000,
                        "external_urls": {"spotify": "https://open.spotify.com/track/track2"},
                    },
                },
            ],
            "total": 2,
        },
    }


@pytest.fixture
def fake_api(top_artist_data, top_track_data, playlist_data):
    return FakeSpotifyApi(
        top_artists=Result.success(top_artist_data),
        top_tracks=Result.success(top_track_data),
        playlist=Result.success(playlist_data),
    )


@pytest.fixture
def navigator():
    return HistoryNavigator()


@pytest.fixture
def token_store():
    return MemoryTokenStore({KEY_ACCESS_TOKEN: TOKEN})


@pytest.fixture
def empty_store():
    return MemoryTokenStore()


@pytest.fixture
def gate(token_store, navigator):
    return SessionGate(token_store, navigator)
