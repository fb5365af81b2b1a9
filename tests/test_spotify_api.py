"""Tests for the Spotify API collaborators and the Result envelope"""

from unittest.mock import Mock, patch

import pytest
import requests
import spotipy

from spot_dashboard.core.exceptions import SpotifyError
from spot_dashboard.spotify import Result, SpotifyApi, TimeRange

from tests.conftest import TOKEN


def make_api(**client_methods):
    """SpotifyApi whose spotipy client is a Mock; returns (api, factory, client)."""
    client = Mock(**client_methods)
    factory = Mock(return_value=client)
    return SpotifyApi(client_factory=factory), factory, client


class TestResult:
    """Tests for the Result envelope"""

    def test_success(self):
        result = Result.success({"items": []})

        assert result.data == {"items": []}
        assert result.error is None
        assert result.ok

    def test_failure(self):
        result = Result.failure("Not found")

        assert result.data is None
        assert result.error == "Not found"
        assert not result.ok

    def test_requires_exactly_one(self):
        with pytest.raises(ValueError):
            Result()
        with pytest.raises(ValueError):
            Result(data={}, error="both")

    def test_empty_payload_is_success(self):
        assert Result.success({}).ok


class TestSpotifyApiSuccess:
    """Successful calls are wrapped in Result.success"""

    @pytest.mark.asyncio
    async def test_top_artists(self, top_artist_data):
        api, factory, client = make_api(**{"current_user_top_artists.return_value": top_artist_data})

        result = await api.fetch_user_top_artists(TOKEN, 5, TimeRange.LONG_TERM)

        assert result == Result.success(top_artist_data)
        factory.assert_called_once_with(TOKEN)
        client.current_user_top_artists.assert_called_once_with(limit=5, time_range="long_term")

    @pytest.mark.asyncio
    async def test_top_tracks_accepts_string_range(self, top_track_data):
        api, _, client = make_api(**{"current_user_top_tracks.return_value": top_track_data})

        result = await api.fetch_user_top_tracks(TOKEN, 1, "medium_term")

        assert result.data == top_track_data
        client.current_user_top_tracks.assert_called_once_with(limit=1, time_range="medium_term")

    @pytest.mark.asyncio
    async def test_default_time_range(self, top_track_data):
        api, _, client = make_api(**{"current_user_top_tracks.return_value": top_track_data})

        await api.fetch_user_top_tracks(TOKEN, 1)

        client.current_user_top_tracks.assert_called_once_with(limit=1, time_range="short_term")

    @pytest.mark.asyncio
    async def test_playlist(self, playlist_data):
        api, _, client = make_api(**{"playlist.return_value": playlist_data})

        result = await api.fetch_playlist_by_id(TOKEN, "playlist1")

        assert result.data["name"] == "My Playlist 1"
        client.playlist.assert_called_once_with("playlist1")


class TestSpotifyApiFailures:
    """Spotify error responses become Result.failure, transport faults raise"""

    @pytest.mark.asyncio
    async def test_expired_token_message(self):
        error = spotipy.SpotifyException(
            401, -1, "https://api.spotify.com/v1/me/top/artists?limit=1:\n The access token expired"
        )
        api, _, _ = make_api(**{"current_user_top_artists.side_effect": error})

        result = await api.fetch_user_top_artists(TOKEN, 1)

        assert result == Result.failure("The access token expired")

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        error = spotipy.SpotifyException(429, -1, "https://api.spotify.com/v1/me/top/tracks:\n API rate limit exceeded")
        api, _, _ = make_api(**{"current_user_top_tracks.side_effect": error})

        result = await api.fetch_user_top_tracks(TOKEN, 1)

        assert result.error == "API rate limit exceeded"

    @pytest.mark.asyncio
    async def test_error_without_message(self):
        error = spotipy.SpotifyException(404, -1, "")
        api, _, _ = make_api(**{"playlist.side_effect": error})

        result = await api.fetch_playlist_by_id(TOKEN, "missing")

        assert result.error == "Spotify request failed with status 404"

    @pytest.mark.asyncio
    async def test_empty_response_is_failure(self):
        api, _, _ = make_api(**{"playlist.return_value": None})

        result = await api.fetch_playlist_by_id(TOKEN, "playlist1")

        assert not result.ok
        assert "Empty response" in result.error

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        api, _, _ = make_api(**{"playlist.side_effect": requests.exceptions.ConnectionError("refused")})

        with pytest.raises(SpotifyError) as exc_info:
            await api.fetch_playlist_by_id(TOKEN, "playlist1")

        assert "Network error" in exc_info.value.message
        assert exc_info.value.details["method"] == "playlist"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 51, True, "5"])
    async def test_invalid_limit(self, limit):
        api, factory, _ = make_api()

        with pytest.raises(ValueError):
            await api.fetch_user_top_artists(TOKEN, limit)

        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_time_range(self):
        api, _, _ = make_api()

        with pytest.raises(ValueError):
            await api.fetch_user_top_tracks(TOKEN, 1, "forever")


class TestDefaultClient:

    def test_retries_disabled(self):
        with patch("spot_dashboard.spotify.api.spotipy.Spotify") as spotify_cls:
            SpotifyApi(requests_timeout=3.0)._default_client(TOKEN)

        spotify_cls.assert_called_once_with(
            auth=TOKEN, requests_timeout=3.0, retries=0, status_retries=0
        )
