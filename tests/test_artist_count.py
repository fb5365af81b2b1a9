"""Tests for artist frequency counting"""

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from spot_dashboard.core.exceptions import SpotifyError
from spot_dashboard.spotify import Result
from spot_dashboard.stats import artist_count_for_playlist, artist_key, count_artists, top_artists

from tests.conftest import TOKEN


def playlist_of(*tracks):
    return {"tracks": {"items": [{"track": t} for t in tracks]}}


class TestCountArtists:
    """Tests for count_artists()"""

    def test_counts_across_tracks(self, playlist_data):
        assert count_artists(playlist_data) == {"Artist A": 2, "Artist B": 1}

    def test_repeated_artist_in_one_track_counts_twice(self):
        playlist = playlist_of({"artists": [{"name": "A"}, {"name": "A"}]})

        assert count_artists(playlist) == {"A": 2}

    def test_total_matches_artist_entries(self):
        playlist = playlist_of(
            {"artists": [{"name": "A"}, {"name": "B"}]},
            {"artists": [{"name": "C"}]},
            {"artists": []},
        )

        assert sum(count_artists(playlist).values()) == 3

    def test_falls_back_to_id(self):
        playlist = playlist_of({"artists": [{"id": "id1", "name": ""}, {"id": "id1"}]})

        assert count_artists(playlist) == {"id1": 2}

    def test_artist_without_name_or_id_skipped(self):
        playlist = playlist_of({"artists": [{"name": None}, {}, "junk", {"name": "A"}]})

        assert count_artists(playlist) == {"A": 1}

    def test_null_and_malformed_items_skipped(self):
        playlist = {"tracks": {"items": [
            {"track": None},
            {},
            None,
            {"track": {"artists": [{"name": "A"}]}},
            {"track": {}},
            {"track": {"artists": None}},
        ]}}

        assert count_artists(playlist) == {"A": 1}

    def test_mixed_keys_and_non_track_entry(self):
        playlist = {"tracks": {"items": [
            {"track": {"artists": [{"id": "x1"}, {"name": "Y"}]}},
            {"not_track": True},
            {"track": {"artists": [{"id": "x2"}]}},
        ]}}

        assert count_artists(playlist) == {"x1": 1, "Y": 1, "x2": 1}

    @pytest.mark.parametrize("playlist", [
        None,
        {},
        {"tracks": None},
        {"tracks": {}},
        {"tracks": {"items": None}},
        {"tracks": {"items": "nope"}},
        "playlist",
    ])
    def test_no_items_gives_empty_mapping(self, playlist):
        assert count_artists(playlist) == {}

    def test_input_not_mutated(self, playlist_data):
        before = repr(playlist_data)

        count_artists(playlist_data)

        assert repr(playlist_data) == before


class TestArtistKey:

    def test_prefers_name(self):
        assert artist_key({"id": "x", "name": "A"}) == "A"

    def test_none_for_unusable(self):
        assert artist_key({"id": 5}) is None
        assert artist_key(None) is None


class TestTopArtists:

    def test_ordering(self):
        counts = {"B": 2, "A": 2, "C": 5, "D": 1}

        assert top_artists(counts) == [("C", 5), ("A", 2), ("B", 2), ("D", 1)]
        assert top_artists(counts, 2) == [("C", 5), ("A", 2)]


class TestArtistCountForPlaylist:
    """Tests for artist_count_for_playlist()"""

    @pytest.mark.asyncio
    async def test_success(self, playlist_data):
        api = Mock()
        api.fetch_playlist_by_id = AsyncMock(return_value=Result.success(playlist_data))

        counts = await artist_count_for_playlist(api, TOKEN, "playlist1")

        assert counts == {"Artist A": 2, "Artist B": 1}
        api.fetch_playlist_by_id.assert_awaited_once_with(TOKEN, "playlist1")

    @pytest.mark.asyncio
    async def test_empty_playlist(self):
        api = Mock()
        api.fetch_playlist_by_id = AsyncMock(return_value=Result.success({"tracks": {"items": []}}))

        assert await artist_count_for_playlist(api, TOKEN, "playlist1") == {}

    @pytest.mark.asyncio
    async def test_error_envelope_logged(self, caplog):
        api = Mock()
        api.fetch_playlist_by_id = AsyncMock(return_value=Result.failure("Resource not found"))

        with caplog.at_level(logging.ERROR):
            counts = await artist_count_for_playlist(api, TOKEN, "missing")

        assert counts is None
        records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(records) == 1
        assert records[0].getMessage() == "Error fetching playlist: Resource not found"
        assert records[0].args == ("Resource not found",)

    @pytest.mark.asyncio
    async def test_rejection_logged_with_fault(self, caplog):
        fault = SpotifyError("Network error")
        api = Mock()
        api.fetch_playlist_by_id = AsyncMock(side_effect=fault)

        with caplog.at_level(logging.ERROR):
            counts = await artist_count_for_playlist(api, TOKEN, "playlist1")

        assert counts is None
        records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(records) == 1
        assert records[0].args[0] is fault
        assert records[0].getMessage() == "Error fetching playlist: Network error"

    @pytest.mark.asyncio
    async def test_expired_token_redirects_to_login(self, navigator, caplog):
        api = Mock()
        api.fetch_playlist_by_id = AsyncMock(return_value=Result.failure("The access token expired"))

        with caplog.at_level(logging.ERROR):
            counts = await artist_count_for_playlist(api, TOKEN, "playlist1", navigate=navigator)

        assert counts is None
        assert navigator.history == ["/login"]
        assert not [r for r in caplog.records if r.levelno == logging.ERROR]

    @pytest.mark.asyncio
    async def test_other_error_does_not_redirect(self, navigator):
        api = Mock()
        api.fetch_playlist_by_id = AsyncMock(return_value=Result.failure("Resource not found"))

        counts = await artist_count_for_playlist(api, TOKEN, "missing", navigate=navigator, login_path="/signin")

        assert counts is None
        assert navigator.history == []
