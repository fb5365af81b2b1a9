"""
Playlist detail view: playlist header, its tracks and artist frequencies.
"""

from typing import Any

from spot_dashboard.session.gate import SessionGate, SessionState
from spot_dashboard.session.navigation import Navigate
from spot_dashboard.spotify.api import SpotifyApi
from spot_dashboard.spotify.models import Playlist
from spot_dashboard.stats.artist_count import count_artists
from spot_dashboard.views.orchestrator import FetchOperation, FetchOrchestrator, FetchState

PLAYLIST = "playlist"


def playlist_route(playlist_id: str) -> str:
    return f"/playlist/{playlist_id}"


def project_playlist(data: Any) -> Playlist:
    """Build the Playlist model, dropping null track entries and counting artists."""
    return Playlist.from_spotify_api(data, artist_counts=count_artists(data))


class PlaylistDetailView:
    """Single-playlist page."""

    def __init__(self, gate: SessionGate, api: SpotifyApi, navigate: Navigate) -> None:
        self._gate = gate
        self._api = api
        self._orchestrator = FetchOrchestrator(navigate, login_path=gate.login_path)
        self.playlist_id: str | None = None

    @property
    def session(self) -> SessionState:
        return self._gate.state

    @property
    def state(self) -> FetchState:
        return self._orchestrator.state

    @property
    def playlist(self) -> Playlist | None:
        return self.state.results.get(PLAYLIST)

    async def activate(self, playlist_id: str) -> FetchState:
        """
        Check the session and, if authenticated, fetch the playlist.

        Activating with another playlist id tears down the previous fetch,
        so a slow response for the old id can never overwrite the new one.
        """
        self.playlist_id = playlist_id
        session = self._gate.activate(playlist_route(playlist_id))
        if not session.authenticated:
            return self.state
        return await self._orchestrator.run(session, [
            FetchOperation(
                PLAYLIST,
                lambda token: self._api.fetch_playlist_by_id(token, playlist_id),
                project_playlist,
            ),
        ])

    def close(self) -> None:
        self._orchestrator.teardown()
        self._gate.reset()
