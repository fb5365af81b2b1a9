"""
Dashboard view: the user's top artists and top tracks.

Both lists are fetched concurrently through the FetchOrchestrator. Each
result slot holds a tuple of models, or EMPTY when Spotify returned no
items.
"""

from functools import partial
from typing import Any

from spot_dashboard.session.gate import SessionGate, SessionState
from spot_dashboard.session.navigation import Navigate
from spot_dashboard.spotify.api import SpotifyApi
from spot_dashboard.spotify.models import Artist, TimeRange, Track
from spot_dashboard.views.orchestrator import (
    EMPTY,
    FetchOperation,
    FetchOrchestrator,
    FetchState,
    all_items,
)

DASHBOARD_PATH = "/dashboard"
TOP_ARTISTS = "top_artists"
TOP_TRACKS = "top_tracks"


class DashboardView:
    """
    Top artists and top tracks for one time range.

    Attributes:
        limit: Number of items requested per list.
        time_range: Spotify affinity time frame.
    """

    def __init__(
        self,
        gate: SessionGate,
        api: SpotifyApi,
        navigate: Navigate,
        limit: int = 1,
        time_range: TimeRange = TimeRange.SHORT_TERM
    ) -> None:
        self._gate = gate
        self._api = api
        self.limit = limit
        self.time_range = time_range
        self._orchestrator = FetchOrchestrator(navigate, login_path=gate.login_path)

    @property
    def session(self) -> SessionState:
        return self._gate.state

    @property
    def state(self) -> FetchState:
        return self._orchestrator.state

    @property
    def top_artists(self) -> tuple[Artist, ...] | Any:
        return self.state.results.get(TOP_ARTISTS, EMPTY)

    @property
    def top_tracks(self) -> tuple[Track, ...] | Any:
        return self.state.results.get(TOP_TRACKS, EMPTY)

    async def activate(self, route: str = DASHBOARD_PATH) -> FetchState:
        """Check the session and, if authenticated, fetch both lists."""
        session = self._gate.activate(route)
        if not session.authenticated:
            return self.state
        return await self._orchestrator.run(session, self._operations())

    def close(self) -> None:
        self._orchestrator.teardown()
        self._gate.reset()

    def _operations(self) -> list[FetchOperation]:
        return [
            FetchOperation(
                TOP_ARTISTS,
                lambda token: self._api.fetch_user_top_artists(token, self.limit, self.time_range),
                partial(all_items, convert=Artist.from_spotify_api),
            ),
            FetchOperation(
                TOP_TRACKS,
                lambda token: self._api.fetch_user_top_tracks(token, self.limit, self.time_range),
                partial(all_items, convert=Track.from_spotify_api),
            ),
        ]
