"""
spot-dashboard: Summaries of a user's Spotify listening data.

This package authenticates with a stored Spotify access token, fetches the
user's top artists, top tracks and playlists, and renders summaries.

Architecture:
    core/       - Configuration, logging, exceptions
    session/    - Token store, session gate, token-expiry handling
    spotify/    - Result envelope, Spotify API collaborators, data models
    views/      - Fetch orchestration and the dashboard/playlist views
    stats/      - Artist frequency over a playlist
    cli.py      - Command-line interface

Flow:
    SessionGate -> token -> FetchOrchestrator -> Result envelopes
        -> token-expiry classifier (errors) / projections (data)
        -> view state -> rendering

Usage:
    Command Line:
        spot-dash login "<access token>"
        spot-dash dashboard --limit 5
        spot-dash playlist <playlist_id>
        spot-dash artist-count <playlist_id>

    Python API:
        from spot_dashboard.session import SessionGate, JsonFileTokenStore, HistoryNavigator
        from spot_dashboard.spotify import SpotifyApi
        from spot_dashboard.views import DashboardView

        navigator = HistoryNavigator()
        gate = SessionGate(JsonFileTokenStore(token_path), navigator)
        view = DashboardView(gate, SpotifyApi(), navigator, limit=5)
        state = await view.activate()
        view.close()
"""

__version__ = "0.1.0"
