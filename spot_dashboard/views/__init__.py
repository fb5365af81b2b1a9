"""
Views of spot-dashboard.

A view is one page activation: it runs the session gate, then its fetch
operations through a FetchOrchestrator, and exposes the resulting
FetchState until close() tears it down.

Modules:
    orchestrator: FetchOrchestrator, FetchOperation, FetchState, LivenessGuard
    dashboard:    DashboardView (top artists + top tracks)
    playlist:     PlaylistDetailView (one playlist + artist counts)
"""

from spot_dashboard.views.orchestrator import (
    EMPTY,
    FetchOperation,
    FetchOrchestrator,
    FetchState,
    LivenessGuard,
    Sentinel,
    all_items,
    first_item,
)
from spot_dashboard.views.dashboard import DashboardView
from spot_dashboard.views.playlist import PlaylistDetailView, playlist_route

__all__ = [
    "EMPTY",
    "Sentinel",
    "FetchOperation",
    "FetchOrchestrator",
    "FetchState",
    "LivenessGuard",
    "all_items",
    "first_item",
    "DashboardView",
    "PlaylistDetailView",
    "playlist_route",
]
