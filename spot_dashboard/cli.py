"""
Command-line interface for spot-dashboard.

This module implements the CLI using Click; rich-click formats the help
output and rich renders the tables.

Commands:
    spot-dash login [TOKEN]                 Store an access token
    spot-dash logout                        Forget the stored token
    spot-dash dashboard                     Top artists and top tracks
    spot-dash playlist <playlist_id>        Playlist tracks and artist counts
    spot-dash artist-count <playlist_id>    Artist frequency for a playlist
    spot-dash sandbox top-artists|top-tracks  Print the raw first item

Usage:
    spot-dash login "BQD...token"
    spot-dash dashboard --limit 5 --time-range long_term
    spot-dash playlist 37i9dQZF1DXcBWIGoYBM5M

Configuration:
    Reads config.yaml from the current directory when present (see
    spot_dashboard.core.config). A .env file may define SPOTIFY_TOKEN,
    which login and sandbox use when no token is passed.

Exit codes:
    0 on success, 1 on any error, including a missing or expired session.
"""

import asyncio
import json
import os
from dataclasses import dataclass, field
from pathlib import Path

import rich_click as click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from spot_dashboard import __version__
from spot_dashboard.core import (
    Config,
    SpotDashboardError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spot_dashboard.session import (
    KEY_ACCESS_TOKEN,
    HistoryNavigator,
    JsonFileTokenStore,
    SessionGate,
    TokenStore,
)
from spot_dashboard.spotify import SpotifyApi, TimeRange
from spot_dashboard.stats import artist_count_for_playlist, top_artists
from spot_dashboard.views import EMPTY, DashboardView, PlaylistDetailView, playlist_route

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100

logger = get_logger(__name__)

TOKEN_ENV_VAR = "SPOTIFY_TOKEN"
TIME_RANGES = [r.value for r in TimeRange]


@dataclass
class AppContext:
    """Objects shared by all commands of one invocation."""

    config: Config
    store: TokenStore
    api: SpotifyApi
    navigator: HistoryNavigator = field(default_factory=HistoryNavigator)

    def gate(self) -> SessionGate:
        return SessionGate(self.store, self.navigator, login_path=self.config.session.login_path)


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config.yaml (default: ./config.yaml if present)."
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output.")
@click.version_option(__version__, prog_name="spot-dash")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Summaries of your Spotify listening data."""
    load_dotenv()
    try:
        config = load_config(config_path)
    except SpotDashboardError as e:
        raise click.ClickException(e.message) from e

    setup_logging(config.logging.directory, "DEBUG" if verbose else config.logging.level)
    ctx.call_on_close(shutdown_logging)

    ctx.obj = AppContext(
        config=config,
        store=JsonFileTokenStore(config.session.token_file),
        api=SpotifyApi(requests_timeout=config.spotify.requests_timeout),
    )


# =========================================================================
# Session Commands
# =========================================================================

@cli.command()
@click.argument("token", required=False)
@click.pass_obj
def login(app: AppContext, token: str | None) -> None:
    """Store an access TOKEN (defaults to $SPOTIFY_TOKEN)."""
    token = (token or os.environ.get(TOKEN_ENV_VAR, "")).strip()
    if not token:
        raise click.ClickException(
            f"No token given. Pass it as an argument or set {TOKEN_ENV_VAR}."
        )
    try:
        app.store.set(KEY_ACCESS_TOKEN, token)
    except SpotDashboardError as e:
        raise click.ClickException(e.message) from e
    click.echo(f"Token saved to {app.config.session.token_file}")


@cli.command()
@click.pass_obj
def logout(app: AppContext) -> None:
    """Forget the stored access token."""
    try:
        app.store.delete(KEY_ACCESS_TOKEN)
    except SpotDashboardError as e:
        raise click.ClickException(e.message) from e
    click.echo("Logged out.")


# =========================================================================
# Views
# =========================================================================

@cli.command()
@click.option("--limit", type=click.IntRange(1, 50), default=None,
              help="Items per list (default from config).")
@click.option("--time-range", type=click.Choice(TIME_RANGES), default=None,
              help="Affinity time frame (default from config).")
@click.pass_obj
def dashboard(app: AppContext, limit: int | None, time_range: str | None) -> None:
    """Show your top artists and top tracks."""
    view = DashboardView(
        app.gate(),
        app.api,
        app.navigator,
        limit=limit or app.config.dashboard.limit,
        time_range=TimeRange(time_range) if time_range else app.config.dashboard.time_range,
    )
    try:
        state = _run(view.activate())
    finally:
        view.close()

    _exit_if_redirected(app)
    if state.error:
        raise click.ClickException(state.error)

    console = Console()
    console.print("[bold]Dashboard[/bold]")
    artists = view.top_artists
    tracks = view.top_tracks
    if artists is EMPTY and tracks is EMPTY:
        console.print("No listening data yet.")
        return

    if artists is not EMPTY:
        table = Table(title="Top artists")
        table.add_column("#", justify="right")
        table.add_column("Artist")
        table.add_column("Genres")
        for position, artist in enumerate(artists, start=1):
            table.add_row(str(position), artist.name, artist.genres_str)
        console.print(table)

    if tracks is not EMPTY:
        table = Table(title="Top tracks")
        table.add_column("#", justify="right")
        table.add_column("Track")
        table.add_column("Artists")
        for position, track in enumerate(tracks, start=1):
            table.add_row(str(position), track.name, track.artist_names)
        console.print(table)


@cli.command()
@click.argument("playlist_id")
@click.option("--top", type=click.IntRange(min=1), default=10, show_default=True,
              help="Artists shown in the frequency table.")
@click.pass_obj
def playlist(app: AppContext, playlist_id: str, top: int) -> None:
    """Show the tracks of PLAYLIST_ID and its most frequent artists."""
    view = PlaylistDetailView(app.gate(), app.api, app.navigator)
    try:
        state = _run(view.activate(playlist_id))
    finally:
        view.close()

    _exit_if_redirected(app)
    if state.error:
        raise click.ClickException(state.error)

    detail = view.playlist
    console = Console()
    console.print(f"[bold]{detail.name}[/bold]")
    if detail.description:
        console.print(detail.description)
    if detail.spotify_url:
        console.print(f"Open in Spotify: {detail.spotify_url}")

    table = Table(title=f"Tracks ({detail.track_count} of {detail.total_tracks})")
    table.add_column("#", justify="right")
    table.add_column("Track")
    table.add_column("Artists")
    table.add_column("Length", justify="right")
    for position, track in enumerate(detail.tracks, start=1):
        table.add_row(str(position), track.name, track.artist_names, track.duration_str)
    console.print(table)

    if detail.artist_counts:
        console.print(_artist_count_table(detail.artist_counts, top))


@cli.command("artist-count")
@click.argument("playlist_id")
@click.option("--top", type=click.IntRange(min=1), default=None,
              help="Only show the N most frequent artists.")
@click.pass_obj
def artist_count(app: AppContext, playlist_id: str, top: int | None) -> None:
    """Count artist appearances in PLAYLIST_ID."""
    try:
        session = app.gate().activate(playlist_route(playlist_id))
    except SpotDashboardError as e:
        raise click.ClickException(e.message) from e
    _exit_if_redirected(app)

    counts = _run(artist_count_for_playlist(
        app.api,
        session.token,
        playlist_id,
        navigate=app.navigator,
        login_path=app.config.session.login_path,
    ))
    if counts is None:
        _exit_if_redirected(app)
        raise click.ClickException("Could not compute artist counts for this playlist.")
    if not counts:
        click.echo("No artists found.")
        return
    Console().print(_artist_count_table(counts, top))


# =========================================================================
# Manual API Sandbox
# =========================================================================

@cli.group()
def sandbox() -> None:
    """Call a Spotify endpoint directly and print the first item."""


def _sandbox_options(func):
    func = click.option("--time-range", type=click.Choice(TIME_RANGES),
                        default=TimeRange.SHORT_TERM.value, show_default=True)(func)
    func = click.option("--limit", type=click.IntRange(1, 50), default=10, show_default=True)(func)
    func = click.option("--token", envvar=TOKEN_ENV_VAR, default=None,
                        help=f"Access token (default: ${TOKEN_ENV_VAR}, then the stored token).")(func)
    return func


@sandbox.command("top-artists")
@_sandbox_options
@click.pass_obj
def sandbox_top_artists(app: AppContext, token: str | None, limit: int, time_range: str) -> None:
    """Fetch top artists and print the first one."""
    _run_sandbox(app, "artists", app.api.fetch_user_top_artists, token, limit, time_range)


@sandbox.command("top-tracks")
@_sandbox_options
@click.pass_obj
def sandbox_top_tracks(app: AppContext, token: str | None, limit: int, time_range: str) -> None:
    """Fetch top tracks and print the first one."""
    _run_sandbox(app, "tracks", app.api.fetch_user_top_tracks, token, limit, time_range)


def _run_sandbox(app: AppContext, kind: str, fetch, token: str | None, limit: int, time_range: str) -> None:
    token = token or app.store.get(KEY_ACCESS_TOKEN)
    if not token:
        raise click.ClickException(f"No token. Pass --token, set {TOKEN_ENV_VAR} or run 'spot-dash login'.")

    click.echo(f"Fetching top {kind}...")
    result = _run(fetch(token, limit, time_range), f"Failed to fetch top {kind}")

    if result.error:
        raise click.ClickException(f"API error: {result.error}")

    items = result.data.get("items") if isinstance(result.data, dict) else None
    if not isinstance(items, list) or not items:
        click.echo(f"No top {kind} returned.")
        return
    click.echo(f"First {kind[:-1]} object:")
    click.echo(json.dumps(items[0], indent=2))


# =========================================================================
# Helpers
# =========================================================================

def _run(coro, failure: str | None = None):
    """Run a coroutine to completion, turning any failure into a CLI error."""
    try:
        return asyncio.run(coro)
    except SpotDashboardError as e:
        message = f"{failure}: {e.message}" if failure else e.message
        raise click.ClickException(message) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e


def _exit_if_redirected(app: AppContext) -> None:
    if app.navigator.visited(app.config.session.login_path):
        raise click.ClickException(
            "Not logged in or the session expired. Run 'spot-dash login <token>'."
        )


def _artist_count_table(counts: dict[str, int], top: int | None) -> Table:
    table = Table(title="Artists")
    table.add_column("Artist")
    table.add_column("Tracks", justify="right")
    for name, count in top_artists(counts, top):
        table.add_row(name, str(count))
    return table


def main() -> None:
    """Entry point for the spot-dash console script."""
    cli()


if __name__ == "__main__":
    main()
