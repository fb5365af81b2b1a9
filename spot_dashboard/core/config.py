"""
Configuration management for spot-dashboard.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Where the access token is stored and where login redirects point
    - Default limit and time range for the dashboard
    - Spotify request timeout
    - Optional log directory and console log level

Every section and field is optional; missing values fall back to defaults.

Example config.yaml:
    session:
      token_file: "~/.spot-dashboard/token.json"
      login_path: "/login"

    dashboard:
      limit: 1
      time_range: short_term   # short_term | medium_term | long_term

    spotify:
      requests_timeout: 10

    logging:
      directory: null          # e.g. "~/.spot-dashboard/logs"
      level: INFO
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from spot_dashboard.core.exceptions import ConfigError
from spot_dashboard.spotify.models import TimeRange


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_TOKEN_FILE = "~/.spot-dashboard/token.json"
DEFAULT_LOGIN_PATH = "/login"
DEFAULT_LIMIT = 1
MAX_LIMIT = 50
DEFAULT_REQUESTS_TIMEOUT = 10.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SessionConfig:
    """
    Session configuration.

    Attributes:
        token_file: Absolute path of the JSON file holding the access token.
        login_path: Navigation target used when the session is missing or expired.
    """
    token_file: Path
    login_path: str


@dataclass(frozen=True)
class DashboardConfig:
    """
    Dashboard defaults.

    Attributes:
        limit: Number of top artists/tracks to request (1-50).
        time_range: Spotify affinity time frame.
    """
    limit: int
    time_range: TimeRange


@dataclass(frozen=True)
class SpotifyConfig:
    """Spotify Web API request settings."""
    requests_timeout: float


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging configuration.

    Attributes:
        directory: Directory for log files, or None for console-only logging.
        level: Console log level name.
    """
    directory: Path | None
    level: str


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable (frozen dataclass).
    """
    session: SessionConfig
    dashboard: DashboardConfig
    spotify: SpotifyConfig
    logging: LoggingConfig


def default_config() -> Config:
    """Return the configuration used when no config.yaml exists."""
    return _build_config({})


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory
                     and falls back to defaults when it is not there.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, has invalid YAML
                     syntax, or contains invalid values.

    Example:
        try:
            config = load_config()
        except ConfigError as e:
            print(f"Configuration error: {e.message}")
            sys.exit(1)
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        if explicit:
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        return default_config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file parses to None
    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return _build_config(raw_config)


def _build_config(raw_config: dict[str, Any]) -> Config:
    return Config(
        session=_parse_session_config(_section(raw_config, "session")),
        dashboard=_parse_dashboard_config(_section(raw_config, "dashboard")),
        spotify=_parse_spotify_config(_section(raw_config, "spotify")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _parse_session_config(section: dict[str, Any]) -> SessionConfig:
    token_file = section.get("token_file", DEFAULT_TOKEN_FILE)
    if not isinstance(token_file, str) or not token_file.strip():
        raise ConfigError(
            "'session.token_file' must be a non-empty string",
            details={"field": "session.token_file"}
        )

    login_path = section.get("login_path", DEFAULT_LOGIN_PATH)
    if not isinstance(login_path, str) or not login_path.startswith("/"):
        raise ConfigError(
            "'session.login_path' must be a path starting with '/'",
            details={"field": "session.login_path", "value": login_path}
        )

    return SessionConfig(
        token_file=Path(token_file.strip()).expanduser().resolve(),
        login_path=login_path
    )


def _parse_dashboard_config(section: dict[str, Any]) -> DashboardConfig:
    limit = section.get("limit", DEFAULT_LIMIT)
    # bool is an int subclass; reject it explicitly
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
        raise ConfigError(
            f"'dashboard.limit' must be an integer between 1 and {MAX_LIMIT}",
            details={"field": "dashboard.limit", "value": limit}
        )

    raw_range = section.get("time_range", TimeRange.SHORT_TERM.value)
    try:
        time_range = TimeRange(raw_range)
    except ValueError as e:
        raise ConfigError(
            f"'dashboard.time_range' must be one of: "
            f"{', '.join(r.value for r in TimeRange)}",
            details={"field": "dashboard.time_range", "value": raw_range}
        ) from e

    return DashboardConfig(limit=limit, time_range=time_range)


def _parse_spotify_config(section: dict[str, Any]) -> SpotifyConfig:
    timeout = section.get("requests_timeout", DEFAULT_REQUESTS_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'spotify.requests_timeout' must be a positive number",
            details={"field": "spotify.requests_timeout", "value": timeout}
        )
    return SpotifyConfig(requests_timeout=float(timeout))


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    directory = section.get("directory")
    log_dir = None
    if directory is not None:
        if not isinstance(directory, str) or not directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string or null",
                details={"field": "logging.directory"}
            )
        log_dir = Path(directory.strip()).expanduser().resolve()

    level = section.get("level", "INFO")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of: {', '.join(LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    return LoggingConfig(directory=log_dir, level=level.upper())
