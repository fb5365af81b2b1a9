"""
Core module for spot-dashboard.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - logger: Logging system with console and file outputs
    - config: Configuration loading and validation

Usage:
    from spot_dashboard.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotDashboardError, ConfigError
    )
"""

from spot_dashboard.core.exceptions import (
    ConfigError,
    SessionError,
    SpotDashboardError,
    SpotifyError,
)
from spot_dashboard.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)
from spot_dashboard.core.config import (
    Config,
    DashboardConfig,
    LoggingConfig,
    SessionConfig,
    SpotifyConfig,
    default_config,
    load_config,
)

__all__ = [
    # Config
    "Config",
    "SessionConfig",
    "DashboardConfig",
    "SpotifyConfig",
    "LoggingConfig",
    "default_config",
    "load_config",
    # Exceptions
    "SpotDashboardError",
    "ConfigError",
    "SessionError",
    "SpotifyError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
