"""
Exception classes for spot-dashboard.

Exception Hierarchy:
    SpotDashboardError (base)
        ConfigError - Configuration file issues
        SessionError - Token store issues (writing or removing a token)
        SpotifyError - Spotify API transport issues

Note:
    Errors reported *by* Spotify (expired token, rate limiting, not found)
    are not exceptions here. They come back as Result.failure() envelopes
    so views can render them. SpotifyError is reserved for faults where no
    envelope could be produced, such as a dropped connection.
"""


class SpotDashboardError(Exception):
    """
    Base exception for all spot-dashboard errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., playlist id, path).

    Example:
        try:
            # some operation
        except SpotDashboardError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'playlist_id': Spotify playlist ID involved in the error
                     - 'file_path': File that caused the error
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotDashboardError):
    """
    Raised when there's an issue with the configuration file.

    Common causes:
        - Explicitly given config file not found
        - config.yaml has invalid YAML syntax
        - Invalid field values (e.g., limit outside 1-50, unknown time range)

    Example:
        raise ConfigError(
            "'dashboard.limit' must be an integer between 1 and 50",
            details={'field': 'dashboard.limit', 'value': 0}
        )
    """
    pass


class SessionError(SpotDashboardError):
    """
    Raised when the token store cannot be written.

    Reading a token never raises: an unreadable store is treated as
    "no token" so the session gate redirects to login.
    """
    pass


class SpotifyError(SpotDashboardError):
    """
    Raised when a Spotify API call fails before Spotify could answer.

    Common causes:
        - Network connectivity issues
        - Request timeout
    """
    pass
