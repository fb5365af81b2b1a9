"""
Token-expiry classification.

Spotify reports a dead session as a regular API error whose message reads
"The access token expired". This module tells that case apart from every
other error so views can send the user back to login instead of showing
the message.
"""

from dataclasses import dataclass

from spot_dashboard.core.logger import get_logger
from spot_dashboard.session.navigation import LOGIN_PATH, Navigate

logger = get_logger(__name__)

TOKEN_EXPIRED_PHRASE = "access token expired"


@dataclass(frozen=True)
class TokenErrorClassification:
    is_expiry: bool


def classify(error: str | None) -> TokenErrorClassification:
    """Classify an error string; matching is a case-insensitive substring test."""
    if not error:
        return TokenErrorClassification(is_expiry=False)
    return TokenErrorClassification(is_expiry=TOKEN_EXPIRED_PHRASE in error.lower())


def is_token_expired(error: str | None) -> bool:
    return classify(error).is_expiry


def handle_token_error(error: str | None, navigate: Navigate, login_path: str = LOGIN_PATH) -> bool:
    """
    Redirect to login if the error means the access token expired.

    Args:
        error: Error string from a Result envelope.
        navigate: Navigation side effect.
        login_path: Where to send the user.

    Returns:
        True if the error was handled (the caller must not display it),
        False if the caller should surface the error itself.

    Note:
        Every call with an expiry error navigates. Callers decide how
        often to call this; the fetch orchestrator calls it at most once
        per settled run.
    """
    if not classify(error).is_expiry:
        return False
    logger.info("Access token expired, redirecting to login")
    navigate(login_path)
    return True
