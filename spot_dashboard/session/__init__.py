"""
Session handling for spot-dashboard.

Modules:
    store:        TokenStore protocol and implementations
    navigation:   Navigate callable type and HistoryNavigator
    token_errors: Token-expiry classifier and redirect helper
    gate:         SessionGate, the pre-fetch token check
"""

from spot_dashboard.session.gate import CHECKING, SessionGate, SessionPhase, SessionState
from spot_dashboard.session.navigation import LOGIN_PATH, HistoryNavigator, Navigate
from spot_dashboard.session.store import (
    KEY_ACCESS_TOKEN,
    JsonFileTokenStore,
    MemoryTokenStore,
    TokenStore,
)
from spot_dashboard.session.token_errors import (
    TOKEN_EXPIRED_PHRASE,
    TokenErrorClassification,
    classify,
    handle_token_error,
    is_token_expired,
)

__all__ = [
    "CHECKING",
    "SessionGate",
    "SessionPhase",
    "SessionState",
    "LOGIN_PATH",
    "HistoryNavigator",
    "Navigate",
    "KEY_ACCESS_TOKEN",
    "TokenStore",
    "MemoryTokenStore",
    "JsonFileTokenStore",
    "TOKEN_EXPIRED_PHRASE",
    "TokenErrorClassification",
    "classify",
    "handle_token_error",
    "is_token_expired",
]
