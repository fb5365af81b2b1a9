"""
Session gate: decides whether a view may fetch data.

Before a view fetches anything it asks the gate for the session state. The
gate reads the persisted access token from an injected TokenStore:

    CHECKING         -> lookup not done yet; the view shows nothing
    UNAUTHENTICATED  -> no usable token; the gate has navigated to login
                        and the view must not fetch
    AUTHENTICATED    -> token available; the view may fetch with it

The token is opaque: the gate never inspects it, only forwards it.

Usage:
    gate = SessionGate(JsonFileTokenStore(path), navigator)
    session = gate.activate("/dashboard")
    if session.authenticated:
        ...
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable

from spot_dashboard.core.logger import get_logger
from spot_dashboard.session.navigation import LOGIN_PATH, Navigate
from spot_dashboard.session.store import KEY_ACCESS_TOKEN, TokenStore

logger = get_logger(__name__)


class SessionPhase(Enum):
    CHECKING = "checking"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class SessionState:
    """
    Result of a session check.

    Attributes:
        phase: Current SessionPhase.
        token: The bearer token; only set when AUTHENTICATED.
    """

    phase: SessionPhase
    token: str | None = None

    @property
    def checking(self) -> bool:
        return self.phase is SessionPhase.CHECKING

    @property
    def authenticated(self) -> bool:
        return self.phase is SessionPhase.AUTHENTICATED and bool(self.token)


CHECKING = SessionState(SessionPhase.CHECKING)


class SessionGate:
    """
    Stateful token check, one instance per view activation.

    Attributes:
        login_path: Navigation target when no token is available.
        token_key: Key the token is stored under.
    """

    def __init__(
        self,
        store: TokenStore,
        navigate: Navigate,
        login_path: str = LOGIN_PATH,
        token_key: str = KEY_ACCESS_TOKEN
    ) -> None:
        self._store = store
        self._navigate = navigate
        self.login_path = login_path
        self.token_key = token_key
        self._state = CHECKING
        self._route_key: Hashable | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    def activate(self, route_key: Hashable | None = None) -> SessionState:
        """
        Evaluate the session for the given route.

        Args:
            route_key: Identifier of the route being shown (e.g. its path).
                       Repeated calls with the same key return the current
                       state without a second lookup or redirect.

        Returns:
            The new SessionState (never CHECKING).

        Behavior:
            1. Same route as the last evaluation -> return current state
            2. Look up the token in the store
            3. Non-empty token -> AUTHENTICATED (a replaced token is picked up)
            4. No token, but already AUTHENTICATED -> keep the current
               state; a dead token is caught by the token error classifier
            5. No token otherwise -> UNAUTHENTICATED and navigate to login
        """
        if not self._state.checking and route_key == self._route_key:
            return self._state
        self._route_key = route_key

        token = self._store.get(self.token_key)
        if token:
            self._state = SessionState(SessionPhase.AUTHENTICATED, token)
        elif self._state.authenticated:
            logger.debug(f"Token no longer in store on route {route_key!r}; keeping session")
        else:
            self._state = SessionState(SessionPhase.UNAUTHENTICATED)
            logger.info("No access token found, redirecting to login")
            self._navigate(self.login_path)
        return self._state

    def reset(self) -> None:
        """End the activation; the next activate() starts from CHECKING."""
        self._state = CHECKING
        self._route_key = None
