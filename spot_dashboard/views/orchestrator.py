"""
Concurrent fetch orchestration for views.

A view needs several independent Spotify calls before it can render. The
FetchOrchestrator issues them together once the session gate has produced
a token, and commits one derived state when they have all settled:

    loading=True, error=None      (deferred, right after the run starts)
    ... all operations run concurrently ...
    error=<first failure> | results populated, loading=False

Rules:
    - First error wins, by declaration order of the operations (not by
      which one failed first in time), so identical runs give identical
      states.
    - A raised exception is a transport fault; its message is used as is.
    - A Result with an error is a domain error. Every domain error goes
      through the token error classifier before anything is shown. If any
      of them is an expired token, the run navigates to login once and
      shows no error.
    - A projection that raises on a malformed payload fails the run like
      any other error. A cancelled operation counts as a failure too.
    - When anything failed, no result slot is populated, and loading is
      always cleared.
    - Liveness: every run owns a LivenessGuard. teardown(), or starting a
      new run, invalidates it, and from then on that run's continuations
      commit nothing. The underlying calls still finish; their results are
      dropped.

Usage:
    orchestrator = FetchOrchestrator(navigate)
    state = await orchestrator.run(session, [
        FetchOperation("top_artists", lambda t: api.fetch_user_top_artists(t, 5), all_items),
    ])
    ...
    orchestrator.teardown()
"""

import asyncio
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Sequence

from spot_dashboard.core.logger import get_logger
from spot_dashboard.session.gate import SessionState
from spot_dashboard.session.navigation import LOGIN_PATH, Navigate
from spot_dashboard.session.token_errors import handle_token_error, is_token_expired
from spot_dashboard.spotify.result import Result

logger = get_logger(__name__)


class Sentinel(Enum):
    """Marker for a result slot whose list came back absent or empty."""
    EMPTY = "empty"

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


EMPTY = Sentinel.EMPTY


def identity(data: Any) -> Any:
    return data


def all_items(data: Any, convert: Callable[[Any], Any] = identity) -> Any:
    """
    Project a paging object to a tuple of its item objects, or EMPTY.

    Null or non-object entries in the items list are skipped.
    """
    items = data.get("items") if isinstance(data, Mapping) else None
    if not isinstance(items, list):
        return EMPTY
    objects = [item for item in items if isinstance(item, Mapping)]
    if not objects:
        return EMPTY
    return tuple(convert(item) for item in objects)


def first_item(data: Any, convert: Callable[[Any], Any] = identity) -> Any:
    """Project a paging object to its first item, or EMPTY."""
    items = all_items(data)
    if items is EMPTY:
        return EMPTY
    return convert(items[0])


@dataclass(frozen=True)
class FetchOperation:
    """
    One named fetch of a view.

    Attributes:
        name: Result slot the projected data is stored under.
        fetch: Coroutine function called with the bearer token; returns a
               Result or raises.
        project: Maps the success payload to the slot value.
    """

    name: str
    fetch: Callable[[str], Awaitable[Result[Any]]]
    project: Callable[[Any], Any] = identity


@dataclass(frozen=True)
class FetchState:
    """
    Per-view fetch lifecycle state.

    Attributes:
        loading: True while a run is in flight; results are not final.
        error: The single error message to show, or None.
        results: Slot name -> projected data. Only populated by a run in
                 which no operation failed.
    """

    loading: bool = False
    error: str | None = None
    results: Mapping[str, Any] = field(default_factory=dict)


class LivenessGuard:
    """
    Cooperative guard owned by one run.

    Not a lock: the event loop is single-threaded, the guard only stops
    continuations of a finished activation from writing state.
    """

    __slots__ = ("_alive",)

    def __init__(self) -> None:
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def invalidate(self) -> None:
        self._alive = False


class FetchOrchestrator:
    """
    Runs a view's fetch operations and owns its FetchState.

    Attributes:
        login_path: Navigation target for expired tokens.
    """

    def __init__(self, navigate: Navigate, login_path: str = LOGIN_PATH) -> None:
        self._navigate = navigate
        self.login_path = login_path
        self._state = FetchState()
        self._guard: LivenessGuard | None = None
        # Guard of the run whose start has not been committed yet
        self._pending: LivenessGuard | None = None

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def active(self) -> bool:
        return self._guard is not None and self._guard.alive

    async def run(self, session: SessionState, operations: Sequence[FetchOperation]) -> FetchState:
        """
        Issue all operations concurrently and commit the settled state.

        Args:
            session: State from the session gate. Nothing is fetched while
                     it is checking or carries no token.
            operations: Operations in declaration order.

        Returns:
            The orchestrator's state after this run settled. If the run was
            torn down meanwhile, this is whatever state was last committed.
        """
        if session.checking or not session.token:
            return self._state

        names = [op.name for op in operations]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate operation names: {names}")

        guard = self._begin()
        token = session.token
        asyncio.get_running_loop().call_soon(self._commit_start, guard)

        logger.debug(f"Fetching {', '.join(names)}")
        tasks = [asyncio.ensure_future(_invoke(op, token)) for op in operations]
        try:
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.CancelledError:
            # The run itself was cancelled; gather() cancels the operations
            self._finish(guard)
            raise

        self._settle(guard, operations, outcomes)
        return self._state

    def teardown(self) -> None:
        """End the current activation; pending results will be discarded."""
        if self._guard is not None:
            self._guard.invalidate()
            self._guard = None

    # =========================================================================
    # Commits
    # =========================================================================

    def _begin(self) -> LivenessGuard:
        self.teardown()
        self._guard = LivenessGuard()
        self._pending = self._guard
        return self._guard

    def _commit_start(self, guard: LivenessGuard) -> None:
        # Skipped if the run already settled (nothing to await) or was torn down
        if guard.alive and self._pending is guard:
            self._state = replace(self._state, loading=True, error=None)

    def _finish(self, guard: LivenessGuard) -> None:
        # Ends a run that produced no outcome to show
        if guard.alive:
            self._pending = None
            self._state = replace(self._state, loading=False)

    def _settle(
        self,
        guard: LivenessGuard,
        operations: Sequence[FetchOperation],
        outcomes: Sequence[Any]
    ) -> None:
        # gather(return_exceptions=True) also hands back KeyboardInterrupt & co.
        fatal = next((o for o in outcomes if _is_fatal(o)), None)
        if fatal is not None:
            self._finish(guard)
            raise fatal

        if not guard.alive:
            logger.debug("View torn down before fetch settled; discarding results")
            return

        self._pending = None
        error = _first_error(outcomes)
        if error is None:
            results, error = _project(operations, outcomes)
            if error is None:
                self._state = FetchState(loading=False, error=None, results=results)
                logger.debug(f"Fetched {', '.join(results)}")
                return

        expired = _first_expiry(outcomes)
        if expired is not None and handle_token_error(expired, self._navigate, self.login_path):
            error = None
        else:
            logger.warning(f"Fetch failed: {error}")
        self._state = replace(self._state, loading=False, error=error)


async def _invoke(operation: FetchOperation, token: str) -> Any:
    return await operation.fetch(token)


def _first_error(outcomes: Sequence[Any]) -> str | None:
    """First failure in declaration order, as the message to show."""
    for outcome in outcomes:
        if isinstance(outcome, asyncio.CancelledError):
            return "Request cancelled"
        if isinstance(outcome, Exception):
            return str(outcome) or type(outcome).__name__
        if not isinstance(outcome, Result):
            return f"Unexpected fetch result: {outcome!r}"
        if outcome.error is not None:
            return outcome.error
    return None


def _first_expiry(outcomes: Sequence[Any]) -> str | None:
    # Only domain errors are classified; raised faults are shown verbatim
    for outcome in outcomes:
        if isinstance(outcome, Result) and is_token_expired(outcome.error):
            return outcome.error
    return None


def _is_fatal(outcome: Any) -> bool:
    return (
        isinstance(outcome, BaseException)
        and not isinstance(outcome, (Exception, asyncio.CancelledError))
    )


def _project(
    operations: Sequence[FetchOperation],
    outcomes: Sequence[Any]
) -> tuple[dict[str, Any], str | None]:
    """Apply every projection; a projection that raises fails the whole run."""
    results = {}
    for op, outcome in zip(operations, outcomes):
        try:
            results[op.name] = op.project(outcome.data)
        except Exception as e:
            logger.debug(f"Projection of {op.name} failed", exc_info=True)
            return {}, f"Unexpected response for {op.name}: {e}"
    return results, None
