"""Navigation side effect used by the session gate and the token error classifier."""

from typing import Callable

Navigate = Callable[[str], None]

LOGIN_PATH = "/login"


class HistoryNavigator:
    """
    Navigator that records every path it is sent to.

    Instances are callable, so they can be passed wherever a Navigate is
    expected.
    """

    def __init__(self) -> None:
        self.history: list[str] = []

    def __call__(self, path: str) -> None:
        self.history.append(path)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None

    def visited(self, path: str) -> bool:
        return path in self.history
