"""
Result envelope returned by every Spotify fetch operation.

A settled call produces either a success envelope carrying a payload or a
failure envelope carrying a human-readable error string, never both.
Calls may additionally raise (transport fault); see SpotifyError.

Usage:
    result = await api.fetch_playlist_by_id(token, playlist_id)
    if result.error:
        ...
    playlist = result.data
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Normalized success/failure wrapper.

    Attributes:
        data: The payload of a successful call, None on failure.
        error: Error description of a failed call, None on success.

    Raises:
        ValueError: On construction, unless exactly one of data/error is set.
    """

    data: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("Result requires exactly one of 'data' or 'error'")

    @classmethod
    def success(cls, data: T) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: str) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
