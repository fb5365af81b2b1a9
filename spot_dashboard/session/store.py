"""
Token stores: where the persisted bearer token lives.

The session gate only needs get(); the CLI's login/logout commands also use
set() and delete().

Implementations:
    MemoryTokenStore: dict-backed, used by tests and embedding callers
    JsonFileTokenStore: a small JSON file, readable only by the owner
"""

import json
import os
from pathlib import Path
from typing import Protocol

from spot_dashboard.core.exceptions import SessionError
from spot_dashboard.core.logger import get_logger

logger = get_logger(__name__)

KEY_ACCESS_TOKEN = "access_token"


class TokenStore(Protocol):
    """Key-value store holding the access token."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryTokenStore:
    """In-memory token store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileTokenStore:
    """
    Token store persisted as a flat JSON object.

    Reads never raise: a missing, unreadable or corrupted file counts as
    "no token" so the session gate sends the user to login. Writes raise
    SessionError.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._save(values)

    def delete(self, key: str) -> None:
        values = self._load()
        if values.pop(key, None) is not None:
            self._save(values)

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read token file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring token file with unexpected structure: {self.path}")
            return {}
        return data

    def _save(self, values: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2)
            # Owner read/write only; not supported on every platform
            if os.name != "nt":
                self.path.chmod(0o600)
        except OSError as e:
            raise SessionError(
                f"Failed to write token file: {e}",
                details={"file_path": str(self.path), "original_error": str(e)}
            ) from e
