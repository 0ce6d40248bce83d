"""Durable access-token storage and the session oracle derived from it."""

import json
import logging
from pathlib import Path

from contactbook.application.ports import TokenStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "accessToken"


class FileTokenStore:
    """Single JSON file holding {"accessToken": ...}. Survives process restarts."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            obj = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable token file %s: %s", self._path, exc)
            return None
        token = obj.get(TOKEN_KEY) if isinstance(obj, dict) else None
        return str(token) if token else None

    def save(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({TOKEN_KEY: token}), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class InMemoryTokenStore:
    """Token kept for the lifetime of the object only."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class TokenSessionOracle:
    """Authenticated iff a token is present. No expiry check."""

    def __init__(self, tokens: TokenStore) -> None:
        self._tokens = tokens

    def is_authenticated(self) -> bool:
        return bool(self._tokens.load())
