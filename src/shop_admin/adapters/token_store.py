"""Durable storage for the admin bearer token."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

TOKEN_KEY = "admin_token"

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Key-value storage holding the single bearer token key."""

    def get(self) -> str | None:
        """Return the persisted token, if any."""

    def set(self, token: str) -> None:
        """Persist the token."""

    def clear(self) -> None:
        """Remove the persisted token."""


@dataclass
class FileTokenStore(TokenStore):
    """Token store backed by a JSON file."""

    path: Path

    def get(self) -> str | None:
        """Read the token from disk."""
        data = self._read()
        token = data.get(TOKEN_KEY)
        if isinstance(token, str) and token:
            return token
        return None

    def set(self, token: str) -> None:
        """Write the token to disk, keeping other keys intact."""
        data = self._read()
        data[TOKEN_KEY] = token
        self._write(data)

    def clear(self) -> None:
        """Drop the token key from the file."""
        data = self._read()
        if TOKEN_KEY not in data:
            return
        data.pop(TOKEN_KEY)
        self._write(data)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable token store at %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)
