"""
Durable storage for the auth session.

``FileStorage`` keeps a small JSON object on disk that maps keys to string
values, the way a browser's localStorage does for one origin.
``PersistedStore`` owns one key in it and mirrors the session triple
(user, token, isAuthenticated) there.

Storage failures never propagate: losing persistence only costs the user
a re-login.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from propdesk.logger import get_logger
from propdesk.session.models import PersistedSession

logger = get_logger(__name__)


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process key-value slot. Contents die with the object."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage:
    """Key-value slot backed by a JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed storage file {self.path}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=".storage-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key not in items:
            return
        del items[key]
        self._save(items)


class PersistedStore:
    """Reads and writes the session triple under a single storage key."""

    def __init__(self, storage: Storage, key: str = "auth-storage"):
        self.storage = storage
        self.key = key

    def write(self, session: PersistedSession) -> None:
        """Overwrite the stored triple. Failures are logged, not raised."""
        try:
            self.storage.set_item(self.key, json.dumps(session.to_dict()))
        except Exception as e:
            logger.warning(f"Failed to persist session under '{self.key}': {e}")

    def read(self) -> Optional[PersistedSession]:
        """Return the stored triple, or None if absent or unusable."""
        try:
            raw = self.storage.get_item(self.key)
        except Exception as e:
            logger.warning(f"Failed to read persisted session '{self.key}': {e}")
            return None

        if raw is None:
            return None

        try:
            return PersistedSession.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Discarding corrupt persisted session '{self.key}': {e}")
            return None

    def clear(self) -> None:
        """Remove the stored triple. Safe to call when nothing is stored."""
        try:
            self.storage.remove_item(self.key)
        except Exception as e:
            logger.warning(f"Failed to clear persisted session '{self.key}': {e}")
