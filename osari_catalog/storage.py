"""Key/value storage used for the cart, drafts and the product cache.

Values are opaque strings. Callers that store JSON go through
:func:`read_json` and :func:`write_json`, which treat unreadable values as
absent instead of raising.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageUnavailable(RuntimeError):
    """Raised by a storage backend that cannot be read or written."""


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Storage scoped to the lifetime of the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class JsonFileStorage:
    """Storage persisted as a single JSON object on disk.

    Every call reads the whole file and every write rewrites it. Two processes
    sharing a file race and the last writer wins.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def _read(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageUnavailable(f"Cannot read {self.path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable state file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, items: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(items, handle, indent=2)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write {self.path}: {exc}") from exc


def read_json(storage: Storage, key: str, default: Any = None) -> Any:
    """Return the decoded value stored under ``key`` or ``default``.

    Missing and corrupt values both yield ``default``; corruption is logged.
    """

    raw = storage.get_item(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Discarding corrupt value stored under %r", key)
        return default


def write_json(storage: Storage, key: str, value: Any) -> None:
    storage.set_item(key, json.dumps(value))
