# backend/api/db/local_store.py
"""
On-device key-value storage for the client state.

Every backend stores plain strings under string keys (same contract as the
browser's localStorage), so the collection layer above decides the encoding.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

log = logging.getLogger(__name__)

STORE_BACKEND = os.getenv("OASIS_STORE_BACKEND", "file").strip().lower()
STORE_PATH = os.getenv("OASIS_STORE_PATH", str(Path.home() / ".oasis" / "state.json"))


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store. Lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore:
    """
    All keys live in one JSON object file: {"oasis-incidents": "[...]", ...}.
    Writes go to a temp file that is renamed over the original.
    """

    def __init__(self, path: str | os.PathLike = STORE_PATH):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            # unreadable or not UTF-8; the next write replaces it
            log.warning("State file %s could not be read (%s), treating it as empty", self.path, e)
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("State file %s is not valid JSON, treating it as empty", self.path)
            return {}
        if not isinstance(data, dict):
            log.warning("State file %s does not hold an object, treating it as empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(items), encoding="utf-8")
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)


def store_from_env() -> KeyValueStore:
    """Pick the backend named by OASIS_STORE_BACKEND (memory | file | dynamo)."""
    if STORE_BACKEND == "memory":
        return MemoryKeyValueStore()
    if STORE_BACKEND == "file":
        return JsonFileKeyValueStore(STORE_PATH)
    if STORE_BACKEND == "dynamo":
        from db.dynamo import DynamoKeyValueStore
        return DynamoKeyValueStore()
    raise ValueError(f"Unknown OASIS_STORE_BACKEND: {STORE_BACKEND!r}")
