# backend/api/services/persistence.py
from __future__ import annotations

import json
import logging
from typing import List, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from db.local_store import KeyValueStore

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class CollectionStore:
    """
    Reads/writes whole collections as JSON arrays under one key each.
    Holds no copy of its own: every save overwrites the entry wholesale.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, key: str, model: Type[M], default: Sequence[M]) -> List[M]:
        """
        Return the stored collection, or a copy of `default` when the entry is
        missing, unreadable, or fails validation. Never raises.
        """
        try:
            raw = self.store.get_item(key)
        except Exception:
            log.warning("Could not read %s from storage, using defaults", key, exc_info=True)
            return _copy_all(default)

        if raw is None:
            return _copy_all(default)

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return TypeAdapter(List[model]).validate_python(data)
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            log.warning("Ignoring malformed %s in storage: %s", key, e)
            return _copy_all(default)

    def save(self, key: str, records: Sequence[BaseModel]) -> None:
        payload = [r.model_dump(mode="json") for r in records]
        self.store.set_item(key, json.dumps(payload))

    def remove(self, key: str) -> None:
        self.store.remove_item(key)


def _copy_all(records: Sequence[M]) -> List[M]:
    return [r.model_copy(deep=True) for r in records]
