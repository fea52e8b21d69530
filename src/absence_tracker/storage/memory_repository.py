from __future__ import annotations

import copy
import json
from typing import Any, Optional

from .repository import SETTINGS_KEY, TrackerRepository, entries_key


class InMemoryTrackerRepository(TrackerRepository):
    """Keeps serialized documents in a dict (tests and the ``memory`` backend)."""

    def __init__(self, documents: Optional[dict[str, str]] = None):
        self._documents: dict[str, str] = dict(documents or {})

    def _load(self, key: str) -> Optional[Any]:
        raw = self._documents.get(key)
        return json.loads(raw) if raw is not None else None

    def _save(self, key: str, payload: Any) -> None:
        self._documents[key] = json.dumps(payload)

    def load_entries(self, list_name: str) -> Optional[Any]:
        return self._load(entries_key(list_name))

    def save_entries(self, list_name: str, entries: list[dict]) -> None:
        self._save(entries_key(list_name), entries)

    def load_settings(self) -> Optional[Any]:
        return self._load(SETTINGS_KEY)

    def save_settings(self, settings: dict) -> None:
        self._save(SETTINGS_KEY, settings)

    def dump(self) -> dict[str, str]:
        return copy.deepcopy(self._documents)
