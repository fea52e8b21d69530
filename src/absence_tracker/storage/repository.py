from __future__ import annotations

from typing import Any, Optional, Protocol

ENTRIES_KEY_PREFIX = "absence_tracker_v1"
SETTINGS_KEY = "absence_tracker_settings_v1"


def entries_key(list_name: str) -> str:
    return f"{ENTRIES_KEY_PREFIX}:{list_name}"


class TrackerRepository(Protocol):
    """Raw JSON-compatible storage. ``None`` from a load means nothing stored yet."""

    def load_entries(self, list_name: str) -> Optional[Any]:
        raise NotImplementedError

    def save_entries(self, list_name: str, entries: list[dict]) -> None:
        raise NotImplementedError

    def load_settings(self) -> Optional[Any]:
        raise NotImplementedError

    def save_settings(self, settings: dict) -> None:
        raise NotImplementedError
