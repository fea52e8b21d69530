from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

import pydantic

from ..common.validators import to_number
from ..core.constants import STATE_VERSION
from ..core.enums import EntryList
from ..core.exceptions import ImportPayloadError
from ..entries.normalizer import normalize_list
from ..settings.service import merge_settings
from ..tracker.model import AccountingState
from ..tracker.service import TrackerService
from .schemas import ImportEnvelope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSummary:
    counts: dict[str, int]
    settings_applied: bool

    def to_dict(self) -> dict:
        return {"counts": dict(self.counts), "settings_applied": self.settings_applied}


class TransferService:
    """Backup export and import of the whole tracker state."""

    def __init__(self, tracker: TrackerService):
        self._tracker = tracker

    def export_payload(self, *, now: Optional[datetime] = None) -> dict:
        now = now or self._tracker.now()
        state = self._tracker.state
        payload: dict[str, Any] = {
            "exportedAt": now.isoformat(timespec="seconds"),
            "version": state.version,
            "settings": state.settings.to_dict(),
        }
        for kind in EntryList:
            payload[kind.value] = [e.to_dict() for e in state.entries(kind)]
        return payload

    def export_json(self, *, now: Optional[datetime] = None) -> str:
        return json.dumps(self.export_payload(now=now), indent=2, ensure_ascii=False)

    def export_filename(self, *, now: Optional[datetime] = None) -> str:
        now = now or self._tracker.now()
        return f"absence-backup-{now.strftime('%Y-%m-%d')}.json"

    @staticmethod
    def _parse(raw: Union[str, bytes, Mapping]) -> ImportEnvelope:
        try:
            data = raw if isinstance(raw, Mapping) else json.loads(raw)
        except (TypeError, ValueError) as e:
            raise ImportPayloadError("Import failed: the file is not valid JSON.") from e

        if not isinstance(data, Mapping):
            raise ImportPayloadError("Import failed: expected a JSON object from an export.")

        try:
            return ImportEnvelope.model_validate(dict(data))
        except pydantic.ValidationError as e:
            raise ImportPayloadError("Import failed: the file does not look like an export.") from e

    def import_payload(self, raw: Union[str, bytes, Mapping]) -> ImportSummary:
        """Replace all lists (and present settings) with the payload.

        The new state is fully built before it is swapped in; a bad payload leaves
        the current state untouched.
        """

        try:
            envelope = self._parse(raw)
        except ImportPayloadError:
            logger.warning("Import rejected: malformed payload")
            raise

        current = self._tracker.state
        settings = current.settings
        if envelope.settings is not None:
            settings = merge_settings(current.settings, envelope.settings)

        version = to_number(envelope.version)
        state = AccountingState(settings=settings, version=int(version) if version else STATE_VERSION)
        for kind in EntryList:
            state.set_entries(kind, normalize_list(kind, getattr(envelope, kind.value) or []))

        self._tracker.replace_state(state)
        summary = ImportSummary(
            counts={kind.value: len(state.entries(kind)) for kind in EntryList},
            settings_applied=envelope.settings is not None,
        )
        logger.info("Import OK: %s", summary.counts)
        return summary
