from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import STATE_VERSION
from ..core.enums import EntryList
from ..entries.model import AbsenceEntry, Entry, TimeEntry
from ..settings.model import Settings


@dataclass
class AccountingState:
    """Entry lists and settings of the single tracked person.

    Owned by one TrackerService; every write goes through its mutation methods.
    """

    settings: Settings = field(default_factory=Settings)
    holidays: list[AbsenceEntry] = field(default_factory=list)
    sickness: list[AbsenceEntry] = field(default_factory=list)
    childcare: list[AbsenceEntry] = field(default_factory=list)
    overtimes: list[TimeEntry] = field(default_factory=list)
    hours: list[TimeEntry] = field(default_factory=list)
    version: int = STATE_VERSION

    def entries(self, kind: EntryList) -> list[Entry]:
        return getattr(self, kind.value)

    def set_entries(self, kind: EntryList, entries: list[Entry]) -> None:
        setattr(self, kind.value, list(entries))

    def sorted_entries(self, kind: EntryList) -> list[Entry]:
        return sorted(self.entries(kind), key=lambda e: e.entry_date)

    def find(self, kind: EntryList, entry_id: int) -> Optional[Entry]:
        return next((e for e in self.entries(kind) if e.entry_id == entry_id), None)
