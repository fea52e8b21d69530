from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import DateLike, current_periods, minutes_from_hhmm, now_local, to_iso, try_parse_iso_date
from ..common.formatting import format_date_with_weekday, format_days, format_hours_minutes
from ..common.validators import coerce_text, round_half_up, to_number
from ..core.enums import AddOutcome, EntryList
from ..core.exceptions import ValidationError
from ..entries.guard import AddResult, add_range, add_single, holidays_taken
from ..entries.model import AbsenceEntry, Entry, TimeEntry, day_type_for
from ..entries.normalizer import normalize_list
from ..payroll.service import PeriodAggregator, PeriodTotals, WeekBucket
from ..settings.model import Settings
from ..settings.service import merge_settings, settings_from_raw
from ..storage.repository import TrackerRepository
from .model import AccountingState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HolidaySummary:
    limit: float
    taken: float

    @property
    def left(self) -> float:
        return self.limit - self.taken

    def to_dict(self) -> dict:
        return {
            "limit": self.limit,
            "taken": self.taken,
            "left": self.left,
            "taken_label": format_days(self.taken),
            "left_label": format_days(self.left),
        }


@dataclass(frozen=True)
class AbsenceSummary:
    count: int
    total_days: float
    last_date: Optional[date]

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "total_days": self.total_days,
            "total_days_label": format_days(self.total_days),
            "last_date": to_iso(self.last_date) if self.last_date else None,
            "last_date_label": format_date_with_weekday(self.last_date),
        }


class TrackerService:
    """Owns the AccountingState; the only place entries and settings are changed."""

    def __init__(
        self,
        repository: TrackerRepository,
        *,
        aggregator: Optional[PeriodAggregator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._repository = repository
        self._aggregator = aggregator or PeriodAggregator()
        self._clock = clock
        self._state = AccountingState()
        self._lock = threading.Lock()

    @property
    def state(self) -> AccountingState:
        return self._state

    @property
    def settings(self) -> Settings:
        return self._state.settings

    @property
    def aggregator(self) -> PeriodAggregator:
        return self._aggregator

    def now(self) -> datetime:
        return self._clock()

    # ----- persistence -----

    def load(self) -> AccountingState:
        state = AccountingState(settings=settings_from_raw(self._repository.load_settings()))
        for kind in EntryList:
            state.set_entries(kind, normalize_list(kind, self._repository.load_entries(kind.value)))
        with self._lock:
            self._state = state
        logger.debug("Loaded state: %s", {k.value: len(state.entries(k)) for k in EntryList})
        return state

    def _commit_list(self, kind: EntryList, entries: list[Entry]) -> None:
        # Storage first; the live list only changes once the save went through.
        self._repository.save_entries(kind.value, [e.to_dict() for e in entries])
        self._state.set_entries(kind, entries)

    def _save_state(self, state: AccountingState) -> None:
        self._repository.save_settings(state.settings.to_dict())
        for kind in EntryList:
            self._repository.save_entries(kind.value, [e.to_dict() for e in state.entries(kind)])

    def replace_state(self, state: AccountingState) -> None:
        """Persist every document of a fully built state (import, reset), then swap it in.

        If a save fails the documents of the previous state are written back and the
        error propagates; the live state is unchanged.
        """

        with self._lock:
            previous = self._state
            try:
                self._save_state(state)
            except Exception:
                logger.exception("Saving the new state failed, restoring stored documents")
                self._save_state(previous)
                raise
            self._state = state

    # ----- writes -----

    def _build_entry(self, kind: EntryList, entry_date: date, fields: Mapping) -> Entry:
        note = coerce_text(fields.get("note")).strip()

        if kind.is_absence:
            day_value = to_number(fields.get("dayValue", 1))
            if day_value is None or day_value <= 0:
                raise ValidationError("Day value must be a positive number (1 or 0.5).")
            return AbsenceEntry(
                entry_id=0,
                entry_date=entry_date,
                day_value=day_value,
                day_type=day_type_for(day_value),
                note=note,
                cert=coerce_text(fields.get("cert")).strip(),
                contact=coerce_text(fields.get("contact")).strip(),
                child=coerce_text(fields.get("child")).strip(),
                reason=coerce_text(fields.get("reason")).strip(),
            )

        if "minutes" in fields:
            minutes = to_number(fields.get("minutes"))
            if minutes is None or minutes < 0:
                raise ValidationError("Invalid time.")
            minutes = round_half_up(minutes)
        else:
            minutes = minutes_from_hhmm(fields.get("hours"), fields.get("mins"))

        multiplier = 1.0
        if kind.is_overtime:
            if minutes <= 0:
                raise ValidationError("Overtime must be longer than 0 minutes.")
            multiplier = to_number(fields.get("multiplier", 1))
            if multiplier is None or multiplier < 1:
                raise ValidationError("Multiplier must be >= 1.")

        return TimeEntry(entry_id=0, entry_date=entry_date, minutes=minutes, multiplier=multiplier, note=note)

    def _holidays_limit(self, kind: EntryList) -> Optional[float]:
        return self._state.settings.holidays_limit if kind is EntryList.HOLIDAYS else None

    def add_entry(self, kind: EntryList, entry_date: DateLike, fields: Optional[Mapping] = None) -> AddResult:
        parsed = try_parse_iso_date(entry_date)
        if parsed is None:
            return AddResult(AddOutcome.INVALID_INPUT, "Pick a date.")
        try:
            entry = self._build_entry(kind, parsed, fields or {})
        except ValidationError as e:
            return AddResult(AddOutcome.INVALID_INPUT, str(e))

        with self._lock:
            entries = list(self._state.entries(kind))
            result = add_single(entries, entry, holidays_limit=self._holidays_limit(kind))
            self._after_add(kind, entries, result)
        return result

    def add_entry_range(
        self,
        kind: EntryList,
        start: DateLike,
        end: DateLike,
        fields: Optional[Mapping] = None,
    ) -> AddResult:
        if not start or not end:
            return AddResult(AddOutcome.INVALID_INPUT, "Fill in both 'from' and 'to' dates.")
        fields = fields or {}
        first = try_parse_iso_date(start) or date.min
        try:
            # Validate the shared fields once, before any date is touched.
            self._build_entry(kind, first, fields)
        except ValidationError as e:
            return AddResult(AddOutcome.INVALID_INPUT, str(e))

        with self._lock:
            entries = list(self._state.entries(kind))
            result = add_range(
                entries,
                start,
                end,
                lambda d: self._build_entry(kind, d, fields),
                holidays_limit=self._holidays_limit(kind),
            )
            self._after_add(kind, entries, result)
        return result

    def _after_add(self, kind: EntryList, entries: list[Entry], result: AddResult) -> None:
        if result.ok:
            self._commit_list(kind, entries)
            logger.info("%s: added=%d skipped=%d", kind.value, result.added, result.skipped)
        else:
            logger.info("%s: add rejected (%s) %s", kind.value, result.outcome.value, result.message)

    def delete_entry(self, kind: EntryList, entry_id: int) -> bool:
        with self._lock:
            entries = self._state.entries(kind)
            kept = [e for e in entries if e.entry_id != int(entry_id)]
            if len(kept) == len(entries):
                return False
            self._commit_list(kind, kept)
        logger.info("%s: deleted id=%s", kind.value, entry_id)
        return True

    def clear_list(self, kind: EntryList) -> int:
        with self._lock:
            removed = len(self._state.entries(kind))
            self._commit_list(kind, [])
        logger.info("%s: cleared %d entries", kind.value, removed)
        return removed

    def reset_all(self) -> None:
        self.replace_state(AccountingState())
        logger.info("All lists cleared and settings reset to defaults")

    def update_settings(self, changes: Mapping[str, Any]) -> Settings:
        with self._lock:
            settings = merge_settings(self._state.settings, changes, strict=True)
            self._repository.save_settings(settings.to_dict())
            self._state.settings = settings
        logger.info("Settings updated: %s", settings.to_dict())
        return settings

    # ----- reads -----

    def entries(self, kind: EntryList) -> list[Entry]:
        return self._state.sorted_entries(kind)

    def holiday_summary(self) -> HolidaySummary:
        return HolidaySummary(limit=self.settings.holidays_limit, taken=holidays_taken(self._state.holidays))

    def absence_summary(self, kind: EntryList) -> AbsenceSummary:
        entries = self._state.sorted_entries(kind)
        return AbsenceSummary(
            count=len(entries),
            total_days=sum(e.day_value for e in entries),
            last_date=entries[-1].entry_date if entries else None,
        )

    def overtime_summary(self, *, now: Optional[datetime] = None) -> dict[str, int]:
        periods = current_periods(now or self.now())
        return {
            name: self._aggregator.sum_minutes_in_period(self._state.overtimes, p.start, p.end)
            for name, p in periods.items()
        }

    def hours_summary(self, *, now: Optional[datetime] = None) -> dict[str, PeriodTotals]:
        periods = current_periods(now or self.now())
        return {name: self._aggregator.period_totals(self._state, p) for name, p in periods.items()}

    def weekly_overview(self, *, limit: Optional[int] = None) -> list[WeekBucket]:
        return self._aggregator.weekly_overview(self._state, limit=limit)

    def snapshot(self, *, now: Optional[datetime] = None, weekly_limit: Optional[int] = None) -> dict:
        now = now or self.now()
        currency = self.settings.currency.value
        return {
            "settings": self.settings.to_dict(),
            "lists": {kind.value: [e.to_dict() for e in self.entries(kind)] for kind in EntryList},
            "holidays": self.holiday_summary().to_dict(),
            "sickness": self.absence_summary(EntryList.SICKNESS).to_dict(),
            "childcare": self.absence_summary(EntryList.CHILDCARE).to_dict(),
            "overtime": {
                name: {"minutes": m, "label": format_hours_minutes(m)}
                for name, m in self.overtime_summary(now=now).items()
            },
            "hours": {name: t.to_dict(currency) for name, t in self.hours_summary(now=now).items()},
            "weekly": [w.to_dict(currency) for w in self.weekly_overview(limit=weekly_limit)],
        }
