from __future__ import annotations

from datetime import date

from absence_tracker.core.enums import EntryList
from absence_tracker.entries.model import AbsenceEntry, TimeEntry
from absence_tracker.entries.normalizer import normalize_absence_list, normalize_list, normalize_time_list


def test_absence_drops_non_objects_and_missing_dates():
    out = normalize_absence_list(
        [
            None,
            "2024-01-01",
            42,
            {"note": "no date"},
            {"date": "2024-13-01"},
            {"date": "2024-01-02", "dayValue": 1},
        ]
    )
    assert len(out) == 1
    assert out[0].entry_date == date(2024, 1, 2)


def test_absence_defaults_and_coercion():
    [entry] = normalize_absence_list([{"date": "2024-01-02", "dayValue": "abc", "note": 7}])
    assert entry.day_value == 1
    assert entry.day_type == "Full day"
    assert entry.note == "7"
    assert entry.cert == ""
    assert entry.child == ""


def test_absence_half_day_type_derived():
    [entry] = normalize_absence_list([{"date": "2024-01-02", "dayValue": "0.5"}])
    assert entry.day_value == 0.5
    assert entry.day_type == "Half day"


def test_absence_zero_day_value_defaults_but_negative_is_kept():
    zero, negative = normalize_absence_list(
        [{"date": "2024-01-02", "dayValue": 0}, {"date": "2024-01-03", "dayValue": -0.5}]
    )
    assert zero.day_value == 1
    assert zero.day_type == "Full day"
    assert negative.day_value == -0.5
    assert negative.day_type == "Half day"


def test_absence_keeps_explicit_day_type():
    [entry] = normalize_absence_list([{"date": "2024-01-02", "dayValue": 0.5, "dayType": "Custom"}])
    assert entry.day_type == "Custom"


def test_ids_kept_then_assigned_above_max_in_input_order():
    out = normalize_absence_list(
        [
            {"date": "2024-01-01"},
            {"date": "2024-01-02", "id": 7},
            {"date": "2024-01-03", "id": -3},
            {"date": "2024-01-04", "id": "2"},
        ]
    )
    assert [e.entry_id for e in out] == [8, 7, 9, 2]


def test_duplicate_ids_are_reassigned():
    out = normalize_absence_list(
        [
            {"date": "2024-01-01", "id": 1},
            {"date": "2024-01-02", "id": 1},
        ]
    )
    ids = [e.entry_id for e in out]
    assert ids == [1, 2]


def test_duplicate_dates_keep_first():
    out = normalize_absence_list(
        [
            {"date": "2024-01-01", "note": "first"},
            {"date": "2024-01-01", "note": "second"},
        ]
    )
    assert len(out) == 1
    assert out[0].note == "first"


def test_time_entries_minutes_and_multiplier():
    out = normalize_time_list(
        [
            {"date": "2024-01-01", "minutes": "90.5", "multiplier": 1.5},
            {"date": "2024-01-02", "minutes": -10, "multiplier": 0.5},
            {"date": "2024-01-03", "minutes": None, "multiplier": "2"},
        ],
        overtime=True,
    )
    assert [(e.minutes, e.multiplier) for e in out] == [(91, 1.5), (0, 1), (0, 2)]


def test_regular_hours_multiplier_forced_to_one():
    [entry] = normalize_time_list([{"date": "2024-01-01", "minutes": 480, "multiplier": 3}], overtime=False)
    assert entry.multiplier == 1


def test_non_list_input_gives_empty_result():
    assert normalize_absence_list(None) == []
    assert normalize_time_list({"date": "2024-01-01"}, overtime=True) == []
    assert normalize_list(EntryList.SICKNESS, "garbage") == []


def test_normalize_list_dispatches_by_kind():
    raw = [{"date": "2024-01-01", "minutes": 60, "dayValue": 1}]
    assert isinstance(normalize_list(EntryList.HOLIDAYS, raw)[0], AbsenceEntry)
    assert isinstance(normalize_list(EntryList.HOURS, raw)[0], TimeEntry)


def test_normalized_output_round_trips_through_to_dict():
    raw = [{"id": 3, "date": "2024-01-01", "dayValue": 0.5, "note": "dentist"}]
    [entry] = normalize_absence_list(raw)
    assert normalize_absence_list([entry.to_dict()]) == [entry]
