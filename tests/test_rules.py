from datetime import date

import pytest

from prayer_tracker.tracker.catalog import ALL_UNIT_IDS, FARD_UNIT_IDS, PrayerType, fard_unit_ids
from prayer_tracker.tracker.errors import InvalidArgument
from prayer_tracker.tracker.record import DayRecord
from prayer_tracker.tracker.rules import (
    DayCompletionStatus,
    are_all_fard_completed,
    count_complete_fard_days,
    day_status,
    day_status_on,
    is_group_complete,
    is_prayer_fard_complete,
    prayer_progress,
    set_group,
    toggle_unit,
    toggle_units,
)

FAJR_FARD = ["fajr_fard_1", "fajr_fard_2"]


def test_absent_record_is_empty():
    assert day_status(None) == DayCompletionStatus.EMPTY


def test_blank_record_is_empty():
    assert day_status(DayRecord.empty("2025-06-10")) == DayCompletionStatus.EMPTY


def test_all_fard_is_complete(all_fard_record):
    record = all_fard_record()
    assert day_status(record) == DayCompletionStatus.COMPLETE
    assert are_all_fard_completed(record)


def test_sunnat_and_witr_do_not_affect_status():
    non_fard = [u for u in ALL_UNIT_IDS if u not in FARD_UNIT_IDS]
    record = DayRecord.with_completed("2025-06-10", non_fard)
    assert day_status(record) == DayCompletionStatus.EMPTY


def test_one_full_prayer_is_partial():
    record = DayRecord.with_completed("2025-06-10", FAJR_FARD)
    assert day_status(record) == DayCompletionStatus.PARTIAL


def test_half_a_prayer_is_not_partial():
    record = DayRecord.with_completed("2025-06-10", ["fajr_fard_1", "dhuhr_fard_1", "isha_fard_4"])
    assert day_status(record) == DayCompletionStatus.EMPTY


def test_one_missing_fard_unit_drops_complete_to_partial(all_fard_record):
    record = toggle_unit(all_fard_record(), "asr_fard_3")
    assert day_status(record) == DayCompletionStatus.PARTIAL
    assert not is_prayer_fard_complete(record, PrayerType.ASR)
    assert is_prayer_fard_complete(record, PrayerType.ISHA)


def test_is_group_complete_tracks_each_flag():
    record = DayRecord.with_completed("2025-06-10", FAJR_FARD)
    assert is_group_complete(record, FAJR_FARD)
    assert not is_group_complete(toggle_unit(record, "fajr_fard_1"), FAJR_FARD)
    assert not is_group_complete(toggle_unit(record, "fajr_fard_2"), FAJR_FARD)


def test_is_group_complete_edges():
    assert is_group_complete(DayRecord.empty("2025-06-10"), [])
    assert not is_group_complete(None, FAJR_FARD)


def test_toggle_is_its_own_inverse():
    record = DayRecord.with_completed("2025-06-10", ["isha_witr_2", "asr_sunnat_1"])
    for unit_id in ALL_UNIT_IDS:
        assert toggle_unit(toggle_unit(record, unit_id), unit_id) == record


def test_toggle_does_not_mutate_input():
    record = DayRecord.empty("2025-06-10")
    toggled = toggle_unit(record, "fajr_fard_1")
    assert record.completed == frozenset()
    assert toggled.is_completed("fajr_fard_1")
    assert toggled.date == "2025-06-10"


def test_toggle_unknown_unit_returns_input():
    record = DayRecord.with_completed("2025-06-10", FAJR_FARD)
    assert toggle_unit(record, "fajr_fard_9") is record


def test_toggle_units_flips_exactly_the_given_ids():
    record = DayRecord.with_completed("2025-06-10", ["dhuhr_fard_1", "isha_witr_1"])
    ids = ["dhuhr_fard_1", "dhuhr_fard_2", "maghrib_sunnat_2"]
    toggled = toggle_units(record, ids)
    before, after = record.flags(), toggled.flags()
    for unit_id in ALL_UNIT_IDS:
        if unit_id in ids:
            assert after[unit_id] is not before[unit_id]
        else:
            assert after[unit_id] is before[unit_id]


def test_toggle_units_with_duplicate_is_a_noop_for_that_id():
    record = DayRecord.empty("2025-06-10")
    assert toggle_units(record, ["asr_fard_1", "asr_fard_1"]) == record


def test_set_group_marks_and_clears():
    record = DayRecord.with_completed("2025-06-10", ["dhuhr_fard_2"])
    ids = fard_unit_ids(PrayerType.DHUHR)
    done = set_group(record, ids, True)
    assert is_group_complete(done, ids)
    cleared = set_group(done, ids, False)
    assert not any(cleared.is_completed(u) for u in ids)
    assert set_group(record, ["bogus"], True) == record


def test_day_status_on_marks_past_incomplete_days_missed(all_fard_record):
    today = date(2025, 6, 15)
    partial = DayRecord.with_completed("2025-06-10", FAJR_FARD)
    assert day_status_on(None, "2025-06-10", today) == DayCompletionStatus.MISSED
    assert day_status_on(partial, "2025-06-10", today) == DayCompletionStatus.MISSED
    assert day_status_on(all_fard_record(), "2025-06-10", today) == DayCompletionStatus.COMPLETE


def test_day_status_on_leaves_today_and_future_alone():
    partial = DayRecord.with_completed("2025-06-15", FAJR_FARD)
    assert day_status_on(partial, "2025-06-15", "2025-06-15") == DayCompletionStatus.PARTIAL
    assert day_status_on(None, "2025-06-20", "2025-06-15") == DayCompletionStatus.EMPTY


def test_count_complete_fard_days(all_fard_record):
    records = [
        all_fard_record("2025-06-01"),
        all_fard_record("2025-06-02"),
        DayRecord.with_completed("2025-06-03", FAJR_FARD),
        DayRecord.empty("2025-06-04"),
    ]
    assert count_complete_fard_days(records) == 2


def test_prayer_progress_reports_groups():
    record = DayRecord.with_completed("2025-06-10", ["maghrib_fard_1", "maghrib_fard_2", "maghrib_fard_3", "isha_witr_1"])
    progress = prayer_progress(record)
    assert progress[PrayerType.MAGHRIB]["fard_complete"] is True
    assert progress[PrayerType.ISHA]["fard_complete"] is False
    assert progress[PrayerType.ISHA]["any_progress"] is True
    assert progress[PrayerType.FAJR]["any_progress"] is False
    witr = progress[PrayerType.ISHA]["groups"][3]
    assert witr["label"] == "3 Rakat Witr"
    assert witr["completed"] is False


def test_record_flags_cover_catalog_and_drop_unknown_ids():
    record = DayRecord.from_flags("2025-06-10", {"fajr_fard_1": True, "asr_fard_2": False, "nope": True})
    flags = record.flags()
    assert list(flags) == list(ALL_UNIT_IDS)
    assert flags["fajr_fard_1"] is True
    assert sum(flags.values()) == 1


@pytest.mark.parametrize("value", ["2025-6-10", "2025-02-30", "yesterday", "20250610"])
def test_record_rejects_bad_dates(value):
    with pytest.raises(InvalidArgument):
        DayRecord.empty(value)
