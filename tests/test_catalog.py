import pytest

from prayer_tracker.tracker.catalog import (
    ALL_UNIT_IDS,
    DEFAULT_PRAYER_TIMES,
    FARD_UNIT_IDS,
    PrayerCategory,
    PrayerType,
    fard_unit_ids,
    fard_units,
    get_prayer,
    get_unit,
    is_known_unit,
    list_prayers,
    nafl_units,
    parse_time,
    prayer_times,
    sunnat_units,
    unit_groups,
    witr_units,
)
from prayer_tracker.tracker.errors import InvalidArgument


def test_prayers_are_listed_in_fixed_order_with_default_times():
    prayers = list_prayers()
    assert [p.type for p in prayers] == list(PrayerType)
    assert [p.time for p in prayers] == ["05:15", "12:30", "15:45", "18:15", "20:00"]
    assert [p.name for p in prayers] == ["Fajr", "Dhuhr", "Asr", "Maghrib", "Isha"]
    assert PrayerType.ISHA.arabic_name == "عشاء"


def test_catalog_has_39_unique_units():
    assert len(ALL_UNIT_IDS) == 39
    assert len(set(ALL_UNIT_IDS)) == 39
    per_prayer = [u.id for p in list_prayers() for u in p.units]
    assert per_prayer == list(ALL_UNIT_IDS)


@pytest.mark.parametrize("prayer_type, fard, sunnat, witr", [
    (PrayerType.FAJR, 2, 2, 0),
    (PrayerType.DHUHR, 4, 6, 0),
    (PrayerType.ASR, 4, 4, 0),
    (PrayerType.MAGHRIB, 3, 2, 0),
    (PrayerType.ISHA, 4, 6, 3),
])
def test_unit_counts_per_prayer(prayer_type, fard, sunnat, witr):
    prayer = get_prayer(prayer_type)
    assert len(fard_units(prayer)) == fard
    assert len(sunnat_units(prayer)) == sunnat
    assert len(witr_units(prayer)) == witr
    assert nafl_units(prayer) == []


def test_fard_ids_cover_all_prayers():
    assert len(FARD_UNIT_IDS) == 17
    assert fard_unit_ids(PrayerType.FAJR) == ("fajr_fard_1", "fajr_fard_2")
    assert fard_unit_ids(PrayerType.MAGHRIB) == ("maghrib_fard_1", "maghrib_fard_2", "maghrib_fard_3")


def test_unit_order_and_labels_follow_the_prayer_sequence():
    dhuhr = [u.id for u in get_prayer(PrayerType.DHUHR).units]
    assert dhuhr[:4] == [f"dhuhr_sunnat_pre_{n}" for n in range(1, 5)]
    assert dhuhr[4:8] == [f"dhuhr_fard_{n}" for n in range(1, 5)]
    assert dhuhr[8:] == ["dhuhr_sunnat_post_1", "dhuhr_sunnat_post_2"]

    unit = get_unit("isha_sunnat_post_2")
    assert unit.label == "Sunnat Post 2"
    assert unit.ordinal == 2
    assert unit.category == PrayerCategory.SUNNAT
    assert unit.prayer_type == PrayerType.ISHA
    assert get_unit("maghrib_fard_3").label == "Fard 3"


def test_unit_groups_match_rakat_blocks():
    groups = unit_groups(PrayerType.ISHA)
    assert [g.label for g in groups] == ["4 Rakat Sunnat", "4 Rakat Fard", "2 Rakat Sunnat", "3 Rakat Witr"]
    assert groups[3].unit_ids == ("isha_witr_1", "isha_witr_2", "isha_witr_3")
    assert groups[3].category == PrayerCategory.WITR


def test_unknown_unit_lookup():
    assert get_unit("fajr_fard_3") is None
    assert not is_known_unit("fajr_fard_3")
    assert is_known_unit("fajr_fard_2")


def test_time_overrides_by_display_name():
    times = prayer_times({"fajr": "4:50", "Isha": "21:05"})
    assert times[PrayerType.FAJR] == "04:50"
    assert times[PrayerType.ISHA] == "21:05"
    assert times[PrayerType.DHUHR] == DEFAULT_PRAYER_TIMES[PrayerType.DHUHR]
    assert list_prayers({"Asr": "16:00"})[2].time == "16:00"


def test_unknown_override_is_ignored():
    assert prayer_times({"Jumuah": "13:00"}) == DEFAULT_PRAYER_TIMES


@pytest.mark.parametrize("value", ["25:00", "12:60", "noon", "1230", ""])
def test_parse_time_rejects_malformed(value):
    with pytest.raises(InvalidArgument):
        parse_time(value)


def test_malformed_override_raises():
    with pytest.raises(InvalidArgument):
        prayer_times({"Fajr": "5am"})
