from .calendar_grid import CalendarDay, build_month, month_summary, shift_month
from .catalog import (
    ALL_UNIT_IDS,
    FARD_UNIT_IDS,
    Prayer,
    PrayerCategory,
    PrayerType,
    PrayerUnit,
    UnitGroup,
    fard_units,
    list_prayers,
    nafl_units,
    sunnat_units,
    witr_units,
)
from .errors import InvalidArgument
from .next_prayer import next_prayer, time_until_next
from .record import DayRecord
from .rules import (
    DayCompletionStatus,
    day_status,
    day_status_on,
    is_group_complete,
    toggle_unit,
    toggle_units,
)

__all__ = [
    "ALL_UNIT_IDS",
    "FARD_UNIT_IDS",
    "CalendarDay",
    "DayCompletionStatus",
    "DayRecord",
    "InvalidArgument",
    "Prayer",
    "PrayerCategory",
    "PrayerType",
    "PrayerUnit",
    "UnitGroup",
    "build_month",
    "day_status",
    "day_status_on",
    "fard_units",
    "is_group_complete",
    "list_prayers",
    "month_summary",
    "nafl_units",
    "next_prayer",
    "shift_month",
    "sunnat_units",
    "time_until_next",
    "toggle_unit",
    "toggle_units",
    "witr_units",
]
