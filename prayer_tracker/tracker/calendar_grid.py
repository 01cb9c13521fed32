"""
Month grid for the calendar view: leading blank cells followed by one cell per
day, each annotated with its completion status.
"""
import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional

from .record import DateLike, DayRecord, format_date, parse_year_month
from .rules import DayCompletionStatus, day_status, day_status_on

RecordLookup = Callable[[str], Optional[DayRecord]]


@dataclass(frozen=True)
class CalendarDay:
    """One grid cell. Padding cells have an empty date and day_of_month 0."""
    date: str
    day_of_month: int
    is_current_month: bool
    is_today: bool
    completion_status: DayCompletionStatus

    @property
    def is_padding(self) -> bool:
        return self.day_of_month == 0


_PADDING = CalendarDay(
    date="",
    day_of_month=0,
    is_current_month=False,
    is_today=False,
    completion_status=DayCompletionStatus.EMPTY,
)


def leading_blanks(year: int, month: int) -> int:
    """Weekday of the 1st with Sunday as 0 and Saturday as 6."""
    # calendar.weekday is Monday=0..Sunday=6
    return (calendar.weekday(year, month, 1) + 1) % 7


def build_month(
    year_month: str,
    today: DateLike,
    record_lookup: RecordLookup,
    mark_missed: bool = True,
) -> List[CalendarDay]:
    """Cells for year_month ('YYYY-MM'), in chronological order, no trailing padding.

    With mark_missed, days before today whose Fard prayers are not all
    completed get MISSED instead of EMPTY/PARTIAL.
    """
    year, month = parse_year_month(year_month)
    today_str = format_date(today)

    days: List[CalendarDay] = [_PADDING] * leading_blanks(year, month)
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        date_str = f"{year:04d}-{month:02d}-{day:02d}"
        record = record_lookup(date_str)
        if mark_missed:
            status = day_status_on(record, date_str, today_str)
        else:
            status = day_status(record)
        days.append(CalendarDay(
            date=date_str,
            day_of_month=day,
            is_current_month=True,
            is_today=date_str == today_str,
            completion_status=status,
        ))
    return days


def shift_month(year_month: str, delta: int) -> str:
    """Move year_month by delta months, e.g. ('2025-01', -1) -> '2024-12'."""
    year, month = parse_year_month(year_month)
    index = year * 12 + (month - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def current_year_month(today: Optional[DateLike] = None) -> str:
    day = date.today() if today is None else date.fromisoformat(format_date(today))
    return f"{day.year:04d}-{day.month:02d}"


def month_summary(days: List[CalendarDay]) -> Dict[DayCompletionStatus, int]:
    """Count of non-padding cells per status; every status is present."""
    counts = Counter(d.completion_status for d in days if not d.is_padding)
    return {status: counts.get(status, 0) for status in DayCompletionStatus}


def render_text(days: List[CalendarDay]) -> str:
    """Plain text grid, Sunday first, one marker per status after the day number."""
    markers = {
        DayCompletionStatus.EMPTY: " ",
        DayCompletionStatus.PARTIAL: "~",
        DayCompletionStatus.MISSED: "x",
        DayCompletionStatus.COMPLETE: "*",
    }
    lines = ["  ".join(f"{name:>3}" for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"))]
    cells = []
    for d in days:
        if d.is_padding:
            cells.append("   ")
        else:
            cells.append(f"{d.day_of_month:>2}{markers[d.completion_status]}")
    for start in range(0, len(cells), 7):
        lines.append("  ".join(cells[start:start + 7]).rstrip())
    return "\n".join(lines)
