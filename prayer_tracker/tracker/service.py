"""
Service layer: save and load day records from DB.

Rows map to DayRecord through the catalog's unit ids, which are also the column
names. Toggles are read-modify-write and are serialized per date.
"""
import logging
import threading
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import delete, select

from prayer_tracker.core.db import session_scope
from prayer_tracker.tracker.calendar_grid import CalendarDay, build_month
from prayer_tracker.tracker.catalog import ALL_UNIT_IDS
from prayer_tracker.tracker.models import PrayerRecordRow
from prayer_tracker.tracker.record import DateLike, DayRecord, format_date, parse_year_month
from prayer_tracker.tracker.rules import count_complete_fard_days, set_group, toggle_units

logger = logging.getLogger(__name__)

_locks_guard = threading.Lock()
_date_locks: Dict[str, threading.Lock] = {}


def _lock_for(day: str) -> threading.Lock:
    with _locks_guard:
        lock = _date_locks.get(day)
        if lock is None:
            lock = _date_locks[day] = threading.Lock()
        return lock


def _row_to_record(row: PrayerRecordRow) -> DayRecord:
    return DayRecord.from_flags(row.date, {unit_id: bool(getattr(row, unit_id)) for unit_id in ALL_UNIT_IDS})


def _record_to_row(record: DayRecord) -> PrayerRecordRow:
    row = PrayerRecordRow(date=record.date)
    for unit_id, done in record.flags().items():
        setattr(row, unit_id, done)
    return row


def _month_prefix(year_month: str) -> str:
    year, month = parse_year_month(year_month)
    return f"{year:04d}-{month:02d}-"


def get_record(day: DateLike) -> Optional[DayRecord]:
    """Stored record for the date, or None when nothing has been saved."""
    key = format_date(day)
    with session_scope() as session:
        row = session.get(PrayerRecordRow, key)
        return _row_to_record(row) if row is not None else None


def get_record_or_empty(day: DateLike) -> DayRecord:
    """Stored record, or an unsaved all-false record for the date."""
    return get_record(day) or DayRecord.empty(day)


def get_records_for_month(year_month: str) -> Dict[str, DayRecord]:
    """Stored records of a 'YYYY-MM' month keyed by date."""
    prefix = _month_prefix(year_month)
    with session_scope() as session:
        rows = session.execute(
            select(PrayerRecordRow)
            .where(PrayerRecordRow.date.like(f"{prefix}%"))
            .order_by(PrayerRecordRow.date.asc())
        ).scalars().all()
        return {row.date: _row_to_record(row) for row in rows}


def get_all_records() -> List[DayRecord]:
    """All stored records, newest first."""
    with session_scope() as session:
        rows = session.execute(
            select(PrayerRecordRow).order_by(PrayerRecordRow.date.desc())
        ).scalars().all()
        return [_row_to_record(row) for row in rows]


def save_record(record: DayRecord) -> None:
    """Insert or fully replace the row for record.date."""
    with session_scope() as session:
        session.merge(_record_to_row(record))
    logger.debug(f"Saved prayer record for {record.date} ({len(record.completed)} units completed)")


def delete_record(day: DateLike) -> None:
    key = format_date(day)
    with session_scope() as session:
        session.execute(delete(PrayerRecordRow).where(PrayerRecordRow.date == key))
    logger.info(f"Deleted prayer record for {key}")


def toggle_units_for_date(day: DateLike, unit_ids: Sequence[str]) -> DayRecord:
    """Flip each unit for the date and persist the result."""
    key = format_date(day)
    with _lock_for(key):
        updated = toggle_units(get_record_or_empty(key), unit_ids)
        save_record(updated)
    return updated


def set_group_for_date(day: DateLike, unit_ids: Iterable[str], completed: bool) -> DayRecord:
    """Mark every unit of a group done (or not done) for the date and persist."""
    key = format_date(day)
    with _lock_for(key):
        updated = set_group(get_record_or_empty(key), unit_ids, completed)
        save_record(updated)
    return updated


def get_complete_fard_days_count(year_month: str) -> int:
    """Days of the month with every Fard unit completed."""
    return count_complete_fard_days(get_records_for_month(year_month).values())


def build_month_for(year_month: str, today: Optional[DateLike] = None, mark_missed: bool = True) -> List[CalendarDay]:
    """Calendar cells for the month using stored records (one query for the month)."""
    records = get_records_for_month(year_month)
    return build_month(year_month, today or date.today(), records.get, mark_missed=mark_missed)
