"""
Completion rules: collapse a day record's unit flags into group, prayer and day
level status, and produce toggled copies of a record.

Everything here is pure. Persistence belongs to the service layer.
"""
import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .catalog import FARD_UNIT_IDS, PrayerType, fard_unit_ids, is_known_unit, unit_groups
from .record import DateLike, DayRecord, parse_date

logger = logging.getLogger(__name__)


class DayCompletionStatus(str, Enum):
    EMPTY = "empty"
    PARTIAL = "partial"
    MISSED = "missed"
    COMPLETE = "complete"


def is_group_complete(record: Optional[DayRecord], unit_ids: Iterable[str]) -> bool:
    """True iff every id is completed in record. Vacuously true for an empty group."""
    completed = record.completed if record is not None else frozenset()
    return all(unit_id in completed for unit_id in unit_ids)


def is_prayer_fard_complete(record: Optional[DayRecord], prayer_type: PrayerType) -> bool:
    return is_group_complete(record, fard_unit_ids(prayer_type))


def are_all_fard_completed(record: Optional[DayRecord]) -> bool:
    if record is None:
        return False
    return is_group_complete(record, FARD_UNIT_IDS)


def day_status(record: Optional[DayRecord]) -> DayCompletionStatus:
    """Day status from Fard units only. Never returns MISSED, see day_status_on."""
    if record is None:
        return DayCompletionStatus.EMPTY
    per_prayer = [is_prayer_fard_complete(record, prayer_type) for prayer_type in PrayerType]
    if all(per_prayer):
        return DayCompletionStatus.COMPLETE
    if any(per_prayer):
        return DayCompletionStatus.PARTIAL
    return DayCompletionStatus.EMPTY


def day_status_on(record: Optional[DayRecord], day: DateLike, today: DateLike) -> DayCompletionStatus:
    """Like day_status, but a day before today that is not COMPLETE is MISSED."""
    status = day_status(record)
    if status != DayCompletionStatus.COMPLETE and parse_date(day) < parse_date(today):
        return DayCompletionStatus.MISSED
    return status


def toggle_unit(record: DayRecord, unit_id: str) -> DayRecord:
    """Copy of record with unit_id flipped. Unknown ids return record unchanged."""
    if not is_known_unit(unit_id):
        logger.debug(f"Ignoring toggle of unknown unit id: {unit_id}")
        return record
    return DayRecord(date=record.date, completed=record.completed ^ {unit_id})


def toggle_units(record: DayRecord, unit_ids: Sequence[str]) -> DayRecord:
    """Apply toggle_unit for each id in order. A repeated id flips back."""
    for unit_id in unit_ids:
        record = toggle_unit(record, unit_id)
    return record


def set_group(record: DayRecord, unit_ids: Iterable[str], completed: bool) -> DayRecord:
    """Copy of record with every known id in unit_ids set to completed."""
    known = frozenset(u for u in unit_ids if is_known_unit(u))
    if completed:
        new_completed = record.completed | known
    else:
        new_completed = record.completed - known
    return DayRecord(date=record.date, completed=new_completed)


def count_complete_fard_days(records: Iterable[DayRecord]) -> int:
    """Number of records with all 17 Fard units completed."""
    return sum(1 for record in records if are_all_fard_completed(record))


def prayer_progress(record: Optional[DayRecord]) -> Dict[PrayerType, Dict[str, object]]:
    """Per prayer: whether its Fard is complete, whether anything is ticked, and group states."""
    completed = record.completed if record is not None else frozenset()
    progress: Dict[PrayerType, Dict[str, object]] = {}
    for prayer_type in PrayerType:
        groups: List[Dict[str, object]] = [
            {
                "label": group.label,
                "category": group.category,
                "unit_ids": list(group.unit_ids),
                "completed": is_group_complete(record, group.unit_ids),
            }
            for group in unit_groups(prayer_type)
        ]
        progress[prayer_type] = {
            "fard_complete": is_prayer_fard_complete(record, prayer_type),
            "any_progress": any(u in completed for g in groups for u in g["unit_ids"]),
            "groups": groups,
        }
    return progress
