"""
Tracker API. Mounted at /api/.
- /prayers: catalog with times, units and groups.
- /records/{date}: one day's flags, status and per-prayer progress.
- /calendar/{year_month}: month grid with statuses and Fard-complete count.
- /next-prayer: upcoming prayer and remaining time.
"""
from datetime import date, datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Response
from pydantic import BaseModel

from .calendar_grid import month_summary
from .catalog import list_prayers
from .next_prayer import current_or_next_prayer, time_until_next
from .record import DayRecord
from .rules import DayCompletionStatus, day_status, day_status_on, prayer_progress
from .service import (
    build_month_for,
    delete_record,
    get_complete_fard_days_count,
    get_record,
    set_group_for_date,
    toggle_units_for_date,
)


class UnitResponse(BaseModel):
    id: str
    category: str
    ordinal: int
    label: str


class GroupResponse(BaseModel):
    label: str
    category: str
    unit_ids: List[str]
    completed: bool = False


class PrayerResponse(BaseModel):
    type: str
    name: str
    arabic_name: str
    time: str
    units: List[UnitResponse]
    groups: List[GroupResponse]


class PrayerProgressResponse(BaseModel):
    fard_complete: bool
    any_progress: bool
    groups: List[GroupResponse]


class DayRecordResponse(BaseModel):
    """One date's 39 unit flags plus derived status. stored is False for an implicit empty record."""

    date: str
    stored: bool
    status: DayCompletionStatus
    units: Dict[str, bool]
    prayers: Dict[str, PrayerProgressResponse]


class ToggleRequest(BaseModel):
    unit_ids: List[str]


class GroupUpdateRequest(BaseModel):
    unit_ids: List[str]
    completed: bool


class CalendarDayResponse(BaseModel):
    date: str
    day_of_month: int
    is_current_month: bool
    is_today: bool
    completion_status: DayCompletionStatus


class CalendarResponse(BaseModel):
    year_month: str
    days: List[CalendarDayResponse]
    complete_fard_days: int
    summary: Dict[str, int]


class NextPrayerResponse(BaseModel):
    prayer: Optional[str] = None
    name: Optional[str] = None
    time: Optional[str] = None
    remaining: str


def _record_response(record: DayRecord, stored: bool, mark_missed: bool) -> DayRecordResponse:
    if mark_missed:
        status = day_status_on(record if stored else None, record.date, date.today())
    else:
        status = day_status(record if stored else None)
    progress = prayer_progress(record)
    return DayRecordResponse(
        date=record.date,
        stored=stored,
        status=status,
        units=record.flags(),
        prayers={
            prayer_type.value: PrayerProgressResponse(
                fard_complete=p["fard_complete"],
                any_progress=p["any_progress"],
                groups=[
                    GroupResponse(
                        label=g["label"],
                        category=g["category"].value,
                        unit_ids=g["unit_ids"],
                        completed=g["completed"],
                    )
                    for g in p["groups"]
                ],
            )
            for prayer_type, p in progress.items()
        },
    )


def get_router(config) -> APIRouter:
    """Return router for the tracker; mounted with prefix /api. config is a Config (read per request)."""
    router = APIRouter(tags=["Prayer Tracker"])

    @router.get("/prayers", response_model=List[PrayerResponse])
    def get_prayers() -> List[PrayerResponse]:
        """Catalog of the five prayers with their scheduled times."""
        return [
            PrayerResponse(
                type=prayer.type.value,
                name=prayer.type.display_name,
                arabic_name=prayer.type.arabic_name,
                time=prayer.time,
                units=[
                    UnitResponse(id=u.id, category=u.category.value, ordinal=u.ordinal, label=u.label)
                    for u in prayer.units
                ],
                groups=[
                    GroupResponse(label=g.label, category=g.category.value, unit_ids=list(g.unit_ids))
                    for g in prayer.groups
                ],
            )
            for prayer in list_prayers(config.prayer_time_overrides)
        ]

    @router.get("/records/{day}", response_model=DayRecordResponse)
    def read_record(day: str) -> DayRecordResponse:
        """Stored record for the date, or an implicit empty one."""
        record = get_record(day)
        if record is None:
            return _record_response(DayRecord.empty(day), False, config.mark_missed_days)
        return _record_response(record, True, config.mark_missed_days)

    @router.post("/records/{day}/toggle", response_model=DayRecordResponse)
    def toggle(day: str, body: ToggleRequest) -> DayRecordResponse:
        """Flip each listed unit in order and save. Unknown ids are ignored."""
        record = toggle_units_for_date(day, body.unit_ids)
        return _record_response(record, True, config.mark_missed_days)

    @router.put("/records/{day}/groups", response_model=DayRecordResponse)
    def update_group(day: str, body: GroupUpdateRequest) -> DayRecordResponse:
        """Set every unit of a group to completed / not completed and save."""
        record = set_group_for_date(day, body.unit_ids, body.completed)
        return _record_response(record, True, config.mark_missed_days)

    @router.delete("/records/{day}", status_code=204)
    def remove_record(day: str) -> Response:
        delete_record(day)
        return Response(status_code=204)

    @router.get("/calendar/{year_month}", response_model=CalendarResponse)
    def get_calendar(year_month: str) -> CalendarResponse:
        """Month grid: leading blanks then one cell per day."""
        days = build_month_for(year_month, date.today(), mark_missed=config.mark_missed_days)
        return CalendarResponse(
            year_month=year_month,
            days=[
                CalendarDayResponse(
                    date=d.date,
                    day_of_month=d.day_of_month,
                    is_current_month=d.is_current_month,
                    is_today=d.is_today,
                    completion_status=d.completion_status,
                )
                for d in days
            ],
            complete_fard_days=get_complete_fard_days_count(year_month),
            summary={status.value: count for status, count in month_summary(days).items()},
        )

    @router.get("/next-prayer", response_model=NextPrayerResponse)
    def get_next_prayer(hour: Optional[int] = None, minute: Optional[int] = None) -> NextPrayerResponse:
        """Prayer due at or next after hour:minute (defaults to the current local time)."""
        now = datetime.now()
        hour = now.hour if hour is None else hour
        minute = now.minute if minute is None else minute
        overrides = config.prayer_time_overrides
        upcoming = current_or_next_prayer(hour, minute, overrides)
        remaining = time_until_next(hour, minute, overrides)
        if upcoming is None:
            return NextPrayerResponse(remaining=remaining)
        times = {p.type: p.time for p in list_prayers(overrides)}
        return NextPrayerResponse(
            prayer=upcoming.value,
            name=upcoming.display_name,
            time=times[upcoming],
            remaining=remaining,
        )

    return router
