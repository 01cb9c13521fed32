"""
Per-day completion record and the date/month string helpers it is keyed by.
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple, Union

from .catalog import ALL_UNIT_IDS, is_known_unit
from .errors import InvalidArgument

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    """Parse a 'YYYY-MM-DD' string (or pass a date through). Raises InvalidArgument."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _DATE_RE.match(text):
        raise InvalidArgument(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidArgument(f"Invalid date '{value}': {e}") from e


def format_date(value: DateLike) -> str:
    return parse_date(value).strftime(DATE_FORMAT)


def parse_year_month(value: str) -> Tuple[int, int]:
    """Parse 'YYYY-MM' into (year, month). Raises InvalidArgument."""
    text = str(value).strip()
    if not _MONTH_RE.match(text):
        raise InvalidArgument(f"Invalid month '{value}', expected YYYY-MM")
    year, month = int(text[:4]), int(text[5:])
    if not 1 <= month <= 12 or year < 1:
        raise InvalidArgument(f"Invalid month '{value}', out of range")
    return year, month


@dataclass(frozen=True)
class DayRecord:
    """Completion state of every catalog unit on one date.

    Only completed unit ids are stored; every other unit reads as False.
    Instances are immutable, toggles produce new records.
    """
    date: str
    completed: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "date", format_date(self.date))
        object.__setattr__(self, "completed", frozenset(u for u in self.completed if is_known_unit(u)))

    @classmethod
    def empty(cls, day: DateLike) -> "DayRecord":
        return cls(date=format_date(day))

    @classmethod
    def from_flags(cls, day: DateLike, flags: Mapping[str, bool]) -> "DayRecord":
        """Build from a unit-id -> bool mapping; unknown ids are dropped."""
        return cls(date=format_date(day), completed=frozenset(k for k, v in flags.items() if v))

    @classmethod
    def with_completed(cls, day: DateLike, unit_ids: Iterable[str]) -> "DayRecord":
        return cls(date=format_date(day), completed=frozenset(unit_ids))

    def is_completed(self, unit_id: str) -> bool:
        return unit_id in self.completed

    def flags(self) -> Dict[str, bool]:
        """All 39 unit flags in catalog order."""
        return {unit_id: unit_id in self.completed for unit_id in ALL_UNIT_IDS}

    @property
    def is_blank(self) -> bool:
        return not self.completed
