"""
Static prayer catalog: the five daily prayers, their scheduled display times and
the ordered units (rakats) tracked for each of them.

The catalog is declared once as a table and expanded at import time into
read-only module state. Unit ids are the storage keys of a day record.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import InvalidArgument

logger = logging.getLogger(__name__)


class PrayerType(str, Enum):
    """The five daily prayers, in their fixed order."""
    FAJR = "fajr"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"

    @property
    def display_name(self) -> str:
        return _PRAYER_NAMES[self][0]

    @property
    def arabic_name(self) -> str:
        return _PRAYER_NAMES[self][1]


class PrayerCategory(str, Enum):
    FARD = "fard"
    SUNNAT = "sunnat"
    WITR = "witr"
    NAFL = "nafl"

    @property
    def label(self) -> str:
        return self.value.capitalize()


_PRAYER_NAMES = {
    PrayerType.FAJR: ("Fajr", "فجر"),
    PrayerType.DHUHR: ("Dhuhr", "ظهر"),
    PrayerType.ASR: ("Asr", "عصر"),
    PrayerType.MAGHRIB: ("Maghrib", "مغرب"),
    PrayerType.ISHA: ("Isha", "عشاء"),
}

# Fixed display times until location based calculation exists.
DEFAULT_PRAYER_TIMES: Dict[PrayerType, str] = {
    PrayerType.FAJR: "05:15",
    PrayerType.DHUHR: "12:30",
    PrayerType.ASR: "15:45",
    PrayerType.MAGHRIB: "18:15",
    PrayerType.ISHA: "20:00",
}


@dataclass(frozen=True)
class PrayerUnit:
    """One trackable rakat. id is the stable storage key, e.g. 'fajr_fard_1'."""
    id: str
    prayer_type: PrayerType
    category: PrayerCategory
    ordinal: int
    label: str


@dataclass(frozen=True)
class UnitGroup:
    """Contiguous block of same-category units toggled together, e.g. '4 Rakat Fard'."""
    label: str
    category: PrayerCategory
    unit_ids: Tuple[str, ...]


@dataclass(frozen=True)
class Prayer:
    type: PrayerType
    time: str
    units: Tuple[PrayerUnit, ...]
    groups: Tuple[UnitGroup, ...]

    @property
    def name(self) -> str:
        return self.type.display_name


# (id infix, category, rakat count, unit label prefix) per block, in prayer order
_CATALOG_TABLE = {
    PrayerType.FAJR: (
        ("sunnat", PrayerCategory.SUNNAT, 2, "Sunnat"),
        ("fard", PrayerCategory.FARD, 2, "Fard"),
    ),
    PrayerType.DHUHR: (
        ("sunnat_pre", PrayerCategory.SUNNAT, 4, "Sunnat"),
        ("fard", PrayerCategory.FARD, 4, "Fard"),
        ("sunnat_post", PrayerCategory.SUNNAT, 2, "Sunnat Post"),
    ),
    PrayerType.ASR: (
        ("sunnat", PrayerCategory.SUNNAT, 4, "Sunnat"),
        ("fard", PrayerCategory.FARD, 4, "Fard"),
    ),
    PrayerType.MAGHRIB: (
        ("fard", PrayerCategory.FARD, 3, "Fard"),
        ("sunnat", PrayerCategory.SUNNAT, 2, "Sunnat"),
    ),
    PrayerType.ISHA: (
        ("sunnat_pre", PrayerCategory.SUNNAT, 4, "Sunnat"),
        ("fard", PrayerCategory.FARD, 4, "Fard"),
        ("sunnat_post", PrayerCategory.SUNNAT, 2, "Sunnat Post"),
        ("witr", PrayerCategory.WITR, 3, "Witr"),
    ),
}


def _expand_catalog() -> Tuple[Dict[PrayerType, Tuple[PrayerUnit, ...]], Dict[PrayerType, Tuple[UnitGroup, ...]]]:
    units_by_prayer: Dict[PrayerType, Tuple[PrayerUnit, ...]] = {}
    groups_by_prayer: Dict[PrayerType, Tuple[UnitGroup, ...]] = {}
    for prayer_type, blocks in _CATALOG_TABLE.items():
        units: List[PrayerUnit] = []
        groups: List[UnitGroup] = []
        for infix, category, count, label_prefix in blocks:
            block = [
                PrayerUnit(
                    id=f"{prayer_type.value}_{infix}_{n}",
                    prayer_type=prayer_type,
                    category=category,
                    ordinal=n,
                    label=f"{label_prefix} {n}",
                )
                for n in range(1, count + 1)
            ]
            units.extend(block)
            groups.append(UnitGroup(
                label=f"{count} Rakat {category.label}",
                category=category,
                unit_ids=tuple(u.id for u in block),
            ))
        units_by_prayer[prayer_type] = tuple(units)
        groups_by_prayer[prayer_type] = tuple(groups)
    return units_by_prayer, groups_by_prayer


_UNITS_BY_PRAYER, _GROUPS_BY_PRAYER = _expand_catalog()
_UNITS_BY_ID: Dict[str, PrayerUnit] = {
    unit.id: unit for units in _UNITS_BY_PRAYER.values() for unit in units
}

ALL_UNIT_IDS: Tuple[str, ...] = tuple(_UNITS_BY_ID)
FARD_UNIT_IDS: Tuple[str, ...] = tuple(
    unit_id for unit_id, unit in _UNITS_BY_ID.items() if unit.category == PrayerCategory.FARD
)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> Tuple[int, int]:
    """Parse 'HH:MM' into (hour, minute). Raises InvalidArgument when malformed."""
    match = _TIME_RE.match(str(value).strip())
    if not match:
        raise InvalidArgument(f"Invalid time '{value}', expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidArgument(f"Invalid time '{value}', out of range")
    return hour, minute


def prayer_times(overrides: Optional[Mapping[Any, str]] = None) -> Dict[PrayerType, str]:
    """Scheduled 'HH:MM' per prayer: the defaults with optional overrides applied.

    Override keys may be PrayerType members or display names (case-insensitive).
    """
    times = dict(DEFAULT_PRAYER_TIMES)
    for key, value in (overrides or {}).items():
        prayer_type = _lookup_prayer_type(key)
        if prayer_type is None:
            logger.warning(f"Ignoring time override for unknown prayer: {key}")
            continue
        hour, minute = parse_time(value)
        times[prayer_type] = f"{hour:02d}:{minute:02d}"
    return times


def _lookup_prayer_type(key: Any) -> Optional[PrayerType]:
    if isinstance(key, PrayerType):
        return key
    try:
        return PrayerType(str(key).strip().lower())
    except ValueError:
        return None


def list_prayers(overrides: Optional[Mapping[Any, str]] = None) -> List[Prayer]:
    """All five prayers in order, with scheduled time, units and unit groups."""
    times = prayer_times(overrides)
    return [
        Prayer(
            type=prayer_type,
            time=times[prayer_type],
            units=_UNITS_BY_PRAYER[prayer_type],
            groups=_GROUPS_BY_PRAYER[prayer_type],
        )
        for prayer_type in PrayerType
    ]


def get_prayer(prayer_type: PrayerType, overrides: Optional[Mapping[Any, str]] = None) -> Prayer:
    return list_prayers(overrides)[list(PrayerType).index(prayer_type)]


def get_unit(unit_id: str) -> Optional[PrayerUnit]:
    return _UNITS_BY_ID.get(unit_id)


def is_known_unit(unit_id: str) -> bool:
    return unit_id in _UNITS_BY_ID


def units_for(prayer_type: PrayerType) -> Tuple[PrayerUnit, ...]:
    return _UNITS_BY_PRAYER[prayer_type]


def unit_groups(prayer_type: PrayerType) -> Tuple[UnitGroup, ...]:
    return _GROUPS_BY_PRAYER[prayer_type]


def fard_unit_ids(prayer_type: PrayerType) -> Tuple[str, ...]:
    return tuple(u.id for u in _UNITS_BY_PRAYER[prayer_type] if u.category == PrayerCategory.FARD)


def _by_category(prayer: Prayer, category: PrayerCategory) -> List[PrayerUnit]:
    return [unit for unit in prayer.units if unit.category == category]


def fard_units(prayer: Prayer) -> List[PrayerUnit]:
    return _by_category(prayer, PrayerCategory.FARD)


def sunnat_units(prayer: Prayer) -> List[PrayerUnit]:
    return _by_category(prayer, PrayerCategory.SUNNAT)


def witr_units(prayer: Prayer) -> List[PrayerUnit]:
    return _by_category(prayer, PrayerCategory.WITR)


def nafl_units(prayer: Prayer) -> List[PrayerUnit]:
    """Nafl units; the current catalog declares none."""
    return _by_category(prayer, PrayerCategory.NAFL)
