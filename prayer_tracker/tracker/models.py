"""
SQLAlchemy model for prayer records: one row per date, one boolean column per
catalog unit id. The column names are the durable storage contract.
"""
from sqlalchemy import Column, String, Boolean

from prayer_tracker.core.db import Base


def _flag() -> Column:
    return Column(Boolean, default=False, nullable=False)


class PrayerRecordRow(Base):
    """A full day's prayer completion. date is 'YYYY-MM-DD'."""
    __tablename__ = "prayer_records"

    date = Column(String(10), primary_key=True)

    # Fajr (2 Sunnat, 2 Fard)
    fajr_sunnat_1 = _flag()
    fajr_sunnat_2 = _flag()
    fajr_fard_1 = _flag()
    fajr_fard_2 = _flag()

    # Dhuhr (4 Sunnat, 4 Fard, 2 Sunnat)
    dhuhr_sunnat_pre_1 = _flag()
    dhuhr_sunnat_pre_2 = _flag()
    dhuhr_sunnat_pre_3 = _flag()
    dhuhr_sunnat_pre_4 = _flag()
    dhuhr_fard_1 = _flag()
    dhuhr_fard_2 = _flag()
    dhuhr_fard_3 = _flag()
    dhuhr_fard_4 = _flag()
    dhuhr_sunnat_post_1 = _flag()
    dhuhr_sunnat_post_2 = _flag()

    # Asr (4 Sunnat, 4 Fard)
    asr_sunnat_1 = _flag()
    asr_sunnat_2 = _flag()
    asr_sunnat_3 = _flag()
    asr_sunnat_4 = _flag()
    asr_fard_1 = _flag()
    asr_fard_2 = _flag()
    asr_fard_3 = _flag()
    asr_fard_4 = _flag()

    # Maghrib (3 Fard, 2 Sunnat)
    maghrib_fard_1 = _flag()
    maghrib_fard_2 = _flag()
    maghrib_fard_3 = _flag()
    maghrib_sunnat_1 = _flag()
    maghrib_sunnat_2 = _flag()

    # Isha (4 Sunnat, 4 Fard, 2 Sunnat, 3 Witr)
    isha_sunnat_pre_1 = _flag()
    isha_sunnat_pre_2 = _flag()
    isha_sunnat_pre_3 = _flag()
    isha_sunnat_pre_4 = _flag()
    isha_fard_1 = _flag()
    isha_fard_2 = _flag()
    isha_fard_3 = _flag()
    isha_fard_4 = _flag()
    isha_sunnat_post_1 = _flag()
    isha_sunnat_post_2 = _flag()
    isha_witr_1 = _flag()
    isha_witr_2 = _flag()
    isha_witr_3 = _flag()
