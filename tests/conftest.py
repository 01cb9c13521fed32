import pytest

from prayer_tracker.core import db
from prayer_tracker.core.config import Config
from prayer_tracker.tracker.catalog import FARD_UNIT_IDS
from prayer_tracker.tracker.record import DayRecord


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database file per test."""
    db.dispose_db()
    db.init_db(db_url=f"sqlite:///{tmp_path / 'test.db'}")
    yield db.get_engine()
    db.dispose_db()


@pytest.fixture
def config(tmp_path):
    """Config backed by a default config.yaml in a temp dir (no file watching)."""
    cfg = Config(config_path=str(tmp_path / "config.yaml"))
    yield cfg
    cfg.cleanup()


@pytest.fixture
def all_fard_record():
    def _make(day="2025-06-10"):
        return DayRecord.with_completed(day, FARD_UNIT_IDS)
    return _make
