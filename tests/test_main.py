import pytest
import yaml

from prayer_tracker import main as cli
from prayer_tracker.core import db


@pytest.fixture
def cli_config(tmp_path):
    db.dispose_db()
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({
        "database": {"path": str(tmp_path / "cli.db")},
        "logging": {"level": "WARNING"},
    }))
    yield str(path)
    db.dispose_db()


def test_toggle_and_show(cli_config, capsys):
    assert cli.main(["--config", cli_config, "toggle", "2099-01-05", "fajr_fard_1", "fajr_fard_2"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "2099-01-05: partial"
    assert "[x] 2 Rakat Fard: fajr_fard_1, fajr_fard_2" in out

    assert cli.main(["--config", cli_config, "show", "2099-01-05"]) == 0
    assert "[ ] 2 Rakat Sunnat" in capsys.readouterr().out


def test_calendar_output(cli_config, capsys):
    assert cli.main(["--config", cli_config, "calendar", "2099-02"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2099-02"
    assert lines[1].split()[0] == "Sun"
    assert lines[-1] == "Days with all Fard completed: 0"


def test_invalid_date_exits_with_error(cli_config, capsys):
    assert cli.main(["--config", cli_config, "show", "tomorrow"]) == 2
    assert "error:" in capsys.readouterr().err
