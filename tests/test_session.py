import pytest

from src.kamar.config import KamarConfig
from src.kamar.errors import StateError
from src.kamar.session import Session


def test_grid_defaults_to_year_tt():
    assert Session(portal="school.example", year=2023).timetable_grid == "2023TT"
    assert Session(portal="school.example", year=2023, timetable_grid="Y23").timetable_grid == "Y23"


def test_api_url():
    assert Session(portal="school.example").api_url == "https://school.example/api/api.php"


def test_week_index_required_before_timetable(session):
    with pytest.raises(StateError):
        session.require_week_index()
    session.record_week_index(4)
    assert session.require_week_index() == 4


def test_from_config(monkeypatch):
    monkeypatch.setenv("KAMAR_PORTAL", "remote.school.example")
    monkeypatch.setenv("KAMAR_YEAR", "2025")
    monkeypatch.setenv("KAMAR_SCHOOL_NAME", "Example College")
    session = Session.from_config(KamarConfig(_env_file=None))

    assert session.portal == "remote.school.example"
    assert session.year == 2025
    assert session.timetable_grid == "2025TT"
    assert session.school_name == "Example College"
    assert session.week_index is None


def test_from_config_requires_portal(monkeypatch):
    monkeypatch.delenv("KAMAR_PORTAL", raising=False)
    with pytest.raises(ValueError, match="KAMAR_PORTAL"):
        Session.from_config(KamarConfig(_env_file=None))
