"""Root conftest for all tests."""

import pytest

from src.kamar.session import Session


@pytest.fixture
def session() -> Session:
    return Session(portal="school.example", year=2024)
