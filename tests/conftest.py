"""Shared fixtures for freedb tests."""

import pytest

from freedb.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run each test in its own directory with default settings."""
    monkeypatch.chdir(tmp_path)
    for var in ("FREEDB_DB_FILE", "FREEDB_AUTOLOAD", "FREEDB_LOG_LEVEL", "FREEDB_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path):
    """Path for a database file inside the test directory."""
    return tmp_path / "test.db"


@pytest.fixture
def people_rows():
    """Rows for a table with name and age columns."""
    return [
        {"name": "A", "age": 30},
        {"name": "B", "age": 30},
        {"name": "C", "age": 25},
    ]
