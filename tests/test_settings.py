# tests/test_settings.py

import os

import pytest
from pydantic import ValidationError

from classroom.core import settings
from classroom.core.settings import Settings


def test_defaults():
    assert settings.PASS_THRESHOLD == 60.0
    assert settings.TOP_N == 5
    assert settings.ROOM_HOURS_PER_DAY * settings.SCHOOL_DAYS_PER_WEEK == 48.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CLASSROOM_PASS_THRESHOLD", "50")
    monkeypatch.setenv("CLASSROOM_TOP_N", "3")
    monkeypatch.setenv("CLASSROOM_LOG_LEVEL", "debug")

    overridden = Settings()

    assert overridden.PASS_THRESHOLD == 50.0
    assert overridden.TOP_N == 3
    assert overridden.LOG_LEVEL == "DEBUG"


def test_data_dir_is_expanded(monkeypatch):
    monkeypatch.setenv("CLASSROOM_DATA_DIR", os.path.join("~", "snapshots"))

    assert Settings().DATA_DIR == os.path.expanduser(os.path.join("~", "snapshots"))


def test_invalid_override_is_rejected(monkeypatch):
    monkeypatch.setenv("CLASSROOM_TOP_N", "five")

    with pytest.raises(ValidationError):
        Settings()
