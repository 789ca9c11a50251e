# classroom/core/settings.py

"""
Program-wide settings.

Each value has a default and can be overridden with a `CLASSROOM_<NAME>` environment variable
(e.g. `CLASSROOM_PASS_THRESHOLD=50`), read once at import time. The values are re-exported as
module constants so callers read `settings.TOP_N` and friends.
"""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # minimum percentage for a StudentMark to count as a pass
    PASS_THRESHOLD: float = 60.0

    # attendance rates at or above this are shown as healthy
    GOOD_ATTENDANCE_THRESHOLD: float = 80.0

    TOP_N: int = 5

    ROOM_HOURS_PER_DAY: float = 8.0
    SCHOOL_DAYS_PER_WEEK: int = 6
    DEFAULT_MAX_WEEKLY_HOURS: float = 40.0

    DATA_DIR: str = os.path.join("~", "Documents", "Classroom")
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="CLASSROOM_", extra="ignore")

    @field_validator("DATA_DIR")
    @classmethod
    def _expand_data_dir(cls, value: str) -> str:
        return os.path.expanduser(value)

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


settings = Settings()

# === grading ===

PASS_THRESHOLD: float = settings.PASS_THRESHOLD
GOOD_ATTENDANCE_THRESHOLD: float = settings.GOOD_ATTENDANCE_THRESHOLD

# === rankings ===

TOP_N: int = settings.TOP_N

# === scheduling ===

ROOM_HOURS_PER_DAY: float = settings.ROOM_HOURS_PER_DAY
SCHOOL_DAYS_PER_WEEK: int = settings.SCHOOL_DAYS_PER_WEEK
DEFAULT_MAX_WEEKLY_HOURS: float = settings.DEFAULT_MAX_WEEKLY_HOURS

# === persistence and logging ===

DATA_DIR: str = settings.DATA_DIR
LOG_LEVEL: str = settings.LOG_LEVEL
