# tests/test_formatters.py

import datetime

import pytest
from conftest import make_record

import classroom.cli.formatters as cli_formatters
import classroom.core.formatters as formatters
from classroom.stats.summaries import compose_attendance_stats, compose_marks_stats


# === core formatters ===


def test_format_optional_uses_placeholder():
    assert formatters.format_optional(None) == "-"
    assert formatters.format_optional("") == "-"
    assert formatters.format_optional(0) == "0"
    assert formatters.format_optional(None, "Not recorded") == "Not recorded"


def test_format_rate_and_hours():
    assert formatters.format_rate(75) == "75.0%"
    assert formatters.format_rate(200 / 3) == "66.7%"
    assert formatters.format_hours(1.5) == "1.5h"


def test_format_label():
    assert formatters.format_label("in_progress") == "In Progress"
    assert formatters.format_label("late") == "Late"


def test_to_iso_date():
    assert formatters.to_iso_date(datetime.date(2025, 3, 10)) == "2025-03-10"
    assert formatters.to_iso_date(datetime.datetime(2025, 3, 10, 9, 30)) == "2025-03-10"
    assert formatters.to_iso_date("2025-03-10T08:00:00") == "2025-03-10"


def test_hours_between():
    assert formatters.hours_between("09:00", "10:30") == 1.5
    assert formatters.hours_between("11:00", "10:00") == 0


def test_hours_between_rejects_bad_times():
    with pytest.raises(ValueError):
        formatters.hours_between("9am", "10:00")


def test_day_of_week_and_month_key():
    assert formatters.day_of_week("2025-03-10") == "monday"
    assert formatters.day_of_week("2025-03-16") == "sunday"
    assert formatters.format_month_key("2025-03-10") == "2025-03"


# === terminal formatters ===


def test_attendance_rate_flags_low_values():
    assert cli_formatters.format_attendance_rate(80.0) == "80.0%"
    assert cli_formatters.format_attendance_rate(79.9) == "79.9% [LOW]"


def test_distribution_is_sorted_by_count():
    text = cli_formatters.format_distribution("By Status", {"late": 1, "present": 3})

    assert text.index("Present") < text.index("Late")


def test_empty_distribution():
    assert cli_formatters.NO_DATA in cli_formatters.format_distribution("By Status", {})


def test_empty_stats_render_no_data(now):
    assert cli_formatters.NO_DATA in cli_formatters.format_attendance_stats(
        compose_attendance_stats([], now=now)
    )
    assert cli_formatters.NO_DATA in cli_formatters.format_marks_stats(compose_marks_stats([]))


def test_attendance_stats_screen(now, sample_records):
    text = cli_formatters.format_attendance_stats(
        compose_attendance_stats(sample_records + [make_record("a5", "excused")], now=now)
    )

    assert "Attendance" in text
    assert "Top Classes" in text
    assert "60.0% [LOW]" in text
