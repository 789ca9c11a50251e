# tests/test_details.py

import pytest
from conftest import make_record

from classroom.models.details import DetailKind, DetailView, describe_detail
from classroom.stats.summaries import compose_class_attendance, compose_student_attendance


def test_record_detail_uses_placeholders():
    title, rows = describe_detail(DetailView.of_record(make_record("a1", "late")))
    values = dict(rows)

    assert title == "Attendance: Student a1"
    assert values["Status"] == "Late"
    assert values["Time In"] == "-"
    assert values["Notes"] == "Not recorded"


def test_event_detail(sample_event, sample_records):
    sample_event.apply_records(sample_records)

    title, rows = describe_detail(DetailView.of_event(sample_event))

    assert title == "Event: Math - 7A"
    assert dict(rows)["Attendance Rate"] == "75.0%"
    assert dict(rows)["Subject"] == "-"


def test_student_detail(sample_records):
    summary = compose_student_attendance(sample_records)[0]

    view = DetailView.of_student(summary)
    title, rows = describe_detail(view)

    assert view.kind is DetailKind.STUDENT_SUMMARY
    assert title == "Student: Student a1"
    assert dict(rows)["Last Attendance"] == "2025-03-10"


def test_class_detail(sample_records):
    summary = compose_class_attendance(sample_records)["c1"]

    title, rows = describe_detail(DetailView.of_class(summary))

    assert title == "Class: 7A"
    assert dict(rows)["Students"] == "4"
    assert dict(rows)["Attendance Rate"] == "75.0%"


def test_kind_is_coerced_and_validated(sample_records):
    assert DetailView("record", sample_records[0]).kind is DetailKind.RECORD

    with pytest.raises(ValueError):
        DetailView("teacher", None)
