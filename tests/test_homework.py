# tests/test_homework.py

import datetime

import pytest
from conftest import make_homework

from classroom.models.homework import (
    Homework,
    HomeworkStatus,
    HomeworkSubmission,
    SubmissionStatus,
    derive_homework_status,
    derive_submission_lateness,
    validate_marks_input,
)


# === validation ===


def test_validate_marks_input():
    assert validate_marks_input("12.5") == 12.5

    with pytest.raises(TypeError):
        validate_marks_input("twelve")

    with pytest.raises(ValueError):
        validate_marks_input(-1)

    with pytest.raises(ValueError):
        validate_marks_input(float("inf"))


def test_homework_total_marks_is_optional():
    homework = make_homework("hw1", "2025-03-03", "2025-03-12")

    assert homework.total_marks is None


def test_homework_round_trip(sample_homework):
    restored = Homework.from_dict(sample_homework.to_dict())

    assert restored.id == "hw1"
    assert restored.total_marks == 20.0
    assert restored.due_time == "17:00"
    assert restored.status is HomeworkStatus.ASSIGNED


def test_due_at_defaults_to_end_of_day():
    homework = make_homework("hw1", "2025-03-03", "2025-03-12")

    assert homework.due_at == datetime.datetime(2025, 3, 12, 23, 59, 59)


# === status derivation ===


def test_completed_is_never_overridden(now):
    homework = make_homework("hw1", "2025-02-01", "2025-02-10", status="completed")

    assert derive_homework_status(now, homework) is HomeworkStatus.COMPLETED


def test_future_assignment_is_draft(now):
    homework = make_homework("hw1", "2025-03-11", "2025-03-20")

    assert derive_homework_status(now, homework) is HomeworkStatus.DRAFT


def test_past_due_is_overdue(now):
    homework = make_homework("hw1", "2025-03-01", "2025-03-09", status="in_progress")

    assert derive_homework_status(now, homework) is HomeworkStatus.OVERDUE


def test_due_today_is_not_overdue(now):
    homework = make_homework("hw1", "2025-03-01", "2025-03-10", status="in_progress")

    assert derive_homework_status(now, homework) is HomeworkStatus.IN_PROGRESS


def test_stale_status_falls_back_to_assigned(now):
    homework = make_homework("hw1", "2025-03-01", "2025-03-12", status="overdue")

    assert derive_homework_status(now, homework) is HomeworkStatus.ASSIGNED


def test_derive_accepts_datetime(now):
    homework = make_homework("hw1", "2025-03-11", "2025-03-20")

    assert derive_homework_status(
        datetime.datetime(2025, 3, 11, 7, 0), homework
    ) is HomeworkStatus.ASSIGNED


# === submissions ===


def test_unsubmitted_is_never_late(sample_submission, sample_homework):
    assert derive_submission_lateness(sample_submission, sample_homework) == (False, 0)
    assert not sample_submission.is_submitted


def test_submit_on_time(sample_submission, sample_homework):
    sample_submission.submit("2025-03-12T16:59:00", sample_homework)

    assert sample_submission.status is SubmissionStatus.SUBMITTED
    assert not sample_submission.is_late
    assert sample_submission.days_late == 0


def test_submit_late_rounds_days_up(sample_submission, sample_homework):
    sample_submission.submit("2025-03-12T17:05:00", sample_homework)

    assert sample_submission.status is SubmissionStatus.LATE
    assert sample_submission.is_late
    assert sample_submission.days_late == 1


def test_submit_several_days_late(sample_submission, sample_homework):
    sample_submission.submit("2025-03-14T18:00:00+01:00", sample_homework)

    assert sample_submission.days_late == 3


def test_submit_with_bad_timestamp_leaves_submission_unchanged(sample_submission, sample_homework):
    with pytest.raises(ValueError):
        sample_submission.submit("yesterday", sample_homework)

    assert sample_submission.submitted_at is None
    assert sample_submission.status is SubmissionStatus.NOT_SUBMITTED


def test_record_grade(sample_submission):
    sample_submission.record_grade(18, "t1", "2025-03-13T09:00:00", "Well done")

    assert sample_submission.status is SubmissionStatus.GRADED
    assert sample_submission.grade == 18.0
    assert sample_submission.feedback == "Well done"
    assert sample_submission.is_submitted


def test_negative_grade_is_rejected(sample_submission):
    with pytest.raises(ValueError):
        sample_submission.grade = -3


def test_submission_round_trip(sample_submission, sample_homework):
    sample_submission.submit("2025-03-13T10:00:00", sample_homework)

    restored = HomeworkSubmission.from_dict(sample_submission.to_dict())

    assert restored.status is SubmissionStatus.LATE
    assert restored.days_late == 1
    assert restored.submitted_at == "2025-03-13T10:00:00"


def test_homework_rejects_non_canonical_dates():
    for date in ("20250312", "2025-3-12", "2025-W11-3"):
        with pytest.raises(ValueError):
            make_homework("hw1", "2025-03-03", date)

        with pytest.raises(ValueError):
            make_homework("hw1", date, "2025-03-20")
