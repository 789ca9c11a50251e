# tests/test_sample_data.py

from classroom.core.sample_data import build_sample_repository, letter_grade
from classroom.models.schedule import find_conflicts


def test_letter_grade():
    assert letter_grade(95) == "A"
    assert letter_grade(80) == "B"
    assert letter_grade(59.9) == "F"


def test_sample_repository_size(now):
    repository = build_sample_repository(today=now)

    assert len(repository.attendance_records) == 3 * 21 * 6
    assert len(repository.attendance_events) == 3 * 21
    assert len(repository.homeworks) == 15
    assert len(repository.submissions) == 90
    assert len(repository.marks) == 9
    assert len(repository.student_marks) == 54
    assert len(repository.rooms) == 3
    assert len(repository.schedule_entries) == 36
    assert repository.has_unsaved_changes


def test_sample_repository_is_seeded(now):
    first = build_sample_repository(today=now)
    second = build_sample_repository(today=now)

    assert [r.status for r in first.attendance_records.values()] == [
        r.status for r in second.attendance_records.values()
    ]


def test_sample_schedule_has_no_conflicts(now):
    repository = build_sample_repository(today=now)

    assert find_conflicts(repository.schedule_entries.values()) == []


def test_sample_grades_respect_total_marks(now):
    repository = build_sample_repository(today=now)

    for submission in repository.submissions.values():
        homework = repository.homeworks[submission.homework_id]

        assert submission.grade is None or submission.grade <= homework.total_marks
