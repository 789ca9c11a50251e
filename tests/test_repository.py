# tests/test_repository.py

import json
import os
import tempfile

from conftest import make_record

from classroom.core.response import ErrorCode
from classroom.models.attendance import AttendanceEvent, AttendanceRecord
from classroom.models.homework import Homework, HomeworkSubmission, SubmissionStatus
from classroom.models.marks import Mark, StudentMark
from classroom.models.repository import ClassroomRepository
from classroom.models.schedule import Room


def create_graded_homework(repository):
    homework = repository.create_homework(
        title="Fractions",
        subject="Math",
        class_id="c1",
        class_name="7A",
        teacher_id="t1",
        teacher_name="Ms. Yusuf",
        assigned_date="2025-03-03",
        due_date="2025-03-12",
        total_marks=20,
    ).data["record"]
    submission = repository.create_submission(
        homework_id=homework.id, student_id="s1", student_name="Ada"
    ).data["record"]

    return homework, submission


# === data manipulators ===


def test_mark_dirty(sample_repository):
    assert not sample_repository.has_unsaved_changes

    sample_repository._mark_dirty()
    assert sample_repository.has_unsaved_changes


def test_add_record(sample_repository, sample_records):
    response = sample_repository.add_record(sample_records[0])

    assert response.success
    assert response.status_code == 201
    assert sample_repository.attendance_records["a1"] is sample_records[0]
    assert sample_repository.has_unsaved_changes


def test_add_duplicate_record(sample_repository, sample_records):
    sample_repository.add_record(sample_records[0])

    response = sample_repository.add_record(make_record("a1", "absent"))

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_ID
    assert sample_repository.attendance_records["a1"].status.value == "present"


def test_add_unsupported_record(sample_repository):
    response = sample_repository.add_record("not a record")

    assert response.error is ErrorCode.INVALID_INPUT


def test_create_record_assigns_prefixed_id(sample_repository):
    response = sample_repository.create_room(name="Room 101", capacity=30)

    assert response.success
    room = response.data["record"]
    assert room.id.startswith("room_")
    assert sample_repository.find_record_by_id(Room, room.id).data["record"] is room


def test_create_record_sets_timestamps(sample_repository):
    record = sample_repository.create_attendance_record(
        student_id="s1",
        student_name="Ada",
        class_id="c1",
        class_name="7A",
        date="2025-03-10",
        status="present",
        marked_by="t1",
    ).data["record"]

    assert record.id.startswith("attendance_")
    assert record.marked_at
    assert record.updated_at == record.marked_at


def test_create_record_with_invalid_value(sample_repository):
    response = sample_repository.create_mark(
        title="Quiz",
        subject="Math",
        class_name="7A",
        type="quiz",
        total_marks=0,
        date="2025-03-10",
    )

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_repository.marks == {}
    assert not sample_repository.has_unsaved_changes


def test_create_record_with_missing_field(sample_repository):
    response = sample_repository.create_room(capacity=30)

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


def test_create_submission_requires_homework(sample_repository):
    response = sample_repository.create_submission(
        homework_id="missing", student_id="s1", student_name="Ada"
    )

    assert response.error is ErrorCode.NOT_FOUND


def test_create_student_mark_requires_mark(sample_repository):
    response = sample_repository.create_student_mark(
        mark_id="missing",
        student_id="s1",
        student_name="Ada",
        subject="Math",
        obtained_marks=10,
        total_marks=20,
    )

    assert response.error is ErrorCode.NOT_FOUND


def test_update_record(sample_repository, sample_records):
    sample_repository.add_record(sample_records[0])

    replacement = make_record("a1", "excused")
    response = sample_repository.update_record(replacement)

    assert response.success
    assert sample_repository.attendance_records["a1"] is replacement
    assert replacement.updated_at != replacement.marked_at


def test_update_missing_record(sample_repository, sample_records):
    response = sample_repository.update_record(sample_records[0])

    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_remove_record(sample_repository, sample_records):
    sample_repository.add_record(sample_records[0])

    response = sample_repository.remove_record(AttendanceRecord, "a1")

    assert response.success
    assert sample_repository.attendance_records == {}
    assert not sample_repository.remove_record(AttendanceRecord, "a1").success


def test_remove_homework_removes_submissions(sample_repository):
    homework, _ = create_graded_homework(sample_repository)

    sample_repository.remove_record(Homework, homework.id)

    assert sample_repository.submissions == {}


def test_remove_mark_removes_results(sample_repository, sample_mark):
    sample_repository.add_record(sample_mark)
    sample_repository.create_student_mark(
        mark_id="m1",
        student_id="s1",
        student_name="Ada",
        subject="Math",
        obtained_marks=40,
        total_marks=50,
    )

    sample_repository.remove_record(Mark, "m1")

    assert sample_repository.student_marks == {}


# === data accessors ===


def test_find_missing_record(sample_repository):
    response = sample_repository.find_record_by_id(Homework, "hw404")

    assert response.error is ErrorCode.NOT_FOUND


def test_get_records_with_predicate(sample_repository, sample_records):
    for record in sample_records:
        sample_repository.add_record(record)

    response = sample_repository.get_records(AttendanceRecord, lambda r: r.attended)

    assert [r.id for r in response.data["records"]] == ["a1", "a2", "a4"]
    assert len(sample_repository.get_records(AttendanceRecord).data["records"]) == 4


def test_get_records_of_unknown_type(sample_repository):
    assert sample_repository.get_records(dict).error is ErrorCode.INVALID_INPUT


# === homework operations ===


def test_grade_submission(sample_repository):
    _, submission = create_graded_homework(sample_repository)

    response = sample_repository.grade_submission(submission.id, 18, "t1", "Good work")

    assert response.success
    assert submission.status is SubmissionStatus.GRADED
    assert submission.grade == 18.0


def test_grade_above_total_marks_is_rejected(sample_repository):
    _, submission = create_graded_homework(sample_repository)

    response = sample_repository.grade_submission(submission.id, 21, "t1")

    assert response.error is ErrorCode.VALIDATION_FAILED
    assert submission.grade is None
    assert submission.status is SubmissionStatus.NOT_SUBMITTED


def test_grade_with_invalid_value(sample_repository):
    _, submission = create_graded_homework(sample_repository)

    assert sample_repository.grade_submission(submission.id, -2, "t1").error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_repository.grade_submission(submission.id, "A+", "t1").error is ErrorCode.INVALID_FIELD_VALUE


def test_grade_missing_submission(sample_repository):
    assert sample_repository.grade_submission("nope", 5, "t1").error is ErrorCode.NOT_FOUND


def test_submit_homework_derives_lateness(sample_repository):
    _, submission = create_graded_homework(sample_repository)

    response = sample_repository.submit_homework(submission.id, "2025-03-14T09:00:00")

    assert response.success
    assert submission.status is SubmissionStatus.LATE
    assert submission.days_late == 2


def test_submit_homework_with_bad_timestamp(sample_repository):
    _, submission = create_graded_homework(sample_repository)

    response = sample_repository.submit_homework(submission.id, "yesterday")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert submission.submitted_at is None
    assert submission.status is SubmissionStatus.NOT_SUBMITTED
    assert not submission.is_late


def test_refresh_homework_statuses(sample_repository, now):
    homework, _ = create_graded_homework(sample_repository)
    homework.due_date = "2025-03-07"

    response = sample_repository.refresh_homework_statuses(now)

    assert response.data["changed"] == [homework.id]
    assert homework.status.value == "overdue"


# === attendance operations ===


def test_update_event_counts(sample_repository, sample_event, sample_records):
    sample_repository.add_record(sample_event)
    for record in sample_records:
        sample_repository.add_record(record)

    response = sample_repository.update_event_counts("e1")

    assert response.success
    assert sample_event.attendance_rate == 75.0


def test_update_event_counts_without_records(sample_repository, sample_event):
    sample_repository.add_record(sample_event)

    response = sample_repository.update_event_counts("e1")

    assert response.error is ErrorCode.NOT_FOUND
    assert sample_event.total_students == 4


# === persistence and import ===


def test_save_and_load(sample_repository, sample_records, sample_event, sample_mark):
    for record in sample_records:
        sample_repository.add_record(record)
    sample_repository.add_record(sample_event)
    sample_repository.add_record(sample_mark)
    create_graded_homework(sample_repository)

    with tempfile.TemporaryDirectory() as temp_dir:
        response = sample_repository.save(temp_dir)

        assert response.success
        assert not sample_repository.has_unsaved_changes
        assert os.path.isfile(os.path.join(temp_dir, "attendance_records.json"))

        with open(os.path.join(temp_dir, "attendance_records.json")) as f:
            assert len(json.load(f)) == 4

        loaded = ClassroomRepository.load(temp_dir).data["repository"]

    assert len(loaded) == len(sample_repository)
    assert loaded.attendance_records["a3"].status.value == "absent"
    assert isinstance(loaded.attendance_events["e1"], AttendanceEvent)
    assert list(loaded.submissions.values())[0].__class__ is HomeworkSubmission
    assert not loaded.has_unsaved_changes


def test_save_without_directory(sample_repository):
    assert sample_repository.save().error is ErrorCode.MISSING_REQUIRED_FIELD


def test_load_rejects_malformed_json():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "rooms.json"), "w") as f:
            f.write("{not json")

        response = ClassroomRepository.load(temp_dir)

    assert response.error is ErrorCode.INVALID_INPUT


def test_load_fails_fast_on_bad_record():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "student_marks.json"), "w") as f:
            json.dump([{"id": "sm1", "mark_id": "m1"}], f)

        response = ClassroomRepository.load(temp_dir)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_rejects_duplicate_ids():
    room = Room("r1", "Room 101").to_dict()

    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "rooms.json"), "w") as f:
            json.dump([room, room], f)

        response = ClassroomRepository.load(temp_dir)

    assert not response.success


def test_student_marks_round_trip_through_snapshot(sample_repository, sample_student_marks):
    for result in sample_student_marks:
        sample_repository.add_record(result)

    with tempfile.TemporaryDirectory() as temp_dir:
        sample_repository.save(temp_dir)
        loaded = ClassroomRepository.load(temp_dir).data["repository"]

    assert loaded.student_marks["sm4"].is_exempted
    assert isinstance(loaded.student_marks["sm1"], StudentMark)
