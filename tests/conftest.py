# tests/conftest.py

import datetime

import pytest

from classroom.models.attendance import AttendanceEvent, AttendanceRecord
from classroom.models.homework import Homework, HomeworkSubmission
from classroom.models.marks import Mark, StudentMark
from classroom.models.repository import ClassroomRepository
from classroom.models.schedule import Room, ScheduleEntry

# a Monday
NOW = datetime.date(2025, 3, 10)


def make_record(id, status, date="2025-03-10", student_id=None, class_id="c1", class_name="7A"):
    return AttendanceRecord(
        id=id,
        student_id=student_id or f"s_{id}",
        student_name=f"Student {id}",
        class_id=class_id,
        class_name=class_name,
        date=date,
        status=status,
        marked_by="t1",
        marked_at=f"{date}T08:00:00",
    )


def make_homework(id, assigned_date, due_date, status="assigned", class_id="c1", **kwargs):
    return Homework(
        id=id,
        title=f"Homework {id}",
        subject=kwargs.pop("subject", "Math"),
        class_id=class_id,
        class_name=kwargs.pop("class_name", "7A"),
        teacher_id="t1",
        teacher_name="Ms. Yusuf",
        assigned_date=assigned_date,
        due_date=due_date,
        status=status,
        **kwargs,
    )


def make_entry(id, date="2025-03-10", start="09:00", end="10:30", **kwargs):
    fields = {
        "subject": "Math",
        "class_id": "c1",
        "class_name": "7A",
        "teacher_id": "t1",
        "teacher_name": "Ms. Yusuf",
        "room_id": "r1",
        "room_name": "Room 101",
    }
    fields.update(kwargs)

    return ScheduleEntry(
        id=id,
        title=f"Session {id}",
        date=date,
        start_time=start,
        end_time=end,
        **fields,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_records():
    return [
        make_record("a1", "present"),
        make_record("a2", "present"),
        make_record("a3", "absent"),
        make_record("a4", "late"),
    ]


@pytest.fixture
def sample_event():
    return AttendanceEvent(
        id="e1",
        title="Math - 7A",
        date="2025-03-10",
        start_time="08:00",
        end_time="09:30",
        class_id="c1",
        class_name="7A",
        teacher_id="t1",
        teacher_name="Ms. Yusuf",
        total_students=4,
        created_at="2025-03-01T08:00:00",
    )


@pytest.fixture
def sample_homework():
    return make_homework(
        "hw1", "2025-03-03", "2025-03-12", total_marks=20, due_time="17:00"
    )


@pytest.fixture
def sample_submission():
    return HomeworkSubmission(
        id="sub1",
        homework_id="hw1",
        student_id="s1",
        student_name="Ada Obi",
    )


@pytest.fixture
def sample_mark():
    return Mark(
        id="m1",
        title="Algebra Quiz",
        subject="Math",
        class_name="7A",
        type="quiz",
        total_marks=50,
        date="2025-03-07",
        status="published",
        created_at="2025-03-07T10:00:00",
    )


@pytest.fixture
def sample_student_marks():
    return [
        StudentMark("sm1", "m1", "s1", "Ada", "Math", 45, 50, grade="A"),
        StudentMark("sm2", "m1", "s2", "Bayo", "Math", 32.5, 50, grade="C"),
        StudentMark("sm3", "m1", "s3", "Chidi", "Math", 20, 50, grade="F"),
        StudentMark("sm4", "m1", "s4", "Dami", "Math", 0, 50, is_exempted=True),
    ]


@pytest.fixture
def sample_room():
    return Room("r1", "Room 101", capacity=30)


@pytest.fixture
def sample_entries():
    return [
        make_entry("se1"),
        make_entry(
            "se2",
            start="11:00",
            end="12:00",
            teacher_id="t2",
            teacher_name="Mr. Okafor",
            class_id="c2",
            class_name="8B",
        ),
        make_entry("se3", date="2025-03-11", start="09:00", end="10:00", status="scheduled"),
    ]


@pytest.fixture
def sample_repository():
    return ClassroomRepository()
