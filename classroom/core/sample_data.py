# classroom/core/sample_data.py

"""
Generates a reproducible demo snapshot for the dashboard.

Every record is created through the `ClassroomRepository.create_*` operations, so the generated data
passes the same validation as records entered by hand. The generator is seeded, which means two calls
with the same `seed` and `today` produce the same records apart from their synthetic ids.
"""

from __future__ import annotations

import datetime
import logging
import random

from classroom.core.response import Response
from classroom.models.attendance import AttendanceStatus
from classroom.models.homework import (
    Difficulty,
    HomeworkType,
    Priority,
)
from classroom.models.marks import MarkStatus, MarkType
from classroom.models.repository import ClassroomRepository
from classroom.models.schedule import EntryStatus, EntryType

logger = logging.getLogger(__name__)

CLASSES = [
    ("class_7a", "Class 7A", "teacher_1", "Amina Yusuf", "Mathematics"),
    ("class_8b", "Class 8B", "teacher_2", "David Okafor", "Physics"),
    ("class_9c", "Class 9C", "teacher_3", "Grace Bello", "English"),
]

FIRST_NAMES = ["Ada", "Bayo", "Chidi", "Dami", "Efe", "Funmi", "Gbenga", "Halima"]

ROOMS = [
    ("Room 101", "classroom", 35, "Block A"),
    ("Science Lab", "lab", 24, "Block B"),
    ("Library", "library", 50, "Main Hall"),
]

PERIODS = [("08:00", "09:30"), ("10:00", "11:00"), ("11:30", "13:00"), ("14:00", "15:00")]

# weighted so the demo attendance rate lands in the 80s
STATUS_WEIGHTS = {
    AttendanceStatus.PRESENT: 78,
    AttendanceStatus.LATE: 8,
    AttendanceStatus.ABSENT: 10,
    AttendanceStatus.EXCUSED: 4,
}


def letter_grade(percentage: float) -> str:
    for threshold, letter in ((90, "A"), (80, "B"), (70, "C"), (60, "D")):
        if percentage >= threshold:
            return letter

    return "F"


def _unwrap(response: Response):
    if not response.success:
        raise RuntimeError(f"Sample data generation failed: {response}")

    return response.data["record"]


def build_sample_repository(
    today: datetime.date | None = None,
    seed: int = 7,
    students_per_class: int = 6,
    days: int = 21,
) -> ClassroomRepository:
    """
    Builds an in-memory repository populated with demo records around `today`.

    Args:
        today (datetime.date | None): Anchor date for generated dates. Defaults to the current date.
        seed (int): Seed for the private random generator.
        students_per_class (int): Roster size of each demo class.
        days (int): How many school days of attendance history to generate, ending today.

    Returns:
        ClassroomRepository: A repository with attendance, homework, marks and schedule records.
            It is marked dirty, since nothing has been saved yet.

    Raises:
        RuntimeError: If a generated record is rejected by the repository.
    """
    today = today or datetime.date.today()
    rng = random.Random(seed)
    repository = ClassroomRepository()

    rosters = {
        class_id: [
            (f"{class_id}_student_{i + 1}", f"{rng.choice(FIRST_NAMES)} {class_name[-2:]}-{i + 1}")
            for i in range(students_per_class)
        ]
        for class_id, class_name, *_ in CLASSES
    }

    _generate_attendance(repository, rng, rosters, today, days)
    _generate_homework(repository, rng, rosters, today)
    _generate_marks(repository, rng, rosters, today)
    _generate_schedule(repository, rng, today)

    logger.info("Generated sample snapshot with %d records", len(repository))

    return repository


def _school_days(today: datetime.date, days: int) -> list[datetime.date]:
    dates = []
    current = today

    while len(dates) < days:
        if current.weekday() < 6:
            dates.append(current)
        current -= datetime.timedelta(days=1)

    return sorted(dates)


def _generate_attendance(repository, rng, rosters, today, days) -> None:
    statuses = list(STATUS_WEIGHTS)
    weights = list(STATUS_WEIGHTS.values())

    for class_id, class_name, teacher_id, teacher_name, subject in CLASSES:
        start_time, end_time = PERIODS[0]

        for date in _school_days(today, days):
            iso = date.isoformat()

            for student_id, student_name in rosters[class_id]:
                status = rng.choices(statuses, weights)[0]
                _unwrap(
                    repository.create_attendance_record(
                        student_id=student_id,
                        student_name=student_name,
                        class_id=class_id,
                        class_name=class_name,
                        date=iso,
                        status=status,
                        marked_by=teacher_name,
                        time_in=start_time if status.counts_as_attended else None,
                    )
                )

            event = _unwrap(
                repository.create_attendance_event(
                    title=f"{subject} - {class_name}",
                    date=iso,
                    start_time=start_time,
                    end_time=end_time,
                    class_id=class_id,
                    class_name=class_name,
                    teacher_id=teacher_id,
                    teacher_name=teacher_name,
                    total_students=len(rosters[class_id]),
                    subject_name=subject,
                    status="scheduled" if date == today else "completed",
                    created_by=teacher_name,
                )
            )
            repository.update_event_counts(event.id)


def _generate_homework(repository, rng, rosters, today) -> None:
    for class_id, class_name, teacher_id, teacher_name, subject in CLASSES:
        for offset in (-14, -6, -1, 3, 9):
            assigned = today + datetime.timedelta(days=offset - 7)
            due = today + datetime.timedelta(days=offset)

            homework = _unwrap(
                repository.create_homework(
                    title=f"{subject} worksheet {offset + 15}",
                    subject=subject,
                    class_id=class_id,
                    class_name=class_name,
                    teacher_id=teacher_id,
                    teacher_name=teacher_name,
                    assigned_date=assigned.isoformat(),
                    due_date=due.isoformat(),
                    type=rng.choice(list(HomeworkType)),
                    priority=rng.choice(list(Priority)),
                    difficulty=rng.choice(list(Difficulty)),
                    total_marks=20,
                    created_by=teacher_name,
                )
            )

            for student_id, student_name in rosters[class_id]:
                submission = _unwrap(
                    repository.create_submission(
                        homework_id=homework.id,
                        student_id=student_id,
                        student_name=student_name,
                    )
                )

                if assigned > today or rng.random() < 0.2:
                    continue

                submitted = datetime.datetime.combine(
                    due, datetime.time(hour=rng.randint(8, 20))
                ) + datetime.timedelta(days=rng.choice((-2, -1, 0, 0, 1)))

                if submitted.date() > today:
                    continue

                repository.submit_homework(submission.id, submitted.isoformat())

                if due < today and rng.random() < 0.7:
                    repository.grade_submission(
                        submission.id, rng.randint(8, 20), teacher_name
                    )

    repository.refresh_homework_statuses(today)


def _generate_marks(repository, rng, rosters, today) -> None:
    for class_id, class_name, teacher_id, teacher_name, subject in CLASSES:
        for offset, mark_type in ((-20, MarkType.QUIZ), (-9, MarkType.TEST), (-2, MarkType.EXAM)):
            total = 50 if mark_type is MarkType.EXAM else 20
            mark = _unwrap(
                repository.create_mark(
                    title=f"{subject} {mark_type.value}",
                    subject=subject,
                    class_name=class_name,
                    type=mark_type,
                    total_marks=total,
                    date=(today + datetime.timedelta(days=offset)).isoformat(),
                    status=MarkStatus.DRAFT if offset > -3 else MarkStatus.PUBLISHED,
                    created_by=teacher_name,
                )
            )

            for student_id, student_name in rosters[class_id]:
                obtained = round(rng.uniform(0.35, 1.0) * total, 1)
                _unwrap(
                    repository.create_student_mark(
                        mark_id=mark.id,
                        student_id=student_id,
                        student_name=student_name,
                        subject=subject,
                        obtained_marks=obtained,
                        total_marks=total,
                        grade=letter_grade(obtained / total * 100),
                        is_exempted=rng.random() < 0.05,
                        graded_by=teacher_name,
                    )
                )


def _generate_schedule(repository, rng, today) -> None:
    rooms = [
        _unwrap(repository.create_room(name=name, type=kind, capacity=capacity, location=location))
        for name, kind, capacity, location in ROOMS
    ]

    monday = today - datetime.timedelta(days=today.weekday())

    for day in range(6):
        date = monday + datetime.timedelta(days=day)

        for i, (class_id, class_name, teacher_id, teacher_name, subject) in enumerate(CLASSES):
            for start_time, end_time in rng.sample(PERIODS, 2):
                room = rooms[(i + day) % len(rooms)]

                if date < today:
                    status = EntryStatus.COMPLETED if rng.random() < 0.9 else EntryStatus.CANCELLED
                else:
                    status = EntryStatus.SCHEDULED

                _unwrap(
                    repository.create_schedule_entry(
                        title=f"{subject} ({class_name})",
                        subject=subject,
                        class_id=class_id,
                        class_name=class_name,
                        teacher_id=teacher_id,
                        teacher_name=teacher_name,
                        date=date.isoformat(),
                        start_time=start_time,
                        end_time=end_time,
                        type=EntryType.LAB if room.type == "lab" else EntryType.LECTURE,
                        status=status,
                        room_id=room.id,
                        room_name=room.name,
                        created_by=teacher_name,
                    )
                )
