# classroom/models/homework.py

"""
Homework assignments and student submissions.

A `Homework` carries assignment metadata plus a lifecycle status. The status is not driven
by a state machine: it follows from comparing the assigned and due dates to "now", and that
comparison lives in exactly one place, `derive_homework_status()`.

A `HomeworkSubmission` exists once per (homework, student) pair. Lateness is derived from
`submitted_at` against the homework due date by `derive_submission_lateness()`.

Notes:
- `grade` is bounded by `Homework.total_marks`; the bound is enforced by the repository when
  grading, since a submission does not hold a reference to its homework.
"""

from __future__ import annotations

import datetime
import math
from enum import Enum
from typing import Any

from classroom.models.attendance import validate_iso_date


class HomeworkType(str, Enum):
    ASSIGNMENT = "assignment"
    PROJECT = "project"
    READING = "reading"
    EXERCISE = "exercise"
    RESEARCH = "research"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class HomeworkStatus(str, Enum):
    DRAFT = "draft"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class SubmissionStatus(str, Enum):
    NOT_SUBMITTED = "not_submitted"
    SUBMITTED = "submitted"
    LATE = "late"
    GRADED = "graded"
    RETURNED = "returned"


def validate_marks_input(value: Any, label: str = "Marks") -> float:
    """
    Validates and normalizes a marks or grade value.

    Accepts any input, and then:
        - Casts to float.
        - Ensures the number is finite.
        - Ensures it is non-negative.

    Raises:
        TypeError: If the input cannot be cast to float.
        ValueError: If the input is non-finite or less than zero.
    """
    try:
        value = float(value)

    except (TypeError, ValueError):
        raise TypeError(f"Invalid input. {label} must be a number.") from None

    if not math.isfinite(value):
        raise ValueError(f"Invalid input. {label} must be a finite number.")

    if value < 0:
        raise ValueError(f"Invalid input. {label} cannot be less than zero.")

    return value


class Homework:

    def __init__(
        self,
        id: str,
        title: str,
        subject: str,
        class_id: str,
        class_name: str,
        teacher_id: str,
        teacher_name: str,
        assigned_date: str,
        due_date: str,
        type: HomeworkType | str = HomeworkType.ASSIGNMENT,
        priority: Priority | str = Priority.MEDIUM,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        status: HomeworkStatus | str = HomeworkStatus.ASSIGNED,
        description: str = "",
        due_time: str | None = None,
        total_marks: float | None = None,
        instructions: str | None = None,
        estimated_duration: int | None = None,
        tags: list[str] | None = None,
        created_by: str = "",
        created_at: str = "",
        updated_at: str | None = None,
    ):
        self._id = id
        self._title = title
        self._subject = subject
        self._class_id = class_id
        self._class_name = class_name
        self._teacher_id = teacher_id
        self._teacher_name = teacher_name
        self._assigned_date = validate_iso_date(assigned_date)
        self._due_date = validate_iso_date(due_date)
        self._type = HomeworkType(type)
        self._priority = Priority(priority)
        self._difficulty = Difficulty(difficulty)
        self.status = status
        self._description = description
        self._due_time = due_time
        # total_marks uses setter method for validation
        self.total_marks = total_marks
        self._instructions = instructions
        self._estimated_duration = estimated_duration
        self._tags = list(tags or [])
        self._created_by = created_by
        self._created_at = created_at
        self._updated_at = updated_at or created_at

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def class_id(self) -> str:
        return self._class_id

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def teacher_id(self) -> str:
        return self._teacher_id

    @property
    def teacher_name(self) -> str:
        return self._teacher_name

    @property
    def assigned_date(self) -> str:
        return self._assigned_date

    @property
    def due_date(self) -> str:
        return self._due_date

    @due_date.setter
    def due_date(self, due_date: str) -> None:
        self._due_date = validate_iso_date(due_date)

    @property
    def due_time(self) -> str | None:
        return self._due_time

    @property
    def due_at(self) -> datetime.datetime:
        """The deadline as a datetime; without a due time the deadline is the end of the due date."""
        due_time = (
            datetime.time.fromisoformat(self._due_time)
            if self._due_time
            else datetime.time(23, 59, 59)
        )

        return datetime.datetime.combine(
            datetime.date.fromisoformat(self._due_date), due_time
        )

    @property
    def type(self) -> HomeworkType:
        return self._type

    @property
    def priority(self) -> Priority:
        return self._priority

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def status(self) -> HomeworkStatus:
        return self._status

    @status.setter
    def status(self, status: HomeworkStatus | str) -> None:
        self._status = HomeworkStatus(status)

    @property
    def description(self) -> str:
        return self._description

    @property
    def total_marks(self) -> float | None:
        return self._total_marks

    @total_marks.setter
    def total_marks(self, total_marks: float | None) -> None:
        self._total_marks = (
            None
            if total_marks is None
            else validate_marks_input(total_marks, "Total marks")
        )

    @property
    def instructions(self) -> str | None:
        return self._instructions

    @property
    def estimated_duration(self) -> int | None:
        return self._estimated_duration

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    @property
    def created_at(self) -> str:
        return self._created_at

    @property
    def updated_at(self) -> str:
        return self._updated_at

    @updated_at.setter
    def updated_at(self, updated_at: str) -> None:
        self._updated_at = updated_at

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "description": self._description,
            "subject": self._subject,
            "class_id": self._class_id,
            "class_name": self._class_name,
            "teacher_id": self._teacher_id,
            "teacher_name": self._teacher_name,
            "assigned_date": self._assigned_date,
            "due_date": self._due_date,
            "due_time": self._due_time,
            "type": self._type.value,
            "priority": self._priority.value,
            "difficulty": self._difficulty.value,
            "status": self._status.value,
            "total_marks": self._total_marks,
            "instructions": self._instructions,
            "estimated_duration": self._estimated_duration,
            "tags": list(self._tags),
            "created_by": self._created_by,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Homework:
        return cls(
            id=data["id"],
            title=data["title"],
            subject=data["subject"],
            class_id=data["class_id"],
            class_name=data["class_name"],
            teacher_id=data["teacher_id"],
            teacher_name=data["teacher_name"],
            assigned_date=data["assigned_date"],
            due_date=data["due_date"],
            type=data.get("type", HomeworkType.ASSIGNMENT),
            priority=data.get("priority", Priority.MEDIUM),
            difficulty=data.get("difficulty", Difficulty.MEDIUM),
            status=data.get("status", HomeworkStatus.ASSIGNED),
            description=data.get("description", ""),
            due_time=data.get("due_time"),
            total_marks=data.get("total_marks"),
            instructions=data.get("instructions"),
            estimated_duration=data.get("estimated_duration"),
            tags=data.get("tags"),
            created_by=data.get("created_by", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Homework({self._id}, {self._title}, {self._class_id}, {self._due_date}, {self._status.value})"

    def __str__(self) -> str:
        return f"HOMEWORK: {self._title} ({self._subject}) - due {self._due_date}"


class HomeworkSubmission:

    def __init__(
        self,
        id: str,
        homework_id: str,
        student_id: str,
        student_name: str,
        status: SubmissionStatus | str = SubmissionStatus.NOT_SUBMITTED,
        submitted_at: str | None = None,
        grade: float | None = None,
        feedback: str | None = None,
        content: str | None = None,
        submission_notes: str | None = None,
        graded_by: str | None = None,
        graded_at: str | None = None,
        is_late: bool = False,
        days_late: int = 0,
    ):
        self._id = id
        self._homework_id = homework_id
        self._student_id = student_id
        self._student_name = student_name
        self.status = status
        self._submitted_at = submitted_at
        # grade uses setter method for validation
        self.grade = grade
        self._feedback = feedback
        self._content = content
        self._submission_notes = submission_notes
        self._graded_by = graded_by
        self._graded_at = graded_at
        self._is_late = is_late
        self._days_late = days_late

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def homework_id(self) -> str:
        return self._homework_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def student_name(self) -> str:
        return self._student_name

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @status.setter
    def status(self, status: SubmissionStatus | str) -> None:
        self._status = SubmissionStatus(status)

    @property
    def is_submitted(self) -> bool:
        return self._status is not SubmissionStatus.NOT_SUBMITTED

    @property
    def submitted_at(self) -> str | None:
        return self._submitted_at

    @property
    def grade(self) -> float | None:
        return self._grade

    @grade.setter
    def grade(self, grade: float | None) -> None:
        self._grade = None if grade is None else validate_marks_input(grade, "Grade")

    @property
    def feedback(self) -> str | None:
        return self._feedback

    @property
    def graded_by(self) -> str | None:
        return self._graded_by

    @property
    def graded_at(self) -> str | None:
        return self._graded_at

    @property
    def is_late(self) -> bool:
        return self._is_late

    @property
    def days_late(self) -> int:
        return self._days_late

    # === data manipulators ===

    def submit(self, submitted_at: str, homework: Homework) -> None:
        # parse first so a bad timestamp leaves the submission untouched
        is_late, days_late = lateness_at(submitted_at, homework)

        self._submitted_at = submitted_at
        self._is_late, self._days_late = is_late, days_late
        self._status = SubmissionStatus.LATE if self._is_late else SubmissionStatus.SUBMITTED

    def record_grade(
        self, grade: float, graded_by: str, graded_at: str, feedback: str | None = None
    ) -> None:
        self.grade = grade
        self._graded_by = graded_by
        self._graded_at = graded_at
        self._feedback = feedback
        self._status = SubmissionStatus.GRADED

    def refresh_lateness(self, homework: Homework) -> None:
        self._is_late, self._days_late = derive_submission_lateness(self, homework)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "homework_id": self._homework_id,
            "student_id": self._student_id,
            "student_name": self._student_name,
            "status": self._status.value,
            "submitted_at": self._submitted_at,
            "grade": self._grade,
            "feedback": self._feedback,
            "content": self._content,
            "submission_notes": self._submission_notes,
            "graded_by": self._graded_by,
            "graded_at": self._graded_at,
            "is_late": self._is_late,
            "days_late": self._days_late,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HomeworkSubmission:
        return cls(
            id=data["id"],
            homework_id=data["homework_id"],
            student_id=data["student_id"],
            student_name=data["student_name"],
            status=data.get("status", SubmissionStatus.NOT_SUBMITTED),
            submitted_at=data.get("submitted_at"),
            grade=data.get("grade"),
            feedback=data.get("feedback"),
            content=data.get("content"),
            submission_notes=data.get("submission_notes"),
            graded_by=data.get("graded_by"),
            graded_at=data.get("graded_at"),
            is_late=data.get("is_late", False),
            days_late=data.get("days_late", 0),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"HomeworkSubmission({self._id}, {self._homework_id}, {self._student_id}, {self._status.value}, {self._grade})"

    def __str__(self) -> str:
        return f"SUBMISSION: {self._student_name} for {self._homework_id}: {self._status.value}"


# === status derivation ===


def derive_homework_status(
    now: datetime.date | datetime.datetime, homework: Homework
) -> HomeworkStatus:
    """
    Computes the lifecycle status a homework should display at `now`.

    Rules, in order:
        - `completed` is final and is never overridden.
        - `draft` while the assigned date is still in the future.
        - `overdue` once the due date has passed.
        - otherwise the stored status if it is `assigned` or `in_progress`, else `assigned`.

    Args:
        now (date | datetime): The reference point; datetimes are reduced to their date.
        homework (Homework): The homework to evaluate. It is not mutated.

    Returns:
        HomeworkStatus: The derived status.
    """
    today = (now.date() if isinstance(now, datetime.datetime) else now).isoformat()

    if homework.status is HomeworkStatus.COMPLETED:
        return HomeworkStatus.COMPLETED

    if homework.assigned_date > today:
        return HomeworkStatus.DRAFT

    if homework.due_date < today:
        return HomeworkStatus.OVERDUE

    if homework.status in (HomeworkStatus.ASSIGNED, HomeworkStatus.IN_PROGRESS):
        return homework.status

    return HomeworkStatus.ASSIGNED


def derive_submission_lateness(
    submission: HomeworkSubmission, homework: Homework
) -> tuple[bool, int]:
    """
    Works out whether a submission missed its deadline and by how many whole days.

    Returns:
        tuple[bool, int]: `(is_late, days_late)`. Unsubmitted work is `(False, 0)`.
            A submission a few minutes past the deadline counts as one day late.
    """
    return lateness_at(submission.submitted_at, homework)


def lateness_at(submitted_at: str | None, homework: Homework) -> tuple[bool, int]:
    """
    Computes `(is_late, days_late)` for a hand-in at `submitted_at`.

    Raises:
        ValueError: If `submitted_at` is not an ISO timestamp.
    """
    if not submitted_at:
        return False, 0

    submitted = datetime.datetime.fromisoformat(submitted_at)

    if submitted.tzinfo is not None:
        submitted = submitted.replace(tzinfo=None)

    overdue_by = submitted - homework.due_at

    if overdue_by <= datetime.timedelta(0):
        return False, 0

    return True, math.ceil(overdue_by / datetime.timedelta(days=1))
