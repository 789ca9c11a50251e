# classroom/models/marks.py

"""
Assessments (`Mark`), per-student results (`StudentMark`) and per-group roll-ups (`GroupMark`).

A `GroupMark` is always built from the student results of its group, so its pass, fail and
exempted counts partition `total_students` by construction.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from classroom.core import settings
from classroom.models.attendance import validate_iso_date
from classroom.models.homework import validate_marks_input
from classroom.stats.rates import average, rate


class MarkType(str, Enum):
    EXAM = "exam"
    QUIZ = "quiz"
    ASSIGNMENT = "assignment"
    TEST = "test"


class MarkStatus(str, Enum):
    PUBLISHED = "published"
    DRAFT = "draft"


class Mark:

    def __init__(
        self,
        id: str,
        title: str,
        subject: str,
        class_name: str,
        type: MarkType | str,
        total_marks: float,
        date: str,
        status: MarkStatus | str = MarkStatus.DRAFT,
        description: str | None = None,
        duration: int | None = None,
        instructions: str | None = None,
        created_by: str = "",
        created_at: str = "",
        updated_at: str | None = None,
    ):
        self._id = id
        self._title = title
        self._subject = subject
        self._class_name = class_name
        self._type = MarkType(type)
        # total_marks uses setter method for validation
        self.total_marks = total_marks
        self._date = validate_iso_date(date)
        self.status = status
        self._description = description
        self._duration = duration
        self._instructions = instructions
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
    def class_name(self) -> str:
        return self._class_name

    @property
    def type(self) -> MarkType:
        return self._type

    @property
    def total_marks(self) -> float:
        return self._total_marks

    @total_marks.setter
    def total_marks(self, total_marks: float) -> None:
        total_marks = validate_marks_input(total_marks, "Total marks")

        if total_marks == 0:
            raise ValueError("Invalid input. Total marks must be greater than zero.")

        self._total_marks = total_marks

    @property
    def date(self) -> str:
        return self._date

    @property
    def status(self) -> MarkStatus:
        return self._status

    @status.setter
    def status(self, status: MarkStatus | str) -> None:
        self._status = MarkStatus(status)

    @property
    def description(self) -> str | None:
        return self._description

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
            "subject": self._subject,
            "class_name": self._class_name,
            "type": self._type.value,
            "total_marks": self._total_marks,
            "date": self._date,
            "status": self._status.value,
            "description": self._description,
            "duration": self._duration,
            "instructions": self._instructions,
            "created_by": self._created_by,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Mark:
        return cls(
            id=data["id"],
            title=data["title"],
            subject=data["subject"],
            class_name=data["class_name"],
            type=data["type"],
            total_marks=data["total_marks"],
            date=data["date"],
            status=data.get("status", MarkStatus.DRAFT),
            description=data.get("description"),
            duration=data.get("duration"),
            instructions=data.get("instructions"),
            created_by=data.get("created_by", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Mark({self._id}, {self._title}, {self._subject}, {self._total_marks}, {self._status.value})"

    def __str__(self) -> str:
        return f"MARK: {self._title} ({self._subject}) - {self._class_name}"


class StudentMark:

    def __init__(
        self,
        id: str,
        mark_id: str,
        student_id: str,
        student_name: str,
        subject: str,
        obtained_marks: float,
        total_marks: float,
        grade: str = "",
        is_exempted: bool = False,
        remarks: str | None = None,
        submitted_at: str | None = None,
        graded_at: str = "",
        graded_by: str = "",
    ):
        self._id = id
        self._mark_id = mark_id
        self._student_id = student_id
        self._student_name = student_name
        self._subject = subject
        self._obtained_marks = validate_marks_input(obtained_marks, "Obtained marks")
        self._total_marks = validate_marks_input(total_marks, "Total marks")
        self._grade = grade
        self._is_exempted = is_exempted
        self._remarks = remarks
        self._submitted_at = submitted_at
        self._graded_at = graded_at
        self._graded_by = graded_by

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def mark_id(self) -> str:
        return self._mark_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def student_name(self) -> str:
        return self._student_name

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def obtained_marks(self) -> float:
        return self._obtained_marks

    @property
    def total_marks(self) -> float:
        return self._total_marks

    @property
    def grade(self) -> str:
        return self._grade

    @property
    def is_exempted(self) -> bool:
        return self._is_exempted

    @property
    def remarks(self) -> str | None:
        return self._remarks

    @property
    def percentage(self) -> float:
        return rate(self._obtained_marks, self._total_marks)

    @property
    def is_passing(self) -> bool:
        return not self._is_exempted and self.percentage >= settings.PASS_THRESHOLD

    def toggle_exempted_status(self) -> None:
        self._is_exempted = not self._is_exempted

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "mark_id": self._mark_id,
            "student_id": self._student_id,
            "student_name": self._student_name,
            "subject": self._subject,
            "obtained_marks": self._obtained_marks,
            "total_marks": self._total_marks,
            "grade": self._grade,
            "is_exempted": self._is_exempted,
            "remarks": self._remarks,
            "submitted_at": self._submitted_at,
            "graded_at": self._graded_at,
            "graded_by": self._graded_by,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StudentMark:
        return cls(
            id=data["id"],
            mark_id=data["mark_id"],
            student_id=data["student_id"],
            student_name=data["student_name"],
            subject=data["subject"],
            obtained_marks=data["obtained_marks"],
            total_marks=data["total_marks"],
            grade=data.get("grade", ""),
            is_exempted=data.get("is_exempted", False),
            remarks=data.get("remarks"),
            submitted_at=data.get("submitted_at"),
            graded_at=data.get("graded_at", ""),
            graded_by=data.get("graded_by", ""),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"StudentMark({self._id}, {self._mark_id}, {self._student_id}, {self._obtained_marks}/{self._total_marks}, {self._is_exempted})"

    def __str__(self) -> str:
        return f"RESULT: {self._student_name} - {self._obtained_marks:g}/{self._total_marks:g} ({self._grade or '-'})"


class GroupMark:
    """
    Aggregated results of one assessment for one student group.

    Instances are normally produced by `GroupMark.from_student_marks()`; the constructor
    still checks that pass, fail and exempted counts add up to `total_students`.
    """

    def __init__(
        self,
        id: str,
        group_id: str,
        group_name: str,
        subject: str,
        mark_id: str,
        date: str,
        total_students: int,
        average_marks: float,
        highest_marks: float,
        lowest_marks: float,
        pass_count: int,
        fail_count: int,
        exempted_count: int,
    ):
        if pass_count + fail_count + exempted_count != total_students:
            raise ValueError(
                "Invalid input. Pass, fail and exempted counts must add up to the group size."
            )

        self._id = id
        self._group_id = group_id
        self._group_name = group_name
        self._subject = subject
        self._mark_id = mark_id
        self._date = date
        self._total_students = total_students
        self._average_marks = average_marks
        self._highest_marks = highest_marks
        self._lowest_marks = lowest_marks
        self._pass_count = pass_count
        self._fail_count = fail_count
        self._exempted_count = exempted_count

    @classmethod
    def from_student_marks(
        cls,
        id: str,
        group_id: str,
        group_name: str,
        mark: Mark,
        student_marks: Iterable[StudentMark],
    ) -> GroupMark:
        """
        Rolls up the results of `mark` for one group.

        Exempted students count only towards `exempted_count`; averages and extremes are taken over
        the remaining students and are 0.0 when nobody sat the assessment.
        """
        results = [sm for sm in student_marks if sm.mark_id == mark.id]
        graded = [sm for sm in results if not sm.is_exempted]
        obtained = [sm.obtained_marks for sm in graded]
        pass_count = sum(1 for sm in graded if sm.is_passing)

        return cls(
            id=id,
            group_id=group_id,
            group_name=group_name,
            subject=mark.subject,
            mark_id=mark.id,
            date=mark.date,
            total_students=len(results),
            average_marks=average(obtained),
            highest_marks=max(obtained, default=0.0),
            lowest_marks=min(obtained, default=0.0),
            pass_count=pass_count,
            fail_count=len(graded) - pass_count,
            exempted_count=len(results) - len(graded),
        )

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def group_id(self) -> str:
        return self._group_id

    @property
    def group_name(self) -> str:
        return self._group_name

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def mark_id(self) -> str:
        return self._mark_id

    @property
    def date(self) -> str:
        return self._date

    @property
    def total_students(self) -> int:
        return self._total_students

    @property
    def average_marks(self) -> float:
        return self._average_marks

    @property
    def highest_marks(self) -> float:
        return self._highest_marks

    @property
    def lowest_marks(self) -> float:
        return self._lowest_marks

    @property
    def pass_count(self) -> int:
        return self._pass_count

    @property
    def fail_count(self) -> int:
        return self._fail_count

    @property
    def exempted_count(self) -> int:
        return self._exempted_count

    @property
    def pass_rate(self) -> float:
        return rate(self._pass_count, self._total_students)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "group_id": self._group_id,
            "group_name": self._group_name,
            "subject": self._subject,
            "mark_id": self._mark_id,
            "date": self._date,
            "total_students": self._total_students,
            "average_marks": self._average_marks,
            "highest_marks": self._highest_marks,
            "lowest_marks": self._lowest_marks,
            "pass_count": self._pass_count,
            "fail_count": self._fail_count,
            "exempted_count": self._exempted_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GroupMark:
        return cls(**data)

    def __repr__(self) -> str:
        return f"GroupMark({self._id}, {self._group_name}, {self._mark_id}, {self._pass_count}/{self._fail_count}/{self._exempted_count})"
