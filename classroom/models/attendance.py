# classroom/models/attendance.py

"""
Attendance records and scheduled attendance events.

An `AttendanceRecord` is one student's status for one class on one calendar date.
An `AttendanceEvent` is a scheduled class session carrying aggregate status counts; its
`attendance_rate` is always derived from those counts and never stored on its own.

Includes functionality for:
- Coercing status strings into `AttendanceStatus` / `EventStatus`
- Validating that event counts are non-negative and sum to the class size
- Serializing to and from JSON-compatible dictionaries
"""

from __future__ import annotations

import datetime
from enum import Enum

from classroom.stats.rates import rate


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"

    @property
    def counts_as_attended(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class EventStatus(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def validate_iso_date(value: str) -> str:
    """
    Ensures `value` is a `YYYY-MM-DD` calendar date and returns it unchanged.

    Raises:
        ValueError: If the string is not a valid ISO calendar date.
    """
    try:
        parsed = datetime.date.fromisoformat(value)

    except (TypeError, ValueError):
        parsed = None

    # stored dates must be zero-padded YYYY-MM-DD; fromisoformat also takes 20250310 and 2025-W11-1
    if parsed is None or parsed.isoformat() != value:
        raise ValueError(
            f"Invalid input. Dates must be formatted as YYYY-MM-DD, got {value!r}."
        )

    return value


class AttendanceRecord:

    def __init__(
        self,
        id: str,
        student_id: str,
        student_name: str,
        class_id: str,
        class_name: str,
        date: str,
        status: AttendanceStatus | str,
        marked_by: str,
        marked_at: str,
        updated_at: str | None = None,
        time_in: str | None = None,
        time_out: str | None = None,
        notes: str | None = None,
    ):
        self._id = id
        self._student_id = student_id
        self._student_name = student_name
        self._class_id = class_id
        self._class_name = class_name
        self._date = validate_iso_date(date)
        # status uses setter method for coercion
        self.status = status
        self._marked_by = marked_by
        self._marked_at = marked_at
        self._updated_at = updated_at or marked_at
        self._time_in = time_in
        self._time_out = time_out
        self._notes = notes

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def student_name(self) -> str:
        return self._student_name

    @property
    def class_id(self) -> str:
        return self._class_id

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def date(self) -> str:
        return self._date

    @property
    def status(self) -> AttendanceStatus:
        return self._status

    @status.setter
    def status(self, status: AttendanceStatus | str) -> None:
        self._status = AttendanceStatus(status)

    @property
    def marked_by(self) -> str:
        return self._marked_by

    @property
    def marked_at(self) -> str:
        return self._marked_at

    @property
    def updated_at(self) -> str:
        return self._updated_at

    @updated_at.setter
    def updated_at(self, updated_at: str) -> None:
        self._updated_at = updated_at

    @property
    def time_in(self) -> str | None:
        return self._time_in

    @property
    def time_out(self) -> str | None:
        return self._time_out

    @property
    def notes(self) -> str | None:
        return self._notes

    @notes.setter
    def notes(self, notes: str | None) -> None:
        self._notes = notes

    @property
    def attended(self) -> bool:
        return self._status.counts_as_attended

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "student_id": self._student_id,
            "student_name": self._student_name,
            "class_id": self._class_id,
            "class_name": self._class_name,
            "date": self._date,
            "status": self._status.value,
            "time_in": self._time_in,
            "time_out": self._time_out,
            "notes": self._notes,
            "marked_by": self._marked_by,
            "marked_at": self._marked_at,
            "updated_at": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AttendanceRecord:
        return cls(
            id=data["id"],
            student_id=data["student_id"],
            student_name=data["student_name"],
            class_id=data["class_id"],
            class_name=data["class_name"],
            date=data["date"],
            status=data["status"],
            marked_by=data["marked_by"],
            marked_at=data["marked_at"],
            updated_at=data.get("updated_at"),
            time_in=data.get("time_in"),
            time_out=data.get("time_out"),
            notes=data.get("notes"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"AttendanceRecord({self._id}, {self._student_id}, {self._class_id}, {self._date}, {self._status.value})"

    def __str__(self) -> str:
        return f"ATTENDANCE: {self._student_name} - {self._class_name} on {self._date}: {self._status.value}"


class AttendanceEvent:

    def __init__(
        self,
        id: str,
        title: str,
        date: str,
        start_time: str,
        end_time: str,
        class_id: str,
        class_name: str,
        teacher_id: str,
        teacher_name: str,
        total_students: int,
        present_count: int = 0,
        absent_count: int = 0,
        late_count: int = 0,
        excused_count: int = 0,
        status: EventStatus | str = EventStatus.SCHEDULED,
        description: str | None = None,
        subject_id: str | None = None,
        subject_name: str | None = None,
        created_by: str = "",
        created_at: str = "",
        updated_at: str | None = None,
    ):
        self._id = id
        self._title = title
        self._date = validate_iso_date(date)
        self._start_time = start_time
        self._end_time = end_time
        self._class_id = class_id
        self._class_name = class_name
        self._teacher_id = teacher_id
        self._teacher_name = teacher_name
        self._status = EventStatus(status)
        self._description = description
        self._subject_id = subject_id
        self._subject_name = subject_name
        self._created_by = created_by
        self._created_at = created_at
        self._updated_at = updated_at or created_at
        self.update_counts(
            total_students, present_count, absent_count, late_count, excused_count
        )

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def date(self) -> str:
        return self._date

    @property
    def start_time(self) -> str:
        return self._start_time

    @property
    def end_time(self) -> str:
        return self._end_time

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
    def subject_name(self) -> str | None:
        return self._subject_name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def status(self) -> EventStatus:
        return self._status

    @status.setter
    def status(self, status: EventStatus | str) -> None:
        self._status = EventStatus(status)

    @property
    def total_students(self) -> int:
        return self._total_students

    @property
    def present_count(self) -> int:
        return self._present_count

    @property
    def absent_count(self) -> int:
        return self._absent_count

    @property
    def late_count(self) -> int:
        return self._late_count

    @property
    def excused_count(self) -> int:
        return self._excused_count

    @property
    def is_taken(self) -> bool:
        return self._total_students > 0 and (
            self._present_count
            + self._absent_count
            + self._late_count
            + self._excused_count
            == self._total_students
        )

    @property
    def attendance_rate(self) -> float:
        return rate(self._present_count + self._late_count, self._total_students)

    @property
    def created_at(self) -> str:
        return self._created_at

    @property
    def updated_at(self) -> str:
        return self._updated_at

    @updated_at.setter
    def updated_at(self, updated_at: str) -> None:
        self._updated_at = updated_at

    # === data manipulators ===

    def update_counts(
        self,
        total_students: int,
        present_count: int,
        absent_count: int,
        late_count: int,
        excused_count: int,
    ) -> None:
        """
        Replaces all status counts at once.

        All-zero counts are accepted and mean attendance has not been taken yet.

        Raises:
            ValueError: If any count is negative or the four counts do not sum to `total_students`.
        """
        counts = (present_count, absent_count, late_count, excused_count)

        if total_students < 0 or any(c < 0 for c in counts):
            raise ValueError("Invalid input. Attendance counts cannot be negative.")

        if any(counts) and sum(counts) != total_students:
            raise ValueError(
                f"Invalid input. Status counts sum to {sum(counts)} but the class has {total_students} students."
            )

        self._total_students = total_students
        self._present_count = present_count
        self._absent_count = absent_count
        self._late_count = late_count
        self._excused_count = excused_count

    def apply_records(self, records: list[AttendanceRecord]) -> None:
        """Recounts the event from the attendance records marked for it."""
        statuses = [record.status for record in records]

        self.update_counts(
            len(statuses),
            statuses.count(AttendanceStatus.PRESENT),
            statuses.count(AttendanceStatus.ABSENT),
            statuses.count(AttendanceStatus.LATE),
            statuses.count(AttendanceStatus.EXCUSED),
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "description": self._description,
            "date": self._date,
            "start_time": self._start_time,
            "end_time": self._end_time,
            "class_id": self._class_id,
            "class_name": self._class_name,
            "subject_id": self._subject_id,
            "subject_name": self._subject_name,
            "teacher_id": self._teacher_id,
            "teacher_name": self._teacher_name,
            "total_students": self._total_students,
            "present_count": self._present_count,
            "absent_count": self._absent_count,
            "late_count": self._late_count,
            "excused_count": self._excused_count,
            "status": self._status.value,
            "created_by": self._created_by,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AttendanceEvent:
        return cls(
            id=data["id"],
            title=data["title"],
            date=data["date"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            class_id=data["class_id"],
            class_name=data["class_name"],
            teacher_id=data["teacher_id"],
            teacher_name=data["teacher_name"],
            total_students=data["total_students"],
            present_count=data.get("present_count", 0),
            absent_count=data.get("absent_count", 0),
            late_count=data.get("late_count", 0),
            excused_count=data.get("excused_count", 0),
            status=data.get("status", EventStatus.SCHEDULED),
            description=data.get("description"),
            subject_id=data.get("subject_id"),
            subject_name=data.get("subject_name"),
            created_by=data.get("created_by", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"AttendanceEvent({self._id}, {self._title}, {self._class_id}, {self._date}, {self._status.value})"

    def __str__(self) -> str:
        return f"EVENT: {self._title} - {self._class_name} on {self._date} ({self._status.value})"
