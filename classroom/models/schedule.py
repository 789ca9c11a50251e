# classroom/models/schedule.py

"""
Timetabled sessions and their roll-ups by class, teacher and room.

`ClassSchedule`, `TeacherSchedule` and `Room` hold references to `ScheduleEntry` objects and
compute their weekly hours from those entries, so the totals can never drift from the timetable.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from enum import Enum

from classroom.core import settings
from classroom.core.formatters import WEEKDAYS, day_of_week, hours_between
from classroom.models.attendance import validate_iso_date
from classroom.stats.rates import rate


class EntryType(str, Enum):
    LECTURE = "lecture"
    LAB = "lab"
    TUTORIAL = "tutorial"
    EXAM = "exam"
    MEETING = "meeting"
    EVENT = "event"


class EntryStatus(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"


class Recurrence(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ConflictType(str, Enum):
    ROOM = "room_conflict"
    TEACHER = "teacher_conflict"
    CLASS = "class_conflict"


class ScheduleEntry:

    def __init__(
        self,
        id: str,
        title: str,
        subject: str,
        class_id: str,
        class_name: str,
        teacher_id: str,
        teacher_name: str,
        date: str,
        start_time: str,
        end_time: str,
        type: EntryType | str = EntryType.LECTURE,
        status: EntryStatus | str = EntryStatus.SCHEDULED,
        day_of_week: str | None = None,
        room_id: str | None = None,
        room_name: str | None = None,
        is_recurring: bool = False,
        recurrence_pattern: Recurrence | str | None = None,
        recurrence_end_date: str | None = None,
        attendance_required: bool = True,
        description: str | None = None,
        notes: str | None = None,
        max_students: int | None = None,
        current_students: int | None = None,
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
        self._date = validate_iso_date(date)
        self.set_times(start_time, end_time)
        self._type = EntryType(type)
        self.status = status
        self._day_of_week = (day_of_week or _weekday_of(date)).lower()
        self._room_id = room_id
        self._room_name = room_name
        self._is_recurring = is_recurring
        self._recurrence_pattern = (
            Recurrence(recurrence_pattern) if recurrence_pattern else None
        )
        self._recurrence_end_date = recurrence_end_date
        self._attendance_required = attendance_required
        self._description = description
        self._notes = notes
        self._max_students = max_students
        self._current_students = current_students
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
    def room_id(self) -> str | None:
        return self._room_id

    @property
    def room_name(self) -> str | None:
        return self._room_name

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
    def start_hour(self) -> str:
        return f"{self._start_time[:2]}:00"

    @property
    def duration_hours(self) -> float:
        return hours_between(self._start_time, self._end_time)

    @property
    def day_of_week(self) -> str:
        return self._day_of_week

    @property
    def type(self) -> EntryType:
        return self._type

    @property
    def status(self) -> EntryStatus:
        return self._status

    @status.setter
    def status(self, status: EntryStatus | str) -> None:
        self._status = EntryStatus(status)

    @property
    def is_recurring(self) -> bool:
        return self._is_recurring

    @property
    def recurrence_pattern(self) -> Recurrence | None:
        return self._recurrence_pattern

    @property
    def attendance_required(self) -> bool:
        return self._attendance_required

    @property
    def notes(self) -> str | None:
        return self._notes

    @property
    def updated_at(self) -> str:
        return self._updated_at

    @updated_at.setter
    def updated_at(self, updated_at: str) -> None:
        self._updated_at = updated_at

    # === data manipulators ===

    def set_times(self, start_time: str, end_time: str) -> None:
        """
        Sets the session times, validating the 24-hour `HH:MM` format.

        Raises:
            ValueError: If either time is malformed.
        """
        try:
            hours_between(start_time, end_time)

        except (TypeError, ValueError):
            raise ValueError(
                "Invalid input. Times must be formatted as 24-hour HH:MM."
            ) from None

        self._start_time = start_time
        self._end_time = end_time

    def overlaps(self, other: ScheduleEntry) -> bool:
        return (
            self._date == other.date
            and self._start_time < other.end_time
            and other.start_time < self._end_time
        )

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
            "room_id": self._room_id,
            "room_name": self._room_name,
            "date": self._date,
            "start_time": self._start_time,
            "end_time": self._end_time,
            "day_of_week": self._day_of_week,
            "type": self._type.value,
            "status": self._status.value,
            "is_recurring": self._is_recurring,
            "recurrence_pattern": (
                self._recurrence_pattern.value if self._recurrence_pattern else None
            ),
            "recurrence_end_date": self._recurrence_end_date,
            "attendance_required": self._attendance_required,
            "notes": self._notes,
            "max_students": self._max_students,
            "current_students": self._current_students,
            "created_by": self._created_by,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ScheduleEntry:
        return cls(
            id=data["id"],
            title=data["title"],
            subject=data["subject"],
            class_id=data["class_id"],
            class_name=data["class_name"],
            teacher_id=data["teacher_id"],
            teacher_name=data["teacher_name"],
            date=data["date"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            type=data.get("type", EntryType.LECTURE),
            status=data.get("status", EntryStatus.SCHEDULED),
            day_of_week=data.get("day_of_week"),
            room_id=data.get("room_id"),
            room_name=data.get("room_name"),
            is_recurring=data.get("is_recurring", False),
            recurrence_pattern=data.get("recurrence_pattern"),
            recurrence_end_date=data.get("recurrence_end_date"),
            attendance_required=data.get("attendance_required", True),
            description=data.get("description"),
            notes=data.get("notes"),
            max_students=data.get("max_students"),
            current_students=data.get("current_students"),
            created_by=data.get("created_by", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"ScheduleEntry({self._id}, {self._title}, {self._date}, {self._start_time}-{self._end_time}, {self._status.value})"

    def __str__(self) -> str:
        return f"SESSION: {self._title} - {self._class_name} on {self._date} {self._start_time}-{self._end_time}"


def _weekday_of(date: str) -> str:
    return day_of_week(date)


def total_hours(entries: Iterable[ScheduleEntry]) -> float:
    return sum(entry.duration_hours for entry in entries)


class ClassSchedule:

    def __init__(
        self,
        id: str,
        class_id: str,
        class_name: str,
        academic_year: str = "",
        semester: str = "",
        schedule: list[ScheduleEntry] | None = None,
    ):
        self._id = id
        self._class_id = class_id
        self._class_name = class_name
        self._academic_year = academic_year
        self._semester = semester
        self._schedule = list(schedule or [])

    @classmethod
    def from_entries(
        cls, id: str, class_id: str, entries: Iterable[ScheduleEntry]
    ) -> ClassSchedule:
        schedule = [e for e in entries if e.class_id == class_id]
        class_name = schedule[0].class_name if schedule else class_id

        return cls(id=id, class_id=class_id, class_name=class_name, schedule=schedule)

    @property
    def id(self) -> str:
        return self._id

    @property
    def class_id(self) -> str:
        return self._class_id

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def schedule(self) -> list[ScheduleEntry]:
        return list(self._schedule)

    @property
    def total_weekly_hours(self) -> float:
        return total_hours(self._schedule)

    def subject_hours(self) -> dict[str, float]:
        hours: dict[str, float] = defaultdict(float)

        for entry in self._schedule:
            hours[entry.subject] += entry.duration_hours

        return dict(hours)

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "class_id": self._class_id,
            "class_name": self._class_name,
            "academic_year": self._academic_year,
            "semester": self._semester,
            "entry_ids": [e.id for e in self._schedule],
        }


class TeacherSchedule:

    def __init__(
        self,
        id: str,
        teacher_id: str,
        teacher_name: str,
        max_weekly_hours: float = settings.DEFAULT_MAX_WEEKLY_HOURS,
        schedule: list[ScheduleEntry] | None = None,
    ):
        self._id = id
        self._teacher_id = teacher_id
        self._teacher_name = teacher_name
        self._max_weekly_hours = max_weekly_hours
        self._schedule = list(schedule or [])

    @classmethod
    def from_entries(
        cls,
        id: str,
        teacher_id: str,
        entries: Iterable[ScheduleEntry],
        max_weekly_hours: float = settings.DEFAULT_MAX_WEEKLY_HOURS,
    ) -> TeacherSchedule:
        schedule = [e for e in entries if e.teacher_id == teacher_id]
        teacher_name = schedule[0].teacher_name if schedule else teacher_id

        return cls(
            id=id,
            teacher_id=teacher_id,
            teacher_name=teacher_name,
            max_weekly_hours=max_weekly_hours,
            schedule=schedule,
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def teacher_id(self) -> str:
        return self._teacher_id

    @property
    def teacher_name(self) -> str:
        return self._teacher_name

    @property
    def max_weekly_hours(self) -> float:
        return self._max_weekly_hours

    @property
    def schedule(self) -> list[ScheduleEntry]:
        return list(self._schedule)

    @property
    def total_weekly_hours(self) -> float:
        return total_hours(self._schedule)

    @property
    def utilization_rate(self) -> float:
        return rate(self.total_weekly_hours, self._max_weekly_hours)

    @property
    def subjects(self) -> list[str]:
        return sorted({e.subject for e in self._schedule})

    @property
    def classes(self) -> list[str]:
        return sorted({e.class_name for e in self._schedule})

    @property
    def workload(self) -> dict[str, float]:
        """Hours taught per weekday, every weekday present."""
        workload = {day: 0.0 for day in WEEKDAYS}

        for entry in self._schedule:
            workload[entry.day_of_week] = (
                workload.get(entry.day_of_week, 0.0) + entry.duration_hours
            )

        return workload

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "teacher_id": self._teacher_id,
            "teacher_name": self._teacher_name,
            "max_weekly_hours": self._max_weekly_hours,
            "entry_ids": [e.id for e in self._schedule],
        }


class Room:

    def __init__(
        self,
        id: str,
        name: str,
        type: str = "classroom",
        capacity: int = 0,
        location: str = "",
        is_available: bool = True,
        schedule: list[ScheduleEntry] | None = None,
    ):
        self._id = id
        self._name = name
        self._type = type
        self._capacity = capacity
        self._location = location
        self._is_available = is_available
        self._schedule = list(schedule or [])

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_available(self) -> bool:
        return self._is_available

    @property
    def schedule(self) -> list[ScheduleEntry]:
        return list(self._schedule)

    def assign_entries(self, entries: Iterable[ScheduleEntry]) -> None:
        self._schedule = [e for e in entries if e.room_id == self._id]

    @property
    def total_hours(self) -> float:
        return total_hours(self._schedule)

    @property
    def utilization_rate(self) -> float:
        return rate(
            self.total_hours,
            settings.ROOM_HOURS_PER_DAY * settings.SCHOOL_DAYS_PER_WEEK,
        )

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "type": self._type,
            "capacity": self._capacity,
            "location": self._location,
            "is_available": self._is_available,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Room:
        return cls(
            id=data["id"],
            name=data["name"],
            type=data.get("type", "classroom"),
            capacity=data.get("capacity", 0),
            location=data.get("location", ""),
            is_available=data.get("is_available", True),
        )

    def __repr__(self) -> str:
        return f"Room({self._id}, {self._name}, {self._capacity})"


# === conflict detection ===


def find_conflicts(
    entries: Iterable[ScheduleEntry],
) -> list[tuple[ConflictType, ScheduleEntry, ScheduleEntry]]:
    """
    Finds pairs of overlapping sessions that share a room, a teacher or a class.

    Cancelled and postponed sessions never conflict. A pair sharing several resources is
    reported once per shared resource, in the order room, teacher, class.

    Returns:
        list[tuple[ConflictType, ScheduleEntry, ScheduleEntry]]: Conflicts in input order.
    """
    active = [
        e
        for e in entries
        if e.status not in (EntryStatus.CANCELLED, EntryStatus.POSTPONED)
    ]
    conflicts = []

    for i, first in enumerate(active):
        for second in active[i + 1 :]:
            if not first.overlaps(second):
                continue

            if first.room_id and first.room_id == second.room_id:
                conflicts.append((ConflictType.ROOM, first, second))

            if first.teacher_id == second.teacher_id:
                conflicts.append((ConflictType.TEACHER, first, second))

            if first.class_id == second.class_id:
                conflicts.append((ConflictType.CLASS, first, second))

    return conflicts
