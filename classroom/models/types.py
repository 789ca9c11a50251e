# classroom/models/types.py

"""
Holds TypeVar definition for simplifying type checks across repository operations.
"""

from typing import TypeVar

from classroom.models.attendance import AttendanceEvent, AttendanceRecord
from classroom.models.homework import Homework, HomeworkSubmission
from classroom.models.marks import Mark, StudentMark
from classroom.models.schedule import Room, ScheduleEntry

RecordType = TypeVar(
    "RecordType",
    AttendanceRecord,
    AttendanceEvent,
    Homework,
    HomeworkSubmission,
    Mark,
    StudentMark,
    ScheduleEntry,
    Room,
)
