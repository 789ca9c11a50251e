# classroom/models/details.py

"""
Tagged payloads for the attendance details view.

The details view can show an attendance record, an attendance event, a student summary or a
class summary. `DetailView` fixes the kind when it is built, and `describe_detail()` dispatches
on that kind instead of sniffing the payload's attributes.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from classroom.core.formatters import format_label, format_optional, format_rate

if TYPE_CHECKING:
    from classroom.models.attendance import AttendanceEvent, AttendanceRecord
    from classroom.stats.summaries import ClassAttendance, StudentAttendanceSummary


class DetailKind(str, Enum):
    RECORD = "record"
    EVENT = "event"
    STUDENT_SUMMARY = "student_summary"
    CLASS_SUMMARY = "class_summary"


class DetailView:

    def __init__(self, kind: DetailKind | str, payload: Any):
        self._kind = DetailKind(kind)
        self._payload = payload

    @property
    def kind(self) -> DetailKind:
        return self._kind

    @property
    def payload(self) -> Any:
        return self._payload

    # === constructors ===

    @classmethod
    def of_record(cls, record: AttendanceRecord) -> DetailView:
        return cls(DetailKind.RECORD, record)

    @classmethod
    def of_event(cls, event: AttendanceEvent) -> DetailView:
        return cls(DetailKind.EVENT, event)

    @classmethod
    def of_student(cls, summary: StudentAttendanceSummary) -> DetailView:
        return cls(DetailKind.STUDENT_SUMMARY, summary)

    @classmethod
    def of_class(cls, summary: ClassAttendance) -> DetailView:
        return cls(DetailKind.CLASS_SUMMARY, summary)

    def __repr__(self) -> str:
        return f"DetailView({self._kind.value}, {self._payload!r})"


def describe_detail(view: DetailView) -> tuple[str, list[tuple[str, str]]]:
    """
    Builds the title and the label/value rows shown for a detail view.

    Missing optional fields are rendered with the "-" placeholder.

    Returns:
        tuple[str, list[tuple[str, str]]]: The heading and the rows, in display order.
    """
    item = view.payload

    match view.kind:
        case DetailKind.RECORD:
            return f"Attendance: {item.student_name}", [
                ("Class", item.class_name),
                ("Date", item.date),
                ("Status", format_label(item.status.value)),
                ("Time In", format_optional(item.time_in)),
                ("Time Out", format_optional(item.time_out)),
                ("Notes", format_optional(item.notes, "Not recorded")),
                ("Marked By", item.marked_by),
            ]

        case DetailKind.EVENT:
            return f"Event: {item.title}", [
                ("Class", item.class_name),
                ("Subject", format_optional(item.subject_name)),
                ("Date", item.date),
                ("Time", f"{item.start_time} - {item.end_time}"),
                ("Teacher", item.teacher_name),
                ("Status", format_label(item.status.value)),
                ("Present", str(item.present_count)),
                ("Absent", str(item.absent_count)),
                ("Late", str(item.late_count)),
                ("Excused", str(item.excused_count)),
                ("Attendance Rate", format_rate(item.attendance_rate)),
            ]

        case DetailKind.STUDENT_SUMMARY:
            last = item.last_attendance.date if item.last_attendance else None
            return f"Student: {item.student_name}", [
                ("Class", item.class_name),
                ("Total Days", str(item.total_days)),
                ("Present", str(item.present_days)),
                ("Absent", str(item.absent_days)),
                ("Late", str(item.late_days)),
                ("Excused", str(item.excused_days)),
                ("Attendance Rate", format_rate(item.attendance_rate)),
                ("Last Attendance", format_optional(last)),
            ]

        case DetailKind.CLASS_SUMMARY:
            return f"Class: {item.class_name}", [
                ("Students", str(item.total_students)),
                ("Records", str(item.total_records)),
                ("Attendance Rate", format_rate(item.attendance_rate)),
            ]

        case _:
            raise ValueError(f"Unsupported detail kind: {view.kind}")
