# classroom/cli/formatters.py

# renders stats view-models and records for the terminal; read-only, never mutates records

from collections.abc import Iterable

import classroom.core.formatters as formatters
from classroom.core import settings
from classroom.models.attendance import AttendanceEvent, AttendanceRecord
from classroom.models.details import DetailView, describe_detail
from classroom.models.homework import Homework
from classroom.models.marks import Mark
from classroom.stats.distribution import sorted_distribution
from classroom.stats.summaries import (
    AttendanceStats,
    ClassAttendance,
    HomeworkStats,
    MarksStats,
    ResourceLoad,
    ScheduleStats,
    StudentAttendanceSummary,
)

NO_DATA = "No data available."


def format_section(title: str, rows: Iterable[tuple[str, str]]) -> str:
    lines = [f"\n{title}"]
    lines.extend(f"... {label:<24} {value}" for label, value in rows)

    return "\n".join(lines)


def format_distribution(title: str, distribution: dict[str, int]) -> str:
    if not distribution:
        return f"\n{title}\n... {NO_DATA}"

    return format_section(
        title,
        [
            (formatters.format_label(str(key)), str(count))
            for key, count in sorted_distribution(distribution)
        ],
    )


def format_attendance_rate(value: float) -> str:
    marker = "" if value >= settings.GOOD_ATTENDANCE_THRESHOLD else " [LOW]"

    return f"{formatters.format_rate(value)}{marker}"


# === record formatters ===


def format_record_oneline(record: AttendanceRecord) -> str:
    return (
        f"{record.date} | {record.student_name:<20} | {record.class_name:<10} | "
        f"{formatters.format_label(record.status.value)}"
    )


def format_event_oneline(event: AttendanceEvent) -> str:
    return (
        f"{event.date} {event.start_time} | {event.title:<28} | "
        f"{formatters.format_rate(event.attendance_rate)}"
    )


def format_homework_oneline(homework: Homework) -> str:
    return (
        f"{homework.due_date} | {homework.title:<28} | {homework.class_name:<10} | "
        f"{formatters.format_label(homework.status.value)}"
    )


def format_mark_oneline(mark: Mark) -> str:
    return f"{mark.date} | {mark.title:<28} | {mark.class_name:<10} | {mark.status.value}"


def format_class_oneline(summary: ClassAttendance) -> str:
    return f"{summary.class_name:<12} | {format_attendance_rate(summary.attendance_rate)}"


def format_student_oneline(summary: StudentAttendanceSummary) -> str:
    return (
        f"{summary.student_name:<20} | {summary.class_name:<10} | "
        f"{format_attendance_rate(summary.attendance_rate)}"
    )


def format_load_oneline(load: ResourceLoad) -> str:
    return (
        f"{load.resource_name:<20} | {formatters.format_hours(load.total_hours):>6} | "
        f"{formatters.format_rate(load.utilization_rate)}"
    )


def format_detail(view: DetailView) -> str:
    title, rows = describe_detail(view)

    return format_section(formatters.format_banner_text(title), rows)


# === stats screens ===


def format_attendance_stats(stats: AttendanceStats) -> str:
    if stats.total_records == 0 and stats.total_events == 0:
        return f"\n{formatters.format_banner_text('Attendance')}\n{NO_DATA}"

    parts = [
        formatters.format_banner_text("Attendance"),
        format_section(
            "Overview",
            [
                ("Students", str(stats.total_students)),
                ("Classes", str(stats.total_classes)),
                ("Records", str(stats.total_records)),
                ("Events", str(stats.total_events)),
                ("Events Today", str(stats.today_event_count)),
                ("Ongoing Events", str(stats.ongoing_event_count)),
            ],
        ),
        format_section(
            "Attendance Rates",
            [
                ("Overall", format_attendance_rate(stats.overall_attendance_rate)),
                ("Today", format_attendance_rate(stats.today_attendance_rate)),
                ("Last 7 Days", format_attendance_rate(stats.weekly_attendance_rate)),
                ("Last 30 Days", format_attendance_rate(stats.monthly_attendance_rate)),
            ],
        ),
        format_distribution("By Status", stats.status_distribution),
        format_section(
            "Top Classes",
            [(str(i), format_class_oneline(c)) for i, c in enumerate(stats.top_classes, 1)],
        ),
        format_section(
            "Recent Events",
            [(str(i), format_event_oneline(e)) for i, e in enumerate(stats.recent_events, 1)],
        ),
    ]

    return "\n".join(parts)


def format_homework_stats(stats: HomeworkStats) -> str:
    if stats.total_homeworks == 0:
        return f"\n{formatters.format_banner_text('Homework')}\n{NO_DATA}"

    average_grade = formatters.format_optional(
        f"{stats.average_grade:.1f}" if stats.graded_count else None
    )

    parts = [
        formatters.format_banner_text("Homework"),
        format_section(
            "Overview",
            [
                ("Total", str(stats.total_homeworks)),
                ("Active", str(stats.active_homeworks)),
                ("Completed", str(stats.completed_homeworks)),
                ("Overdue", str(stats.overdue_homeworks)),
                ("Drafts", str(stats.draft_homeworks)),
                ("Assigned Today", str(stats.assigned_today)),
                ("Due Today", str(stats.due_today)),
            ],
        ),
        format_section(
            "Submissions",
            [
                ("Total", str(stats.total_submissions)),
                ("Submission Rate", formatters.format_rate(stats.submission_rate)),
                ("Grading Rate", formatters.format_rate(stats.grading_rate)),
                ("On-Time Rate", formatters.format_rate(stats.on_time_rate)),
                ("Average Grade", average_grade),
            ],
        ),
        format_distribution("By Subject", stats.subject_distribution),
        format_distribution("By Priority", stats.priority_distribution),
        format_section(
            "Upcoming Deadlines",
            [
                (str(i), format_homework_oneline(h))
                for i, h in enumerate(stats.upcoming_deadlines, 1)
            ],
        ),
        format_section(
            "Top Classes by Submission Rate",
            [
                (c.class_name, formatters.format_rate(c.average_submission_rate))
                for c in stats.top_classes
            ],
        ),
    ]

    return "\n".join(parts)


def format_marks_stats(stats: MarksStats) -> str:
    if stats.total_marks == 0:
        return f"\n{formatters.format_banner_text('Marks')}\n{NO_DATA}"

    parts = [
        formatters.format_banner_text("Marks"),
        format_section(
            "Overview",
            [
                ("Assessments", str(stats.total_marks)),
                ("Published", str(stats.published_marks)),
                ("Drafts", str(stats.draft_marks)),
                ("Results", str(stats.total_student_marks)),
                ("Exempted", str(stats.exempted_count)),
                ("Pass Rate", formatters.format_rate(stats.pass_rate)),
                ("Average Performance", formatters.format_rate(stats.average_performance)),
            ],
        ),
        format_distribution("By Subject", stats.subject_distribution),
        format_distribution("By Type", stats.type_distribution),
        format_section(
            "Recent Assessments",
            [(str(i), format_mark_oneline(m)) for i, m in enumerate(stats.recent_marks, 1)],
        ),
    ]

    return "\n".join(parts)


def format_schedule_stats(stats: ScheduleStats) -> str:
    if stats.total_entries == 0:
        return f"\n{formatters.format_banner_text('Schedule')}\n{NO_DATA}"

    parts = [
        formatters.format_banner_text("Schedule"),
        format_section(
            "Overview",
            [
                ("Entries", str(stats.total_entries)),
                ("Total Hours", formatters.format_hours(stats.total_hours)),
                ("Classes", str(stats.total_classes)),
                ("Teachers", str(stats.total_teachers)),
                ("Rooms", str(stats.total_rooms)),
                ("Room Utilization", formatters.format_rate(stats.utilization_rate)),
                ("Conflicts", str(stats.conflicts_count)),
            ],
        ),
        format_section(
            "Status",
            [
                ("Today", str(stats.today_entries)),
                ("Ongoing", str(stats.ongoing_entries)),
                ("Upcoming", str(stats.upcoming_entries)),
                ("Completed", str(stats.completed_entries)),
                ("Cancelled", str(stats.cancelled_entries)),
                ("Completion Rate", formatters.format_rate(stats.completion_rate)),
            ],
        ),
        format_distribution("By Day", stats.day_distribution),
        format_distribution("By Subject", stats.subject_distribution),
        format_section(
            "Teacher Workload",
            [(str(i), format_load_oneline(t)) for i, t in enumerate(stats.teacher_workload, 1)],
        ),
        format_section(
            "Room Utilization",
            [(str(i), format_load_oneline(r)) for i, r in enumerate(stats.room_utilization, 1)],
        ),
    ]

    return "\n".join(parts)
