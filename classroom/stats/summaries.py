# classroom/stats/summaries.py

"""
Summary composers for the attendance, homework, marks and schedule stats screens.

Each `compose_*` function is a pure function of record collections (plus an injected `now`)
to a dataclass view-model that presentation code renders directly. Nothing is cached:
composers are cheap and safe to re-run on every input change.

Empty inputs always produce zeroed rates and empty distributions or rankings, never errors.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any

from classroom.core import settings
from classroom.core.formatters import format_month_key
from classroom.models.attendance import (
    AttendanceEvent,
    AttendanceRecord,
    AttendanceStatus,
    EventStatus,
)
from classroom.models.homework import (
    Homework,
    HomeworkStatus,
    HomeworkSubmission,
    SubmissionStatus,
    derive_homework_status,
)
from classroom.models.marks import Mark, MarkStatus, StudentMark
from classroom.models.schedule import (
    EntryStatus,
    Room,
    ScheduleEntry,
    TeacherSchedule,
    find_conflicts,
    total_hours,
)
from classroom.stats.distribution import KeyFn, key_getter, tabulate
from classroom.stats.rates import average, count_where, rate
from classroom.stats.ranking import top_n
from classroom.stats.windows import (
    DateLike,
    Window,
    offset_iso,
    resolve_today,
    select_window,
)


def serialize(obj: Any) -> Any:
    """Recursively converts view-models, records and enums into JSON-compatible values."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: serialize(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, Enum):
        return obj.value

    if hasattr(obj, "to_dict"):
        return obj.to_dict()

    if isinstance(obj, (list, tuple)):
        return [serialize(item) for item in obj]

    if isinstance(obj, dict):
        return {key: serialize(value) for key, value in obj.items()}

    return obj


class ViewModel:
    def to_dict(self) -> dict:
        return serialize(self)


# === attendance ===


def attendance_rate(records: Iterable[AttendanceRecord]) -> float:
    """Share of records marked present or late, as a percentage."""
    records = list(records)

    return rate(count_where(records, lambda r: r.attended), len(records))


@dataclass
class ClassAttendance(ViewModel):
    class_id: str
    class_name: str
    total_students: int
    total_records: int
    attendance_rate: float


@dataclass
class MonthlyAttendance(ViewModel):
    month: str
    total_days: int
    present_days: int
    attendance_rate: float


@dataclass
class StudentAttendanceSummary(ViewModel):
    student_id: str
    student_name: str
    class_id: str
    class_name: str
    total_days: int
    present_days: int
    absent_days: int
    late_days: int
    excused_days: int
    attendance_rate: float
    monthly_stats: list[MonthlyAttendance] = field(default_factory=list)
    recent_records: list[AttendanceRecord] = field(default_factory=list)
    last_attendance: AttendanceRecord | None = None


@dataclass
class AttendanceTrendPoint(ViewModel):
    date: str
    attendance_rate: float


@dataclass
class AttendanceStats(ViewModel):
    total_students: int
    total_events: int
    total_records: int
    total_classes: int
    overall_attendance_rate: float
    today_attendance_rate: float
    weekly_attendance_rate: float
    monthly_attendance_rate: float
    today_event_count: int
    ongoing_event_count: int
    status_distribution: dict[str, int]
    class_distribution: dict[str, ClassAttendance]
    top_classes: list[ClassAttendance]
    recent_events: list[AttendanceEvent]
    trend_data: list[AttendanceTrendPoint]


def _group_by(records: Iterable[Any], key: str | KeyFn) -> dict[Any, list[Any]]:
    get_key = key_getter(key)
    groups: dict[Any, list[Any]] = defaultdict(list)

    for record in records:
        groups[get_key(record)].append(record)

    return dict(groups)


def compose_class_attendance(
    records: Iterable[AttendanceRecord],
) -> dict[str, ClassAttendance]:
    """Per-class roll-up keyed by class id, in first-seen order."""
    return {
        class_id: ClassAttendance(
            class_id=class_id,
            class_name=group[0].class_name,
            total_students=len({r.student_id for r in group}),
            total_records=len(group),
            attendance_rate=attendance_rate(group),
        )
        for class_id, group in _group_by(records, "class_id").items()
    }


def compose_student_attendance(
    records: Iterable[AttendanceRecord],
    recent_count: int = settings.TOP_N,
) -> list[StudentAttendanceSummary]:
    """
    Builds one attendance summary per student, in first-seen order.

    Monthly breakdowns are ordered by month; recent records are the latest by date, newest first.
    """
    summaries = []

    for student_id, group in _group_by(records, "student_id").items():
        by_date = sorted(group, key=lambda r: (r.date, r.updated_at), reverse=True)
        statuses = tabulate(group, "status")

        monthly = [
            MonthlyAttendance(
                month=month,
                total_days=len(month_records),
                present_days=count_where(month_records, lambda r: r.attended),
                attendance_rate=attendance_rate(month_records),
            )
            for month, month_records in sorted(
                _group_by(group, lambda r: format_month_key(r.date)).items()
            )
        ]

        summaries.append(
            StudentAttendanceSummary(
                student_id=student_id,
                student_name=group[0].student_name,
                class_id=group[0].class_id,
                class_name=group[0].class_name,
                total_days=len(group),
                present_days=statuses.get(AttendanceStatus.PRESENT.value, 0),
                absent_days=statuses.get(AttendanceStatus.ABSENT.value, 0),
                late_days=statuses.get(AttendanceStatus.LATE.value, 0),
                excused_days=statuses.get(AttendanceStatus.EXCUSED.value, 0),
                attendance_rate=attendance_rate(group),
                monthly_stats=monthly,
                recent_records=by_date[:recent_count],
                last_attendance=by_date[0],
            )
        )

    return summaries


def compose_attendance_stats(
    records: Iterable[AttendanceRecord],
    events: Iterable[AttendanceEvent] = (),
    now: DateLike | None = None,
    top: int = settings.TOP_N,
) -> AttendanceStats:
    """
    Assembles the attendance sidebar.

    Args:
        records (Iterable[AttendanceRecord]): Every attendance record in scope.
        events (Iterable[AttendanceEvent]): The scheduled sessions in scope.
        now (date | datetime | str | None): Reference date for the time windows.
        top (int): Length of the top classes and recent events lists.

    Returns:
        AttendanceStats: Rates are percentages (0-100) over present + late records. The status
            distribution only lists statuses that occur. Top classes are ranked by attendance
            rate, ties in first-seen order. Recent events are the most recently updated.
    """
    records = list(records)
    events = list(events)
    today = resolve_today(now)

    today_records = select_window(records, Window.TODAY, today)
    weekly_records = select_window(records, Window.LAST_7_DAYS, today)
    monthly_records = select_window(records, Window.LAST_30_DAYS, today)

    class_distribution = compose_class_attendance(records)

    trend_data = [
        AttendanceTrendPoint(date=date, attendance_rate=attendance_rate(group))
        for date, group in sorted(_group_by(monthly_records, "date").items())
    ]

    return AttendanceStats(
        total_students=len({r.student_id for r in records}),
        total_events=len(events),
        total_records=len(records),
        total_classes=len(class_distribution),
        overall_attendance_rate=attendance_rate(records),
        today_attendance_rate=attendance_rate(today_records),
        weekly_attendance_rate=attendance_rate(weekly_records),
        monthly_attendance_rate=attendance_rate(monthly_records),
        today_event_count=len(select_window(events, Window.TODAY, today)),
        ongoing_event_count=count_where(events, lambda e: e.status is EventStatus.ONGOING),
        status_distribution=tabulate(records, "status"),
        class_distribution=class_distribution,
        top_classes=top_n(class_distribution.values(), "attendance_rate", top),
        recent_events=top_n(events, lambda e: e.updated_at or "", top),
        trend_data=trend_data,
    )


# === homework ===

_ACTIVE_STATUSES = (HomeworkStatus.ASSIGNED, HomeworkStatus.IN_PROGRESS)


@dataclass
class HomeworkProgress(ViewModel):
    homework_id: str
    total_students: int
    submitted_count: int
    not_submitted_count: int
    late_count: int
    graded_count: int
    average_grade: float | None
    submission_rate: float
    on_time_rate: float
    completion_rate: float


@dataclass
class ClassHomeworkOverview(ViewModel):
    class_id: str
    class_name: str
    total_homeworks: int
    active_homeworks: int
    completed_homeworks: int
    overdue_homeworks: int
    average_submission_rate: float
    average_grade: float | None


@dataclass
class HomeworkStats(ViewModel):
    total_homeworks: int
    active_homeworks: int
    completed_homeworks: int
    overdue_homeworks: int
    draft_homeworks: int
    total_submissions: int
    submitted_count: int
    graded_count: int
    late_count: int
    submission_rate: float
    grading_rate: float
    on_time_rate: float
    average_grade: float
    assigned_today: int
    due_today: int
    status_distribution: dict[str, int]
    subject_distribution: dict[str, int]
    type_distribution: dict[str, int]
    priority_distribution: dict[str, int]
    difficulty_distribution: dict[str, int]
    upcoming_deadlines: list[Homework]
    top_classes: list[ClassHomeworkOverview]

    @property
    def has_submissions(self) -> bool:
        return self.total_submissions > 0


def _graded_values(submissions: Iterable[HomeworkSubmission]) -> list[float]:
    return [s.grade for s in submissions if s.grade is not None]


def compose_homework_progress(
    homework: Homework, submissions: Iterable[HomeworkSubmission]
) -> HomeworkProgress:
    own = [s for s in submissions if s.homework_id == homework.id]
    submitted = [s for s in own if s.is_submitted]
    late = count_where(submitted, lambda s: s.is_late)
    graded = count_where(own, lambda s: s.status is SubmissionStatus.GRADED)
    grades = _graded_values(own)

    return HomeworkProgress(
        homework_id=homework.id,
        total_students=len(own),
        submitted_count=len(submitted),
        not_submitted_count=len(own) - len(submitted),
        late_count=late,
        graded_count=graded,
        average_grade=average(grades) if grades else None,
        submission_rate=rate(len(submitted), len(own)),
        on_time_rate=rate(len(submitted) - late, len(submitted)),
        completion_rate=rate(graded, len(own)),
    )


def compose_class_homework(
    homeworks: Iterable[Homework],
    submissions: Iterable[HomeworkSubmission],
    now: DateLike | None = None,
) -> list[ClassHomeworkOverview]:
    """
    Rolls homework up by class, in first-seen order.

    The submission rate of a class is the mean of its per-homework submission rates.
    """
    today = resolve_today(now)
    submissions = list(submissions)
    overviews = []

    for class_id, group in _group_by(homeworks, "class_id").items():
        statuses = [derive_homework_status(today, h) for h in group]
        homework_ids = {h.id for h in group}
        grades = _graded_values(s for s in submissions if s.homework_id in homework_ids)

        overviews.append(
            ClassHomeworkOverview(
                class_id=class_id,
                class_name=group[0].class_name,
                total_homeworks=len(group),
                active_homeworks=sum(1 for s in statuses if s in _ACTIVE_STATUSES),
                completed_homeworks=statuses.count(HomeworkStatus.COMPLETED),
                overdue_homeworks=statuses.count(HomeworkStatus.OVERDUE),
                average_submission_rate=average(
                    compose_homework_progress(h, submissions).submission_rate
                    for h in group
                ),
                average_grade=average(grades) if grades else None,
            )
        )

    return overviews


def compose_homework_stats(
    homeworks: Iterable[Homework],
    submissions: Iterable[HomeworkSubmission] = (),
    now: DateLike | None = None,
    top: int = settings.TOP_N,
) -> HomeworkStats:
    """
    Assembles the homework sidebar.

    Homework statuses are re-derived against `now` before counting, so a homework whose due date
    passed is counted as overdue even if its stored status still says assigned.

    Rates:
        - submission rate: submitted (any status but not_submitted) / all submissions
        - grading rate: graded / submitted
        - on-time rate: (submitted - late) / submitted
    The average grade is taken over submissions that have a grade, 0.0 when there are none.
    Upcoming deadlines are homeworks due today or later that are not completed.
    """
    homeworks = list(homeworks)
    submissions = list(submissions)
    today = resolve_today(now)
    today_iso = today.isoformat()

    derived = {h.id: derive_homework_status(today, h) for h in homeworks}
    statuses = list(derived.values())

    submitted = [s for s in submissions if s.is_submitted]
    graded_count = count_where(submissions, lambda s: s.status is SubmissionStatus.GRADED)
    late_count = count_where(submissions, lambda s: s.is_late)

    upcoming = sorted(
        (
            h
            for h in homeworks
            if h.due_date >= today_iso and derived[h.id] is not HomeworkStatus.COMPLETED
        ),
        key=lambda h: (h.due_date, h.due_time or ""),
    )

    class_overviews = compose_class_homework(homeworks, submissions, today)

    return HomeworkStats(
        total_homeworks=len(homeworks),
        active_homeworks=sum(1 for s in statuses if s in _ACTIVE_STATUSES),
        completed_homeworks=statuses.count(HomeworkStatus.COMPLETED),
        overdue_homeworks=statuses.count(HomeworkStatus.OVERDUE),
        draft_homeworks=statuses.count(HomeworkStatus.DRAFT),
        total_submissions=len(submissions),
        submitted_count=len(submitted),
        graded_count=graded_count,
        late_count=late_count,
        submission_rate=rate(len(submitted), len(submissions)),
        grading_rate=rate(graded_count, len(submitted)),
        on_time_rate=rate(len(submitted) - late_count, len(submitted)),
        average_grade=average(_graded_values(submissions)),
        assigned_today=count_where(homeworks, lambda h: h.assigned_date == today_iso),
        due_today=count_where(homeworks, lambda h: h.due_date == today_iso),
        status_distribution=tabulate(statuses, lambda s: s),
        subject_distribution=tabulate(homeworks, "subject"),
        type_distribution=tabulate(homeworks, "type"),
        priority_distribution=tabulate(homeworks, "priority"),
        difficulty_distribution=tabulate(homeworks, "difficulty"),
        upcoming_deadlines=upcoming[:top],
        top_classes=top_n(class_overviews, "average_submission_rate", top),
    )


# === marks ===


@dataclass
class MarksStats(ViewModel):
    total_marks: int
    published_marks: int
    draft_marks: int
    total_student_marks: int
    passed_count: int
    exempted_count: int
    pass_rate: float
    average_performance: float
    subject_distribution: dict[str, int]
    type_distribution: dict[str, int]
    recent_marks: list[Mark]


def compose_marks_stats(
    marks: Iterable[Mark],
    student_marks: Iterable[StudentMark] = (),
    top: int = settings.TOP_N,
) -> MarksStats:
    """
    Assembles the marks sidebar.

    The pass rate is passing results over all results, so exempted students lower it.
    Average performance is the mean percentage of non-exempted results.
    """
    marks = list(marks)
    student_marks = list(student_marks)
    sat = [sm for sm in student_marks if not sm.is_exempted]
    passed = count_where(student_marks, lambda sm: sm.is_passing)

    return MarksStats(
        total_marks=len(marks),
        published_marks=count_where(marks, lambda m: m.status is MarkStatus.PUBLISHED),
        draft_marks=count_where(marks, lambda m: m.status is MarkStatus.DRAFT),
        total_student_marks=len(student_marks),
        passed_count=passed,
        exempted_count=len(student_marks) - len(sat),
        pass_rate=rate(passed, len(student_marks)),
        average_performance=average(sm.percentage for sm in sat),
        subject_distribution=tabulate(marks, "subject"),
        type_distribution=tabulate(marks, "type"),
        recent_marks=top_n(marks, lambda m: m.updated_at or "", top),
    )


# === schedule ===


@dataclass
class ResourceLoad(ViewModel):
    resource_id: str
    resource_name: str
    total_hours: float
    utilization_rate: float


@dataclass
class ScheduleStats(ViewModel):
    total_entries: int
    total_hours: float
    total_classes: int
    total_teachers: int
    total_rooms: int
    utilization_rate: float
    conflicts_count: int
    today_entries: int
    ongoing_entries: int
    upcoming_entries: int
    completed_entries: int
    cancelled_entries: int
    completion_rate: float
    subject_distribution: dict[str, int]
    type_distribution: dict[str, int]
    day_distribution: dict[str, int]
    hourly_distribution: dict[str, int]
    teacher_workload: list[ResourceLoad]
    room_utilization: list[ResourceLoad]


def _teacher_schedules_from(entries: list[ScheduleEntry]) -> list[TeacherSchedule]:
    return [
        TeacherSchedule.from_entries(f"ts_{teacher_id}", teacher_id, group)
        for teacher_id, group in _group_by(entries, "teacher_id").items()
    ]


def compose_schedule_stats(
    entries: Iterable[ScheduleEntry],
    rooms: Iterable[Room] = (),
    teacher_schedules: Iterable[TeacherSchedule] | None = None,
    now: DateLike | None = None,
    top: int = settings.TOP_N,
) -> ScheduleStats:
    """
    Assembles the schedule sidebar.

    Args:
        entries (Iterable[ScheduleEntry]): The timetable in scope.
        rooms (Iterable[Room]): Rooms whose utilisation is reported; room hours are counted from
            `entries` by room id, not from each room's own schedule.
        teacher_schedules (Iterable[TeacherSchedule] | None): Teacher roll-ups carrying their
            weekly hour limits. Built from `entries` with the default limit when omitted.
        now (date | datetime | str | None): Reference date for today / upcoming counts.
        top (int): Length of the workload and room rankings.

    Returns:
        ScheduleStats: Overall utilisation is total hours over the weekly capacity of all rooms
            (hours per day × school days per week × rooms), 0.0 without rooms.
    """
    entries = list(entries)
    rooms = list(rooms)
    today = resolve_today(now)
    today_iso = today.isoformat()
    tomorrow_iso = offset_iso(1, today)

    if teacher_schedules is None:
        teacher_schedules = _teacher_schedules_from(entries)
    teacher_schedules = list(teacher_schedules)

    hours = total_hours(entries)
    weekly_room_capacity = settings.ROOM_HOURS_PER_DAY * settings.SCHOOL_DAYS_PER_WEEK
    completed = count_where(entries, lambda e: e.status is EntryStatus.COMPLETED)

    teacher_workload = top_n(
        (
            ResourceLoad(
                resource_id=ts.teacher_id,
                resource_name=ts.teacher_name,
                total_hours=ts.total_weekly_hours,
                utilization_rate=ts.utilization_rate,
            )
            for ts in teacher_schedules
        ),
        "utilization_rate",
        top,
    )

    room_hours = defaultdict(float)
    for entry in entries:
        if entry.room_id:
            room_hours[entry.room_id] += entry.duration_hours

    room_utilization = top_n(
        (
            ResourceLoad(
                resource_id=room.id,
                resource_name=room.name,
                total_hours=room_hours.get(room.id, 0.0),
                utilization_rate=rate(room_hours.get(room.id, 0.0), weekly_room_capacity),
            )
            for room in rooms
        ),
        "utilization_rate",
        top,
    )

    return ScheduleStats(
        total_entries=len(entries),
        total_hours=hours,
        total_classes=len({e.class_id for e in entries}),
        total_teachers=len(teacher_schedules),
        total_rooms=len(rooms),
        utilization_rate=rate(hours, weekly_room_capacity * len(rooms)),
        conflicts_count=len(find_conflicts(entries)),
        today_entries=count_where(entries, lambda e: e.date == today_iso),
        ongoing_entries=count_where(entries, lambda e: e.status is EntryStatus.ONGOING),
        upcoming_entries=count_where(
            entries,
            lambda e: e.date in (today_iso, tomorrow_iso)
            and e.status is EntryStatus.SCHEDULED,
        ),
        completed_entries=completed,
        cancelled_entries=count_where(entries, lambda e: e.status is EntryStatus.CANCELLED),
        completion_rate=rate(completed, len(entries)),
        subject_distribution=tabulate(entries, "subject"),
        type_distribution=tabulate(entries, "type"),
        day_distribution=tabulate(entries, "day_of_week"),
        hourly_distribution=tabulate(entries, "start_hour"),
        teacher_workload=teacher_workload,
        room_utilization=room_utilization,
    )
