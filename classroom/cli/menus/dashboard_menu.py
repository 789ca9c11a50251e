# classroom/cli/menus/dashboard_menu.py

"""
Dashboard menu for the classroom CLI.

Each screen composes its stats view-model from the active repository's collections on demand, so the
figures always reflect the latest records.
"""

import datetime
import logging
from typing import cast

import classroom.cli.formatters as cli_formatters
import classroom.cli.menu_helpers as helpers
import classroom.core.formatters as formatters
from classroom.cli.menu_helpers import MenuSignal
from classroom.models.attendance import AttendanceStatus
from classroom.models.details import DetailView
from classroom.models.repository import ClassroomRepository
from classroom.stats.filters import filter_records
from classroom.stats.summaries import (
    compose_attendance_stats,
    compose_class_attendance,
    compose_homework_stats,
    compose_marks_stats,
    compose_schedule_stats,
    compose_student_attendance,
)

logger = logging.getLogger(__name__)


def run(repository: ClassroomRepository, today: datetime.date | None = None) -> None:
    """
    Top-level loop with dispatch for the Dashboard menu.

    Args:
        repository (ClassroomRepository): The active repository.
        today (datetime.date | None): Reference date for every time window. Defaults to the current date.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    today = today or datetime.date.today()

    title = formatters.format_banner_text("CLASSROOM DASHBOARD")
    options = [
        ("Attendance Overview", lambda: view_attendance(repository, today)),
        ("Class Attendance Details", lambda: view_class_details(repository)),
        ("Student Attendance Details", lambda: view_student_details(repository)),
        ("Search Attendance Records", lambda: search_attendance_records(repository)),
        ("Homework Overview", lambda: view_homework(repository, today)),
        ("Marks Overview", lambda: view_marks(repository)),
        ("Schedule Overview", lambda: view_schedule(repository, today)),
        ("Save Snapshot", lambda: helpers.save_repository(repository)),
    ]
    zero_option = "Return to Start Menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response()

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(repository)

    helpers.returning_to("Start Menu")


# === stats screens ===


def view_attendance(repository: ClassroomRepository, today: datetime.date) -> None:
    stats = compose_attendance_stats(
        repository.attendance_records.values(),
        repository.attendance_events.values(),
        now=today,
    )
    print(cli_formatters.format_attendance_stats(stats))


def view_homework(repository: ClassroomRepository, today: datetime.date) -> None:
    stats = compose_homework_stats(
        repository.homeworks.values(),
        repository.submissions.values(),
        now=today,
    )
    print(cli_formatters.format_homework_stats(stats))


def view_marks(repository: ClassroomRepository) -> None:
    stats = compose_marks_stats(
        repository.marks.values(),
        repository.student_marks.values(),
    )
    print(cli_formatters.format_marks_stats(stats))


def view_schedule(repository: ClassroomRepository, today: datetime.date) -> None:
    stats = compose_schedule_stats(
        repository.schedule_entries.values(),
        repository.rooms.values(),
        now=today,
    )
    print(cli_formatters.format_schedule_stats(stats))


# === detail screens ===


def view_class_details(repository: ClassroomRepository) -> None:
    summaries = list(compose_class_attendance(repository.attendance_records.values()).values())

    selected = helpers.prompt_selection_from_list(
        summaries,
        "Classes",
        sort_key=lambda c: c.class_name,
        formatter=cli_formatters.format_class_oneline,
    )

    if selected is not None:
        print(cli_formatters.format_detail(DetailView.of_class(selected)))


def view_student_details(repository: ClassroomRepository) -> None:
    summaries = compose_student_attendance(repository.attendance_records.values())

    selected = helpers.prompt_selection_from_list(
        summaries,
        "Students",
        sort_key=lambda s: s.student_name,
        formatter=cli_formatters.format_student_oneline,
    )

    if selected is None:
        return

    print(cli_formatters.format_detail(DetailView.of_student(selected)))

    if selected.monthly_stats:
        print("\nMonthly Breakdown")
        for month in selected.monthly_stats:
            print(
                f"... {month.month:<10} {month.present_days:>3}/{month.total_days:<3} "
                f"{formatters.format_rate(month.attendance_rate)}"
            )

    if selected.last_attendance is not None:
        print(cli_formatters.format_detail(DetailView.of_record(selected.last_attendance)))


def search_attendance_records(repository: ClassroomRepository) -> None:
    """
    Prompts for a name query, a status and a date range, then lists the matching records.

    Notes:
        - Every prompt may be left blank to skip that filter.
        - An unrecognized status is reported and the search is abandoned.
    """
    query = helpers.prompt_user_input_or_cancel(
        "Search by student or class name (leave blank to match all):"
    )
    search = None if query is MenuSignal.CANCEL else cast(str, query)

    status_input = helpers.prompt_user_input_or_none(
        f"Filter by status ({', '.join(s.value for s in AttendanceStatus)}, leave blank for all):"
    )

    try:
        status = AttendanceStatus(status_input.lower()) if status_input else None

    except ValueError:
        print(f"\nUnknown attendance status: {status_input}.")
        return

    date_from = helpers.prompt_user_input_or_none("From date (YYYY-MM-DD, leave blank for none):")
    date_to = helpers.prompt_user_input_or_none("To date (YYYY-MM-DD, leave blank for none):")

    results = filter_records(
        repository.attendance_records.values(),
        search=search,
        search_fields=("student_name", "class_name"),
        equals={"status": status},
        date_from=date_from,
        date_to=date_to,
    )
    logger.debug("Attendance search matched %d records", len(results))

    if not results:
        print("\nYour search returned no results.")
        return

    print(f"\nYour search returned {len(results)} records:")
    helpers.display_results(
        sorted(results, key=lambda r: (r.date, r.student_name)),
        show_index=True,
        formatter=cli_formatters.format_record_oneline,
    )
