# tests/test_filters.py

from conftest import make_record

from classroom.models.attendance import AttendanceStatus
from classroom.stats.filters import build_predicate, filter_records, matches_search


def test_empty_filter_is_identity(sample_records):
    filtered = filter_records(sample_records)

    assert filtered == sample_records
    assert filtered is not sample_records


def test_build_predicate_without_options():
    assert build_predicate() is None
    assert build_predicate(search="   ", equals={"status": None}) is None


def test_search_is_case_insensitive(sample_records):
    filtered = filter_records(sample_records, search="student A3", search_fields=("student_name",))

    assert [r.id for r in filtered] == ["a3"]


def test_search_treats_missing_fields_as_non_matching(sample_records):
    filtered = filter_records(sample_records, search="late", search_fields=("notes",))

    assert filtered == []


def test_matches_search_ignores_non_string_values(sample_event):
    assert not matches_search(sample_event, "4", ("total_students",))


def test_equals_accepts_enum_or_string(sample_records):
    by_enum = filter_records(sample_records, equals={"status": AttendanceStatus.PRESENT})
    by_string = filter_records(sample_records, equals={"status": "present"})

    assert by_enum == by_string
    assert [r.id for r in by_enum] == ["a1", "a2"]


def test_filters_are_combined_with_and():
    records = [
        make_record("a1", "present", date="2025-03-01"),
        make_record("a2", "absent", date="2025-03-05"),
        make_record("a3", "present", date="2025-03-05", class_name="8B"),
    ]

    filtered = filter_records(
        records,
        search="7a",
        search_fields=("class_name",),
        equals={"status": "present"},
        date_from="2025-03-01",
        date_to="2025-03-05",
    )

    assert [r.id for r in filtered] == ["a1"]


def test_date_range_is_inclusive():
    records = [
        make_record("a1", "present", date="2025-03-01"),
        make_record("a2", "present", date="2025-03-05"),
        make_record("a3", "present", date="2025-03-06"),
    ]

    filtered = filter_records(records, date_from="2025-03-01", date_to="2025-03-05")

    assert [r.id for r in filtered] == ["a1", "a2"]


def test_on_date(sample_records):
    assert filter_records(sample_records, on_date="2025-03-09") == []
    assert len(filter_records(sample_records, on_date="2025-03-10")) == 4
