# tests/test_marks.py

import pytest

from classroom.models.marks import GroupMark, Mark, MarkStatus, MarkType, StudentMark


def test_mark_requires_positive_total(sample_mark):
    with pytest.raises(ValueError):
        sample_mark.total_marks = 0

    with pytest.raises(TypeError):
        sample_mark.total_marks = "fifty"


def test_mark_round_trip(sample_mark):
    restored = Mark.from_dict(sample_mark.to_dict())

    assert restored.type is MarkType.QUIZ
    assert restored.status is MarkStatus.PUBLISHED
    assert restored.total_marks == 50.0


def test_student_mark_percentage_and_passing(sample_student_marks):
    ada, bayo, chidi, _ = sample_student_marks

    assert ada.percentage == pytest.approx(90.0)
    assert ada.is_passing
    assert bayo.percentage == pytest.approx(65.0)
    assert bayo.is_passing
    assert not chidi.is_passing


def test_exempted_student_never_passes(sample_student_marks):
    ada = sample_student_marks[0]
    ada.toggle_exempted_status()

    assert ada.is_exempted
    assert not ada.is_passing


def test_student_mark_from_dict(sample_student_marks):
    restored = StudentMark.from_dict(sample_student_marks[3].to_dict())

    assert restored.is_exempted
    assert restored.obtained_marks == 0.0


def test_group_mark_partitions_students(sample_mark, sample_student_marks):
    group = GroupMark.from_student_marks("g1", "grp1", "Group A", sample_mark, sample_student_marks)

    assert group.total_students == 4
    assert group.pass_count == 2
    assert group.fail_count == 1
    assert group.exempted_count == 1
    assert group.pass_count + group.fail_count + group.exempted_count == group.total_students


def test_group_mark_aggregates_skip_exempted(sample_mark, sample_student_marks):
    group = GroupMark.from_student_marks("g1", "grp1", "Group A", sample_mark, sample_student_marks)

    assert group.average_marks == pytest.approx(97.5 / 3)
    assert group.highest_marks == 45.0
    assert group.lowest_marks == 20.0
    assert group.pass_rate == 50.0


def test_group_mark_ignores_other_assessments(sample_mark, sample_student_marks):
    other = StudentMark("sm9", "m2", "s9", "Efe", "Math", 50, 50)

    group = GroupMark.from_student_marks(
        "g1", "grp1", "Group A", sample_mark, sample_student_marks + [other]
    )

    assert group.total_students == 4


def test_empty_group_mark(sample_mark):
    group = GroupMark.from_student_marks("g1", "grp1", "Group A", sample_mark, [])

    assert group.total_students == 0
    assert group.average_marks == 0.0
    assert group.pass_rate == 0.0


def test_group_mark_rejects_inconsistent_counts():
    with pytest.raises(ValueError):
        GroupMark("g1", "grp1", "Group A", "Math", "m1", "2025-03-07", 5, 0, 0, 0, 2, 2, 0)


def test_group_mark_round_trip(sample_mark, sample_student_marks):
    group = GroupMark.from_student_marks("g1", "grp1", "Group A", sample_mark, sample_student_marks)

    restored = GroupMark.from_dict(group.to_dict())

    assert restored.to_dict() == group.to_dict()
