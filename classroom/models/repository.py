# classroom/models/repository.py

"""
The ClassroomRepository is the in-memory "source of truth" for every classroom record.

Attendance records and events, homework and submissions, marks and student results, schedule
entries and rooms are each stored in a dictionary keyed by record id. The stats composers in
`classroom.stats` never touch the repository directly; callers hand them `repository.<collection>`
snapshots, which keeps the aggregation code independent of where records come from.

Provides:
- create / add / update / remove / find operations returning `Response` objects
- homework-specific operations (submit, grade) and attendance event recounts
- saving to and loading from a directory of JSON files, one file per record type
- a dirty flag tracking unsaved mutations
"""

from __future__ import annotations

import datetime
import json
import logging
import os
from typing import Any, Callable

from classroom.core.response import ErrorCode, Response
from classroom.core.utils import generate_id
from classroom.models.attendance import AttendanceEvent, AttendanceRecord
from classroom.models.homework import (
    Homework,
    HomeworkSubmission,
    derive_homework_status,
)
from classroom.models.marks import Mark, StudentMark
from classroom.models.schedule import Room, ScheduleEntry
from classroom.models.types import RecordType

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.datetime.now().isoformat(timespec="seconds")


class ClassroomRepository:
    # record type -> (attribute name, id prefix); attribute names double as snapshot file names
    _tracking_maps: dict[type, tuple[str, str]] = {
        AttendanceRecord: ("attendance_records", "attendance"),
        AttendanceEvent: ("attendance_events", "event"),
        Homework: ("homeworks", "homework"),
        HomeworkSubmission: ("submissions", "submission"),
        Mark: ("marks", "mark"),
        StudentMark: ("student_marks", "student_mark"),
        ScheduleEntry: ("schedule_entries", "schedule"),
        Room: ("rooms", "room"),
    }

    def __init__(self, dir_path: str | None = None):
        self._attendance_records: dict[str, AttendanceRecord] = {}
        self._attendance_events: dict[str, AttendanceEvent] = {}
        self._homeworks: dict[str, Homework] = {}
        self._submissions: dict[str, HomeworkSubmission] = {}
        self._marks: dict[str, Mark] = {}
        self._student_marks: dict[str, StudentMark] = {}
        self._schedule_entries: dict[str, ScheduleEntry] = {}
        self._rooms: dict[str, Room] = {}
        self._dir_path = dir_path
        self._unsaved_changes = False

    # === properties ===

    @property
    def attendance_records(self) -> dict[str, AttendanceRecord]:
        return self._attendance_records

    @property
    def attendance_events(self) -> dict[str, AttendanceEvent]:
        return self._attendance_events

    @property
    def homeworks(self) -> dict[str, Homework]:
        return self._homeworks

    @property
    def submissions(self) -> dict[str, HomeworkSubmission]:
        return self._submissions

    @property
    def marks(self) -> dict[str, Mark]:
        return self._marks

    @property
    def student_marks(self) -> dict[str, StudentMark]:
        return self._student_marks

    @property
    def schedule_entries(self) -> dict[str, ScheduleEntry]:
        return self._schedule_entries

    @property
    def rooms(self) -> dict[str, Room]:
        return self._rooms

    @property
    def dir_path(self) -> str | None:
        return self._dir_path

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === persistence and import ===

    @classmethod
    def snapshot_names(cls) -> list[str]:
        """Names of the snapshot files, without the `.json` suffix."""
        return [attr_name for attr_name, _ in cls._tracking_maps.values()]

    @classmethod
    def load(cls, dir_path: str) -> Response:
        """
        Loads a repository from a directory of JSON snapshot files.

        Args:
            dir_path (str): The directory holding `<collection>.json` files.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if every snapshot file present was imported.
                    - False for JSON errors, malformed records or duplicate ids.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if a file is not valid JSON or not a list.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a record fails validation.
                    - `ErrorCode.INTERNAL_ERROR` if the directory cannot be read.
                - data (dict | None):
                    - On success:
                        - "repository" (ClassroomRepository): The loaded repository.

        Notes:
            - Missing snapshot files are treated as empty collections.
            - Import fails fast: one bad record aborts the whole load.
        """
        repository = cls(dir_path)

        try:
            for record_type, (attr_name, _) in cls._tracking_maps.items():
                path = os.path.join(dir_path, f"{attr_name}.json")

                if not os.path.exists(path):
                    continue

                with open(path, "r") as f:
                    data = json.load(f)

                if not isinstance(data, list):
                    raise json.JSONDecodeError(f"Expected {attr_name}.json to contain a list", "", 0)

                repository._import_records(data, record_type)

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse snapshot data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except (KeyError, TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to read snapshot data: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        logger.info("Loaded classroom snapshot from %s", dir_path)

        return Response.succeed(data={"repository": repository})

    def _import_records(self, data: list[dict[str, Any]], record_type: type) -> None:
        """
        Deserializes and stores a list of records, failing fast on the first bad one.

        Raises:
            ValueError: If a record cannot be deserialized or its id is already stored.
        """
        dictionary = self._get_tracking_dict(record_type)

        for record_dict in data:
            try:
                record = record_type.from_dict(record_dict)

            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(
                    f"Failed to deserialize {record_type.__name__}: {record_dict} - {e}"
                ) from None

            if record.id in dictionary:
                raise ValueError(f"Duplicate {record_type.__name__} id: {record.id}")

            dictionary[record.id] = record

    def save(self, dir_path: str | None = None) -> Response:
        """
        Serializes every collection to `<dir_path>/<collection>.json`.

        Args:
            dir_path (str | None): Target directory, defaults to the directory the repository was
                loaded from. Created if missing.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if every file was written.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if no directory is known.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a record is not JSON serializable.
                    - `ErrorCode.INTERNAL_ERROR` if writing fails.

        Notes:
            - Existing snapshot files are overwritten.
            - Clears the dirty flag on success.
        """
        dir_path = dir_path or self._dir_path

        if dir_path is None:
            return Response.fail(
                detail="No directory given to save the snapshot to.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            os.makedirs(dir_path, exist_ok=True)

            for attr_name, _ in self._tracking_maps.values():
                records = getattr(self, attr_name).values()

                with open(os.path.join(dir_path, f"{attr_name}.json"), "w") as f:
                    json.dump([r.to_dict() for r in records], f, indent=2, sort_keys=True)

        except TypeError as e:
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        self._dir_path = dir_path
        self._unsaved_changes = False
        logger.info("Saved classroom snapshot to %s", dir_path)

        return Response.succeed(detail="Classroom data successfully saved to disk.")

    # === data accessors ===

    def _get_tracking_dict(self, record_type: type) -> dict[str, Any]:
        try:
            attr_name, _ = self._tracking_maps[record_type]

        except KeyError:
            raise TypeError(f"Unrecognized record type: {record_type}") from None

        return getattr(self, attr_name)

    def get_records(
        self,
        record_type: type[RecordType],
        predicate: Callable[[RecordType], bool] | None = None,
    ) -> Response:
        """
        Fetches records of one type, optionally filtered by a predicate.

        Returns:
            Response: On success, data["records"] holds the (possibly empty) list of matches.
                Fails with `ErrorCode.INVALID_INPUT` for an unknown record type.
        """
        try:
            dictionary = self._get_tracking_dict(record_type)

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_INPUT)

        records = list(dictionary.values())

        if predicate:
            records = [r for r in records if predicate(r)]

        return Response.succeed(data={"records": records})

    def find_record_by_id(self, record_type: type[RecordType], id: str) -> Response:
        """
        Finds a record by id.

        Returns:
            Response: On success, data["record"] holds the record. Fails with
                `ErrorCode.NOT_FOUND` (404) if no record has that id.
        """
        try:
            record = self._get_tracking_dict(record_type).get(id)

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_INPUT)

        if record is None:
            return Response.not_found(
                f"No matching {record_type.__name__} found for {id}."
            )

        return Response.succeed(data={"record": record})

    def submissions_for(self, homework_id: str) -> list[HomeworkSubmission]:
        return [s for s in self._submissions.values() if s.homework_id == homework_id]

    def results_for(self, mark_id: str) -> list[StudentMark]:
        return [sm for sm in self._student_marks.values() if sm.mark_id == mark_id]

    # === data manipulators ===

    def _mark_dirty(self) -> None:
        self._unsaved_changes = True

    def add_record(self, record: RecordType) -> Response:
        """
        Stores an already-built record.

        Returns:
            Response: On success, data["record"] holds the record. Fails with
                `ErrorCode.DUPLICATE_ID` if a record of the same type already has its id, or
                `ErrorCode.INVALID_INPUT` for an unsupported type.
        """
        try:
            dictionary = self._get_tracking_dict(type(record))

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_INPUT)

        if record.id in dictionary:
            logger.warning("Rejected duplicate %s id %s", type(record).__name__, record.id)
            return Response.conflict(
                f"A {type(record).__name__} with id {record.id} already exists."
            )

        dictionary[record.id] = record
        self._mark_dirty()
        logger.debug("Added %r", record)

        return Response.succeed(
            detail="Record successfully added.",
            status_code=201,
            data={"record": record},
        )

    def create_record(self, record_type: type[RecordType], **fields: Any) -> Response:
        """
        Builds a record from keyword fields, assigns it a synthetic id and stores it.

        Creation timestamps (`created_at`, `marked_at`) default to now when the record type
        accepts them and the caller did not supply one.

        Returns:
            Response: On success, data["record"] holds the new record. Fails with
                `ErrorCode.INVALID_FIELD_VALUE` if a field fails validation, or
                `ErrorCode.MISSING_REQUIRED_FIELD` if a required field is missing.
        """
        try:
            _, prefix = self._tracking_maps[record_type]

        except KeyError:
            return Response.fail(
                detail=f"Unrecognized record type: {record_type}",
                error=ErrorCode.INVALID_INPUT,
            )

        now = _timestamp()

        if record_type in (AttendanceEvent, Homework, Mark, ScheduleEntry):
            fields.setdefault("created_at", now)

        if record_type is AttendanceRecord:
            fields.setdefault("marked_at", now)

        try:
            record = record_type(id=generate_id(prefix), **fields)

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except TypeError as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        return self.add_record(record)

    # --- typed creation shortcuts ---

    def create_attendance_record(self, **fields: Any) -> Response:
        return self.create_record(AttendanceRecord, **fields)

    def create_attendance_event(self, **fields: Any) -> Response:
        return self.create_record(AttendanceEvent, **fields)

    def create_homework(self, **fields: Any) -> Response:
        return self.create_record(Homework, **fields)

    def create_submission(self, **fields: Any) -> Response:
        if fields.get("homework_id") not in self._homeworks:
            return Response.not_found(
                f"Cannot create a submission for unknown homework {fields.get('homework_id')}."
            )

        return self.create_record(HomeworkSubmission, **fields)

    def create_mark(self, **fields: Any) -> Response:
        return self.create_record(Mark, **fields)

    def create_student_mark(self, **fields: Any) -> Response:
        if fields.get("mark_id") not in self._marks:
            return Response.not_found(
                f"Cannot record a result for unknown mark {fields.get('mark_id')}."
            )

        return self.create_record(StudentMark, **fields)

    def create_schedule_entry(self, **fields: Any) -> Response:
        return self.create_record(ScheduleEntry, **fields)

    def create_room(self, **fields: Any) -> Response:
        return self.create_record(Room, **fields)

    def update_record(self, record: RecordType) -> Response:
        """
        Replaces the stored record that has the same id (last write wins).

        Returns:
            Response: On success, data["record"] holds the stored record. Fails with
                `ErrorCode.NOT_FOUND` if no record with that id exists.

        Notes:
            - `updated_at` is refreshed on record types that track it.
        """
        try:
            dictionary = self._get_tracking_dict(type(record))

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_INPUT)

        if record.id not in dictionary:
            return Response.not_found(
                f"No matching {type(record).__name__} could be found to update: {record.id}."
            )

        if hasattr(record, "updated_at"):
            record.updated_at = _timestamp()

        dictionary[record.id] = record
        self._mark_dirty()
        logger.debug("Updated %r", record)

        return Response.succeed(
            detail="Record successfully updated.",
            data={"record": record},
        )

    def remove_record(self, record_type: type[RecordType], id: str) -> Response:
        """
        Deletes a record by id.

        Notes:
            - Removing a homework also removes its submissions; removing a mark also removes its
              student results.
        """
        try:
            dictionary = self._get_tracking_dict(record_type)

        except TypeError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_INPUT)

        if dictionary.pop(id, None) is None:
            return Response.not_found(
                f"No matching {record_type.__name__} could be found for deletion: {id}."
            )

        if record_type is Homework:
            for submission in self.submissions_for(id):
                del self._submissions[submission.id]

        if record_type is Mark:
            for result in self.results_for(id):
                del self._student_marks[result.id]

        self._mark_dirty()
        logger.debug("Removed %s %s", record_type.__name__, id)

        return Response.succeed(detail="Record successfully removed.")

    # --- homework operations ---

    def submit_homework(self, submission_id: str, submitted_at: str | None = None) -> Response:
        """
        Records a hand-in and derives its lateness from the homework deadline.

        Returns:
            Response: On success, data["submission"] holds the updated submission. Fails with
                `ErrorCode.NOT_FOUND` if the submission or its homework is missing.
        """
        lookup = self._submission_and_homework(submission_id)

        if not lookup.success:
            return lookup

        submission, homework = lookup.data["submission"], lookup.data["homework"]

        try:
            submission.submit(submitted_at or _timestamp(), homework)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        self._mark_dirty()

        return Response.succeed(data={"submission": submission})

    def grade_submission(
        self,
        submission_id: str,
        grade: float,
        graded_by: str,
        feedback: str | None = None,
    ) -> Response:
        """
        Grades a submission, bounding the grade by the homework's total marks.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the grade was recorded.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if the submission or its homework is missing.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the grade is not a non-negative number.
                    - `ErrorCode.VALIDATION_FAILED` if the grade exceeds the total marks.
                - data (dict | None):
                    - On success:
                        - "submission" (HomeworkSubmission): The graded submission.
        """
        lookup = self._submission_and_homework(submission_id)

        if not lookup.success:
            return lookup

        submission, homework = lookup.data["submission"], lookup.data["homework"]

        try:
            grade = float(grade)

            if homework.total_marks is not None and grade > homework.total_marks:
                logger.warning(
                    "Rejected grade %s above total marks %s for %s",
                    grade,
                    homework.total_marks,
                    submission_id,
                )
                return Response.fail(
                    detail=f"Grade {grade:g} exceeds the total marks of {homework.total_marks:g}.",
                    error=ErrorCode.VALIDATION_FAILED,
                )

            submission.record_grade(grade, graded_by, _timestamp(), feedback)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        self._mark_dirty()

        return Response.succeed(data={"submission": submission})

    def _submission_and_homework(self, submission_id: str) -> Response:
        submission = self._submissions.get(submission_id)

        if submission is None:
            return Response.not_found(f"No matching submission found for {submission_id}.")

        homework = self._homeworks.get(submission.homework_id)

        if homework is None:
            return Response.not_found(
                f"Could not resolve homework {submission.homework_id} for submission {submission_id}."
            )

        return Response.succeed(data={"submission": submission, "homework": homework})

    def refresh_homework_statuses(
        self, now: datetime.date | datetime.datetime | None = None
    ) -> Response:
        """
        Stores the derived status on every homework whose status changed.

        Returns:
            Response: data["changed"] lists the ids of the homeworks that were updated.
        """
        now = now or datetime.date.today()
        changed = []

        for homework in self._homeworks.values():
            status = derive_homework_status(now, homework)

            if status is not homework.status:
                homework.status = status
                changed.append(homework.id)

        if changed:
            self._mark_dirty()

        return Response.succeed(data={"changed": changed})

    # --- attendance operations ---

    def update_event_counts(self, event_id: str) -> Response:
        """
        Recounts an attendance event from the records of its class on its date.

        Returns:
            Response: On success, data["event"] holds the event with refreshed counts.
        """
        event = self._attendance_events.get(event_id)

        if event is None:
            return Response.not_found(f"No matching attendance event found for {event_id}.")

        records = [
            r
            for r in self._attendance_records.values()
            if r.class_id == event.class_id and r.date == event.date
        ]

        if not records:
            return Response.fail(
                detail=f"No attendance has been marked for {event.class_name} on {event.date}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        event.apply_records(records)
        self._mark_dirty()

        return Response.succeed(data={"event": event})

    # === dunder methods ===

    def __len__(self) -> int:
        return sum(
            len(getattr(self, attr_name)) for attr_name, _ in self._tracking_maps.values()
        )

    def __repr__(self) -> str:
        return f"ClassroomRepository({self._dir_path}, {len(self)} records)"
