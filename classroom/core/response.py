# classroom/core/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === lookups ===
    NOT_FOUND = "NOT_FOUND"

    # === constraint violations ===
    # a record with the same id is already stored
    DUPLICATE_ID = "DUPLICATE_ID"

    # === validation failures ===
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # snapshot or payload structure is malformed
    INVALID_INPUT = "INVALID_INPUT"

    # field value is out of bounds or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # valid in isolation, but breaks a cross-record rule (e.g. grade > total marks)
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === internal faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Outcome of a `ClassroomRepository` operation.

    Repository methods report expected failures (missing ids, bad field values, unreadable
    snapshots) through a failed `Response` instead of raising, so the dashboard can print them and
    carry on.

    Attributes:
        success (bool): Whether the operation went through.
        detail (str | None): Message for the user.
        error (ErrorCode | str | None): Machine-readable failure reason.
        status_code (int | None): HTTP-style code, so a web layer could pass results straight on.
        data (dict): Operation payload, e.g. `{"record": ...}` or `{"records": [...]}`.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def error_name(self) -> str | None:
        """The error as plain text: the enum value for an `ErrorCode`, the string itself otherwise."""
        return self._error.value if isinstance(self._error, Enum) else self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    # === constructors ===

    @classmethod
    def succeed(cls, detail: str | None = None, status_code: int = 200, data: dict | None = None) -> Response:
        return cls(True, detail=detail, status_code=status_code, data=data)

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int = 400,
        data: dict | None = None,
    ) -> Response:
        return cls(False, detail=detail, error=error, status_code=status_code, data=data)

    @classmethod
    def not_found(cls, detail: str) -> Response:
        return cls.fail(detail, ErrorCode.NOT_FOUND, status_code=404)

    @classmethod
    def conflict(cls, detail: str) -> Response:
        return cls.fail(detail, ErrorCode.DUPLICATE_ID, status_code=409)

    # === serialization ===

    def to_dict(self) -> dict:
        return {
            "success": self._success,
            "error": self.error_name,
            "detail": self._detail,
            "data": self._data,
            "status_code": self._status_code,
        }

    # === dunder methods ===

    def __bool__(self) -> bool:
        return self._success

    def __repr__(self) -> str:
        return f"Response(success={self._success}, error={self.error_name}, status_code={self._status_code})"

    def __str__(self) -> str:
        if self._success:
            return f"Success: {self._detail or ''}"

        return f"Error: {self.error_name or ''} {self._detail or ''}".rstrip()
