# core/response.py

"""
Structured result objects returned by every `Roster` lookup and manipulator method.

Expected failures (unknown ids, duplicate emails, unreadable data files) are reported
through `Response.fail()` with an `ErrorCode` rather than raised, so the CLI can
display them and carry on.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"

    # === Constraint Violations ===
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

    # === Persistence ===
    PERSISTENCE_LOAD_FAILED = "PERSISTENCE_LOAD_FAILED"
    PERSISTENCE_WRITE_FAILED = "PERSISTENCE_WRITE_FAILED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard Response object for Roster manipulator and lookup methods.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style response code.
        data (dict): Optional payload, varies by operation.
        trace (str | None): Optional exception traceback when errors occur.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
        trace: str | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}
        self._trace = trace

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
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    @property
    def trace(self) -> str | None:
        return self._trace

    @property
    def error_label(self) -> str:
        if isinstance(self._error, Enum):
            return self._error.value
        return self._error or ""

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = 400,
        data: dict | None = None,
        trace: str | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
            trace=trace,
        )

    # === dunder methods ===

    def __bool__(self) -> bool:
        return self._success

    def __repr__(self) -> str:
        return f"Response({self._success}, {self.error_label or None}, {self._detail!r})"

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        return f"Error: {self.error_label}"
