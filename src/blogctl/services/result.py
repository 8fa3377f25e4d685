"""ServiceResult and ServiceError: what every service method returns.

INVARIANT: Service methods never raise for expected failures (missing
files, bad slugs, invalid content). They return ``ok=False`` with a
:class:`ServiceError` whose ``code`` is one of :class:`ErrorCode`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_SLUG = "INVALID_SLUG"
    INVALID_TYPE = "INVALID_TYPE"
    WRITE_FAILED = "WRITE_FAILED"
    READ_FAILED = "READ_FAILED"
    UPDATE_FAILED = "UPDATE_FAILED"
    CONTENT_DIR_NOT_FOUND = "CONTENT_DIR_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    MAPPINGS_MISSING = "MAPPINGS_MISSING"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"generate_ids"``, ``"validate_content"``, ...).
        data: Operation payload. Failed batch operations (update,
            validate) still carry their per-file report here.
        warnings: Non-fatal issues, e.g. skipped posts or a recovered
            mapping file.
        error: Set when ``ok`` is False.
        meta: Optional extras (counts, timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def fail(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )
