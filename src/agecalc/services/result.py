"""Result envelope returned by every AgeService operation.

Commands never see exceptions from the service layer: a rejected instant
or an inverted interval comes back as ``ok=False`` with a
:class:`ServiceError` whose ``code`` is an :class:`ErrorCode`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    INVALID_INSTANT = "INVALID_INSTANT"
    INVERTED_INTERVAL = "INVERTED_INTERVAL"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation (``difference``, ``age`` or ``adjust``).

    ``data`` carries the payload on success; ``warnings`` lists input that
    was accepted with a fallback; ``meta`` holds the telemetry span when
    ``--verbose`` is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code.value, message=message, detail=detail),
        )
