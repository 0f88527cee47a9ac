"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and any future interface consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from patchbay.domain.errors import PatchbayError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"save_record"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, including post-operation handler failures.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (handler names, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def error_result(op: str, exc: PatchbayError, *, warnings: list[str] | None = None) -> ServiceResult:
    """Convert a domain error into a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        warnings=warnings or [],
        error=ServiceError(code=exc.code, message=str(exc), detail=exc.detail()),
    )
