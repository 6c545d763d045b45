"""Error envelope schemas used in OpenAPI response docs."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel


class ErrorDetail(SQLModel):
    """One failing input field."""

    field: str = Field(
        description="Dotted location of the failing input.",
        examples=["body.title", "path.dashboard_id"],
    )
    message: str = Field(examples=["Invalid or corrupted ID"])


class ErrorResponse(SQLModel):
    """Error payload returned by every non-2xx response."""

    error: str | dict[str, object] | list[object] = Field(
        description="Human-readable error description.",
        examples=["Validation failed", "Task not found"],
    )
    details: list[ErrorDetail] | None = Field(
        default=None,
        description="Per-field validation failures, present on 400 responses.",
    )
    request_id: str | None = Field(
        default=None,
        description="Request correlation identifier injected by middleware.",
    )


ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Request validation failed."},
    404: {"model": ErrorResponse, "description": "Requested resource was not found."},
}
