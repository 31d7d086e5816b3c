"""Pydantic schemas for API request/response."""

from typing import Optional

from pydantic import BaseModel, field_validator


class AuditRequest(BaseModel):
    """Request body for POST /api/audit.

    `url` is optional here so a missing value is answered with our own 400
    instead of the framework's 422.
    """

    url: Optional[str] = None

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url_field(cls, value: object) -> Optional[str]:
        if not isinstance(value, str):
            return None
        return value.strip()


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str
