"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Stable error code, e.g. REVIEW_NOT_FOUND")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Validation error response format."""

    error: str = "VALIDATION_FAILED"
    message: str = "Validation failed"
    details: dict[str, list[FieldError]]
