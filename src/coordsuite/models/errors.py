"""
Error kinds and pydantic models for standardized error responses.

ErrorKind names the failure categories reported per input line; the
response models keep API errors consistent across endpoints.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ErrorKind(str, Enum):
    """Failure categories for coordinate conversion."""

    UNDETECTABLE_FORMAT = "undetectable_format"
    TOKEN_COUNT_MISMATCH = "token_count_mismatch"
    NUMERIC_PARSE_FAILURE = "numeric_parse_failure"
    INVALID_ZONE = "invalid_zone"
    OUT_OF_PROJECTION_RANGE = "out_of_projection_range"


class ErrorDetail(BaseModel):
    """
    Detailed information about a specific error.

    Used for validation errors with multiple field-level issues.
    """

    field: Optional[str] = Field(None, description="Field name that caused the error")
    message: str = Field(..., description="Error message for this field")
    code: Optional[str] = Field(None, description="Error code for this specific issue")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "body.zone",
                "message": "Input should be less than or equal to 60",
                "code": "less_than_equal",
            }
        }
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response model for all API errors.

    Attributes:
        error_code: Machine-readable error identifier (e.g., 'UNDETECTABLE_FORMAT')
        kind: ErrorKind of a conversion error
        message: Human-readable error message
        details: Optional dictionary with additional technical details
        timestamp: When the error occurred (UTC)
        request_id: Optional request correlation ID for tracing
        suggestions: Optional list of actionable suggestions for resolution
        errors: Optional list of detailed field-level errors
    """

    error_code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["UNDETECTABLE_FORMAT", "EXPORT_ERROR", "VALIDATION_ERROR"],
    )
    kind: Optional[ErrorKind] = Field(
        None,
        description="Conversion failure category, for conversion errors",
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["No line contains a pair of numeric values"],
    )
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional technical details about the error",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred (UTC)",
    )
    request_id: Optional[str] = Field(
        None,
        description="Request correlation ID for tracing",
    )
    suggestions: Optional[List[str]] = Field(
        None,
        description="Actionable suggestions for resolving the error",
    )
    errors: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed field-level errors (for validation)",
    )

    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime, _info) -> str:
        """Serialize timestamp to ISO format string."""
        return timestamp.isoformat() + "Z" if timestamp.tzinfo is None else timestamp.isoformat()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "UNDETECTABLE_FORMAT",
                "kind": "undetectable_format",
                "message": "No line contains a pair of numeric values",
                "details": {"sampled_lines": 0},
                "timestamp": "2025-11-10T15:30:00Z",
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "suggestions": ["Paste one coordinate pair per line"],
            }
        }
    )
