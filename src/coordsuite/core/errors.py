"""
Custom exception hierarchy for Coordinates Suite.

This module defines the exceptions raised by the parsing and projection
layers. Per-line conversion failures derive from ConversionError and carry
an ErrorKind so the converter can turn them into LineFailure records
instead of aborting a batch.
"""

from typing import Any, Dict, List, Optional

from coordsuite.models.errors import ErrorKind


class CoordSuiteException(Exception):
    """
    Base exception for all Coordinates Suite errors.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        status_code: HTTP status code for API responses
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize CoordSuiteException.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            status_code: HTTP status code (default: 500)
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}', "
            f"status_code={self.status_code})"
        )


class UndetectableFormatError(CoordSuiteException):
    """
    Raised when no conversion direction can be chosen for a text block.

    This is a property of the whole block, not of one line, so it aborts
    the batch before any line is converted.
    Maps to HTTP 422 Unprocessable Entity.
    """

    kind = ErrorKind.UNDETECTABLE_FORMAT

    def __init__(
        self,
        message: str,
        sampled_lines: int = 0,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        error_details["sampled_lines"] = sampled_lines

        default_suggestions = [
            "Paste one coordinate pair per line",
            "Use latitude/longitude in decimal degrees or UTM easting/northing in meters",
            "Choose a conversion direction explicitly",
        ]

        super().__init__(
            message=message,
            error_code="UNDETECTABLE_FORMAT",
            status_code=422,
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class ConversionError(CoordSuiteException):
    """
    Base class for failures that concern a single input line.

    Subclasses set ``kind`` so the failure can be reported as data.
    Maps to HTTP 422 Unprocessable Entity.
    """

    kind: ErrorKind = ErrorKind.NUMERIC_PARSE_FAILURE

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=422,
            details=details,
            suggestions=suggestions,
        )


class TokenCountMismatchError(ConversionError):
    """Raised when a line does not split into exactly two tokens."""

    kind = ErrorKind.TOKEN_COUNT_MISMATCH

    def __init__(self, token_count: int, details: Optional[Dict[str, Any]] = None):
        """
        Initialize TokenCountMismatchError.

        Args:
            token_count: Number of tokens found on the line
            details: Additional technical details
        """
        error_details = details or {}
        error_details["token_count"] = token_count
        self.token_count = token_count

        super().__init__(
            message=f"Expected 2 numeric values, found {token_count}",
            error_code="TOKEN_COUNT_MISMATCH",
            details=error_details,
            suggestions=["Put exactly one coordinate pair on each line"],
        )


class NumericParseError(ConversionError):
    """Raised when a token is not a plain decimal number."""

    kind = ErrorKind.NUMERIC_PARSE_FAILURE

    def __init__(self, token: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize NumericParseError.

        Args:
            token: The offending token text
            details: Additional technical details
        """
        error_details = details or {}
        error_details["token"] = token
        self.token = token

        super().__init__(
            message=f"'{token}' is not a valid decimal number",
            error_code="NUMERIC_PARSE_FAILURE",
            details=error_details,
            suggestions=[
                "Use '.' as the decimal separator",
                "Remove thousands separators and exponent notation",
            ],
        )


class InvalidZoneError(ConversionError):
    """Raised for a UTM zone outside 1-60 or an unrecognized hemisphere."""

    kind = ErrorKind.INVALID_ZONE

    def __init__(
        self,
        message: str,
        zone: Optional[Any] = None,
        hemisphere: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize InvalidZoneError.

        Args:
            message: User-friendly error message
            zone: The rejected zone value, if any
            hemisphere: The rejected hemisphere value, if any
            details: Additional technical details
        """
        error_details = details or {}
        if zone is not None:
            error_details["zone"] = zone
        if hemisphere is not None:
            error_details["hemisphere"] = str(hemisphere)

        super().__init__(
            message=message,
            error_code="INVALID_ZONE",
            details=error_details,
            suggestions=[
                "UTM zones are numbered 1 to 60",
                "Hemisphere must be 'N'/'North' or 'S'/'South'",
            ],
        )


class OutOfProjectionRangeError(ConversionError):
    """Raised when a point falls outside the band where UTM is defined."""

    kind = ErrorKind.OUT_OF_PROJECTION_RANGE

    def __init__(
        self,
        message: str,
        latitude: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize OutOfProjectionRangeError.

        Args:
            message: User-friendly error message
            latitude: The offending latitude, if known
            details: Additional technical details
            suggestions: List of suggestions for fixing the input
        """
        error_details = details or {}
        if latitude is not None:
            error_details["latitude"] = latitude

        super().__init__(
            message=message,
            error_code="OUT_OF_PROJECTION_RANGE",
            details=error_details,
            suggestions=suggestions or ["UTM is only defined between 80°S and 84°N"],
        )


class CoordinateRangeError(OutOfProjectionRangeError):
    """
    Raised when a point value lies outside its valid domain.

    Used by GeographicPoint and UtmPoint, which reject invalid values
    instead of clamping them.
    """

    def __init__(self, message: str, field: str, value: float):
        super().__init__(
            message=message,
            details={"field": field, "value": value},
            suggestions=[
                "Latitude must be within [-90, 90] and longitude within [-180, 180]",
                "Northing must not be negative",
            ],
        )
        self.error_code = "COORDINATE_RANGE_ERROR"
        self.field = field
        self.value = value


class ExportError(CoordSuiteException):
    """
    Raised when converted coordinates cannot be exported.

    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str,
        export_format: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if export_format:
            error_details["export_format"] = export_format

        super().__init__(
            message=message,
            error_code="EXPORT_ERROR",
            status_code=400,
            details=error_details,
            suggestions=["Convert at least one coordinate before exporting"],
        )

