"""
Error handling module for model-viewer.

This module defines error codes, exception classes, and response models.

Error Response Format:
{
    "error": {
        "code": "UNSUPPORTED_FORMAT",
        "message": "Unsupported format"
    }
}

Usage:
    from app.core.errors import UnauthorizedError, UnsupportedFormatError

    # Raise with default message
    raise UnauthorizedError()

    # Raise with custom message
    raise UnsupportedFormatError("Unsupported format: .fbx")
"""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes returned in error responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
    CONVERSION_FAILED = "CONVERSION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Error detail containing code and message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error response body."""

    error: ErrorDetail


class ModelViewerError(Exception):
    """Base exception for model-viewer.

    All application specific exceptions inherit from this class so a single
    FastAPI exception handler can render them.

    Attributes:
        code: The error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code to return
    """

    def __init__(self, code: ErrorCode, message: str, status_code: int) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse model."""
        return ErrorResponse(
            error=ErrorDetail(code=self.code.value, message=self.message)
        )


class InvalidRequestError(ModelViewerError):
    """400 Bad Request - Invalid request parameters."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(ErrorCode.INVALID_REQUEST, message, 400)


class UnauthorizedError(ModelViewerError):
    """401 Unauthorized - Missing, invalid or expired credentials."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(ErrorCode.UNAUTHORIZED, message, 401)


class UnsupportedFormatError(ModelViewerError):
    """400 Bad Request - Upload has an extension no converter handles."""

    def __init__(self, message: str = "Unsupported format") -> None:
        super().__init__(ErrorCode.UNSUPPORTED_FORMAT, message, 400)


class FormatNotImplementedError(ModelViewerError):
    """501 Not Implemented - Known format whose conversion is not available."""

    def __init__(self, message: str = "Conversion not implemented") -> None:
        super().__init__(ErrorCode.NOT_IMPLEMENTED, message, 501)


class ConversionFailedError(ModelViewerError):
    """500 Internal Server Error - A converter raised.

    The underlying cause is logged server-side and never returned.
    """

    def __init__(self, message: str = "Conversion failed") -> None:
        super().__init__(ErrorCode.CONVERSION_FAILED, message, 500)


class InternalError(ModelViewerError):
    """500 Internal Server Error - Unexpected error."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(ErrorCode.INTERNAL_ERROR, message, 500)
