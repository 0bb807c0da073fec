"""
Service Layer Base - Core utilities for service operations.

This module provides:
- ServiceResult: success-or-failure wrapper returned by every service
- ServiceError: Structured error information
- ErrorCode: Standard error codes, including one per analysis failure kind
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar

from ..core.errors import (
    InvalidInputError,
    ParseError,
    SizeLimitExceededError,
    SyntaxAnalysisError,
    UnsupportedConstructError,
)

T = TypeVar("T")


class ErrorCode(str, Enum):
    """
    Standard error codes for service operations.

    Using string enum for easy serialization.
    """
    # Input validation
    MISSING_INPUT = "missing_input"
    INVALID_INPUT = "invalid_input"

    # File operations
    FILE_NOT_FOUND = "file_not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID_EXTENSION = "invalid_extension"

    # Code analysis
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"
    SYNTAX_ERROR = "syntax_error"
    PARSE_ERROR = "parse_error"
    UNSUPPORTED_CONSTRUCT = "unsupported_construct"

    # General
    INTERNAL_ERROR = "internal_error"


# Most specific first
_PARSE_ERROR_CODES: tuple[tuple[type[ParseError], ErrorCode], ...] = (
    (InvalidInputError, ErrorCode.INVALID_INPUT),
    (SizeLimitExceededError, ErrorCode.SIZE_LIMIT_EXCEEDED),
    (SyntaxAnalysisError, ErrorCode.SYNTAX_ERROR),
    (UnsupportedConstructError, ErrorCode.UNSUPPORTED_CONSTRUCT),
)


@dataclass(frozen=True)
class ServiceError:
    """
    Structured error information.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable error message
        details: Optional additional context (error location, sizes, ...)
    """
    code: ErrorCode
    message: str
    details: dict | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Either success with data, or failure with an error. Never both.

    Usage:
        result = ServiceResult.ok(analysis)
        result = ServiceResult.fail(ErrorCode.FILE_NOT_FOUND, "File not found")

        if result.success:
            process(result.data)
        else:
            report(result.error)
    """
    success: bool
    data: T | None = None
    error: ServiceError | None = None

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        details: dict | None = None
    ) -> ServiceResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            data=None,
            error=ServiceError(code=code, message=message, details=details)
        )

    @classmethod
    def from_parse_error(cls, error: ParseError) -> ServiceResult[T]:
        """
        Translate an analyzer exception into a failed result.

        The message is passed through verbatim; location and size
        information goes into details.
        """
        code = ErrorCode.PARSE_ERROR
        for error_type, error_code in _PARSE_ERROR_CODES:
            if isinstance(error, error_type):
                code = error_code
                break

        details = None
        if isinstance(error, SyntaxAnalysisError):
            details = {"line": error.line, "column": error.column, "reason": error.reason}
        elif isinstance(error, SizeLimitExceededError):
            details = {"size": error.size, "max_size": error.limit}

        return cls.fail(code, error.message, details)

    def map(self, func: Callable[[T], object]) -> ServiceResult:
        """Transform the data if successful, otherwise pass the error through."""
        if self.success and self.data is not None:
            return ServiceResult.ok(func(self.data))
        return self
