"""Custom exception classes for statement processing.

This module defines a hierarchy of exceptions used throughout the
conversion and comparison pipeline. Each exception maps to a specific
error code defined in errors.py.
"""

from typing import Any

from statement_compare.core.errors import get_error


class StatementProcessingError(Exception):
    """Base exception for all statement processing errors.

    All custom exceptions inherit from this base class and include
    an error_code that maps to the error catalog.

    Attributes:
        error_code: Code from the error catalog (e.g., "PARSE_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
        message: Technical description (defaults to the catalog message)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
        message: str | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: 500)
            message: Optional override for the catalog message
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        self.message = message or get_error(error_code)["message"]
        super().__init__(self.message)


class ValidationError(StatementProcessingError):
    """Raised when converter output or a parsed statement is unusable.

    This includes:
    - Missing or malformed ``normalised`` list (PARSE_001)
    - No convertible transactions (PARSE_002)
    - Statements failing the consistency checks (VAL_001)
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None, message: str | None = None):
        super().__init__(error_code, details=details, http_status=422, message=message)


class ComparisonError(StatementProcessingError):
    """Raised when the comparison preconditions are not met (CMP_001)."""

    def __init__(self, error_code: str, details: dict[str, Any] | None = None, message: str | None = None):
        super().__init__(error_code, details=details, http_status=400, message=message)


class CategoryError(StatementProcessingError):
    """Raised for invalid custom category names or unknown categories."""

    def __init__(self, error_code: str, details: dict[str, Any] | None = None, message: str | None = None):
        super().__init__(error_code, details=details, http_status=400, message=message)
