"""Error codes and user-friendly messages.

This module defines the error catalog for statement conversion and
comparison. Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "PARSE_001": {
        "code": "PARSE_001",
        "message": "Invalid API response: missing or malformed normalised transactions",
        "user_message": "We couldn't read the converted statement.",
        "suggestion": "Please ensure the PDF is not password protected and contains readable text.",
        "retry_allowed": True,
    },
    "PARSE_002": {
        "code": "PARSE_002",
        "message": "No valid transactions found in statement",
        "user_message": "We couldn't find any transactions in this statement.",
        "suggestion": "The PDF may be corrupted or in an unsupported format.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Parsed statement data failed validation",
        "user_message": "The statement data appears to be incomplete or invalid.",
        "suggestion": "Please ensure you are uploading valid PDF bank statements.",
        "retry_allowed": False,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "Request body failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "CMP_001": {
        "code": "CMP_001",
        "message": "Comparison preconditions not met",
        "user_message": "We couldn't compare these statements.",
        "suggestion": "Please try again with different files.",
        "retry_allowed": False,
    },
    "API_001": {
        "code": "API_001",
        "message": "Invalid custom category name",
        "user_message": "That category name can't be used.",
        "suggestion": "Choose a non-empty name that isn't already a built-in category.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "Invalid category",
        "user_message": "That category isn't supported.",
        "suggestion": "Please choose a built-in category or one of your custom categories.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
