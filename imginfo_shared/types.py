"""
Shared types, enums, and constants.
"""
from enum import Enum


# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_JSON = "INVALID_JSON"
    NOT_FOUND = "NOT_FOUND"

    # Analysis
    FETCH_FAILED = "FETCH_FAILED"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
