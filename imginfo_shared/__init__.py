"""Shared utilities for the image info analyzer."""
from .errors import sanitize_error_message
from .log import get_logger, log_structured, log_success, request_id_var
from .result import Result
from .time import now, timer
from .types import ErrorCode

__all__ = [
    "Result",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "now",
    "timer",
    "ErrorCode",
    "sanitize_error_message",
]
