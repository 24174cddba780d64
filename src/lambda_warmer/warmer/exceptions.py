"""
Warmer Exceptions

Custom exceptions for the warm-up protocol.
"""

from typing import List, Optional

from .interface import InvocationType


class WarmerError(Exception):
    """Base exception for warmer errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DecodeError(WarmerError):
    """Raised when a payload is malformed or does not match the expected type"""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class InvocationError(WarmerError):
    """Raised when a fan-out re-invocation is rejected or fails"""

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        invocation_type: Optional[InvocationType] = None,
        invocation_number: Optional[int] = None,
        status_code: Optional[int] = None,
        function_error: Optional[str] = None,
    ):
        self.function_name = function_name
        self.invocation_type = invocation_type
        self.invocation_number = invocation_number
        self.status_code = status_code
        self.function_error = function_error
        super().__init__(message)


class FanOutError(WarmerError):
    """Raised when more than one fan-out leg failed"""

    def __init__(self, errors: List[BaseException]):
        self.errors = errors
        summary = "; ".join(f"{type(e).__name__}: {e}" for e in errors)
        super().__init__(f"{len(errors)} fan-out legs failed: {summary}")
