"""
Assistant exceptions.

Field-level validation failures are not exceptions: extractors return None and
the dialogue re-prompts for the same field.
"""
from typing import Optional, Dict, Any


class AssistantError(Exception):
    """Base exception for the meeting assistant"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)


class UnauthorizedError(AssistantError):
    """Raised when the user has no stored calendar credential"""

    def __init__(self, user_id: str):
        super().__init__(
            f"User {user_id} has not authorized calendar access",
            details={"user_id": user_id},
        )
        self.user_id = user_id


class CalendarProviderError(AssistantError):
    """Raised by a calendar provider when the remote call fails"""
    pass


class ExecutorFailure(AssistantError):
    """Raised when creating a calendar event failed"""
    pass


def wrap_provider_exception(
    exc: Exception,
    operation: str,
    details: Optional[Dict[str, Any]] = None
) -> CalendarProviderError:
    """
    Wrap a client library exception into a CalendarProviderError with context.

    Args:
        exc: The original exception to wrap
        operation: The provider operation that failed
        details: Optional additional details

    Returns:
        CalendarProviderError carrying the original error
    """
    error_details = dict(details or {})
    error_details.update({
        "operation": operation,
        "original_error": str(exc),
        "error_type": type(exc).__name__,
    })
    return CalendarProviderError(
        message=f"Calendar operation '{operation}' failed: {exc}",
        details=error_details,
        cause=exc,
    )
