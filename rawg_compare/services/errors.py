"""Error types and error handling for the RAWG comparison client.

Lookups fail in two recoverable ways, a network failure or an undecodable
response. A missing API key is the only fatal condition. Raw httpx
exceptions are turned into these types by ``ErrorHandlingService``, which
also logs what went wrong without ever echoing request query strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """What kind of failure an AppError describes."""
    NETWORK = "network"
    DECODE = "decode"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """How loudly an error is logged."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class UserFriendlyError:
    """What the console shows for a failure."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


def describe_http_error(error: Exception) -> str:
    """Describe an httpx error without the request's query string.

    httpx includes the full URL in its messages, and the URL carries the
    API key as ``?key=...``.
    """
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return f"HTTPStatusError: {response.status_code} {response.reason_phrase}".rstrip()
    text = str(error).split("?", 1)[0].strip()
    return f"{type(error).__name__}: {text}" if text else type(error).__name__


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable

    def to_user_friendly(self) -> UserFriendlyError:
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class NetworkError(AppError):
    """The games endpoint could not be reached or answered with an error status."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        if status_code in (401, 403):
            suggested_actions = ["Check that RAWG_API_KEY holds a valid key"]
        elif status_code == 429:
            suggested_actions = ["Your API key may have used up its request quota, wait before retrying"]
        elif status_code is not None and status_code >= 500:
            suggested_actions = ["The RAWG API is having trouble, try again later"]
        else:
            suggested_actions = ["Check your internet connection"]

        details = []
        if status_code:
            details.append(f"Status: {status_code}")
        if url:
            details.append(f"URL: {url}")
        if original_error:
            details.append(describe_http_error(original_error))

        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details="\n".join(details) or None,
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code


class DecodeError(AppError):
    """The response body was not a games listing we understand."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        details = []
        if field:
            details.append(f"Field: {field}")
        if original_error:
            details.append(f"{type(original_error).__name__}: {original_error}")

        super().__init__(
            message=message,
            category=ErrorCategory.DECODE,
            severity=ErrorSeverity.WARNING,
            suggested_actions=["Try a different search, the API response format may have changed"],
            technical_details="\n".join(details) or None,
            recoverable=True,
        )
        self.field = field
        self.original_error = original_error


class ConfigurationError(AppError):
    """A required setting is missing."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        expected: str | None = None,
    ) -> None:
        suggested_actions = [
            f"Set {setting} in the environment or in a .env file" if setting else "Check the configuration settings",
        ]
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            suggested_actions=suggested_actions,
            technical_details=f"Setting: {setting}" if setting else None,
            recoverable=False,
        )
        self.setting = setting
        self.expected = expected


_STATUS_MESSAGES = {
    401: "Authentication failed. Please check your API key.",
    403: "Access denied. Please check your API key.",
    404: "The games endpoint was not found. Check RAWG_API_URL.",
    429: "Too many requests. Please wait before trying again.",
}


class ErrorHandlingService:
    """Converts exceptions into AppErrors and logs their technical details."""

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Log an error and return what the user should be shown.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self.convert_error(error, context)
        self._log_error(app_error, operation, component, context)
        return app_error.to_user_friendly()

    def convert_error(
        self,
        error: Exception,
        context: dict[str, Any] | None = None,
    ) -> AppError:
        """Convert an httpx exception to a NetworkError; AppErrors pass through."""
        if isinstance(error, AppError):
            return error

        url = context.get("url") if context else None

        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            if status_code >= 500:
                message = "The RAWG API reported a server error."
            else:
                message = _STATUS_MESSAGES.get(status_code, f"HTTP error {status_code} occurred.")
            return NetworkError(message, original_error=error, url=url, status_code=status_code)
        elif isinstance(error, httpx.TimeoutException):
            return NetworkError("The request timed out.", original_error=error, url=url)
        elif isinstance(error, httpx.HTTPError):
            return NetworkError("Unable to reach the RAWG API.", original_error=error, url=url)

        return AppError(
            message="An unexpected error occurred. Please try again.",
            technical_details=f"{type(error).__name__}: {error}",
        )

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        log_method = log.warning if error.severity == ErrorSeverity.WARNING else log.error

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Handle an error with the global service."""
    return get_error_service().handle_error(error, operation, component, context)
