"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All service-level errors inherit from this class so both transports can
    map them to a status code in one place.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (surfaced as the GraphQL error code).
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=404,
            detail="Habit not found",
            type="habit-not-found",
            extra={"habit_id": "h1"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            401: "Unauthorized",
            403: "Forbidden",
            404: "Not Found",
            405: "Method Not Allowed",
            409: "Conflict",
            500: "Internal Server Error",
            501: "Not Implemented",
        }
        return titles.get(status_code, "Error")


class InvalidInputException(AppException):
    """Exception raised for missing or malformed request fields.

    Example:
            raise InvalidInputException(
            detail="habitId is required",
            extra={"field": "habitId"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-input",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Invalid Input",
            extra=extra,
        )


class UnauthorizedException(AppException):
    """Exception raised when no valid identity accompanies the request.

    Example:
            raise UnauthorizedException(
            detail="Invalid or expired token",
            extra={"auth_method": "bearer"},
        )
    """

    def __init__(
        self,
        detail: str = "Authentication required",
        type: str = "unauthenticated",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=401,
            detail=detail,
            type=type,
            title="Unauthorized",
            extra=extra,
        )


class ForbiddenException(AppException):
    """Exception raised for authorization failures.

    Example:
            raise ForbiddenException(
            detail="Access denied",
            extra={"target_owner_id": "u2"},
        )
    """

    def __init__(
        self,
        detail: str = "Access denied",
        type: str = "forbidden",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=403,
            detail=detail,
            type=type,
            title="Forbidden",
            extra=extra,
        )


class NotFoundException(AppException):
    """Exception raised when a referenced entity does not exist.

    Example:
            raise NotFoundException(
            detail="Habit not found",
            type="habit-not-found",
            extra={"habit_id": "h1"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            extra=extra,
        )


class ConflictException(AppException):
    """Exception raised when a create would duplicate an existing entity.

    Example:
            raise ConflictException(
            detail="User document already exists",
            extra={"user_id": "u1"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "conflict",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=409,
            detail=detail,
            type=type,
            title="Conflict",
            extra=extra,
        )


class InternalServerException(AppException):
    """Exception raised for unexpected failures such as corrupt stored data."""

    def __init__(
        self,
        detail: str = "Internal server error",
        type: str = "internal-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=500,
            detail=detail,
            type=type,
            title="Internal Server Error",
            extra=extra,
        )


class NotImplementedException(AppException):
    """Exception raised by operations declared in the API but not served."""

    def __init__(
        self,
        detail: str,
        type: str = "not-implemented",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=501,
            detail=detail,
            type=type,
            title="Not Implemented",
            extra=extra,
        )


__all__ = [
    "AppException",
    "ConflictException",
    "ForbiddenException",
    "InternalServerException",
    "InvalidInputException",
    "NotFoundException",
    "NotImplementedException",
    "UnauthorizedException",
]
