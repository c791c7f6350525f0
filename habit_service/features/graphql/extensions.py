"""Schema extensions for error reporting.

- ``AppErrorExtension`` tags every error with ``extensions.code``, logs it,
  and answers HTTP 400 whenever the response carries errors.
- ``ProductionMaskErrors`` hides messages of unexpected exceptions in
  production; application errors keep their message.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from strawberry.extensions import MaskErrors, SchemaExtension

from habit_service.core.exceptions import AppException, InternalServerException
from habit_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

ERROR_CODES: dict[int, str] = {
    400: "BAD_USER_INPUT",
    401: "UNAUTHENTICATED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    500: "INTERNAL_SERVER_ERROR",
    501: "NOT_IMPLEMENTED",
}


def error_code(exc: AppException) -> str:
    return ERROR_CODES.get(exc.status_code, "INTERNAL_SERVER_ERROR")


def collect_errors(execution_context: ExecutionContext) -> list[GraphQLError]:
    """Errors of the finished operation, from execution or from parsing and validation."""
    result = execution_context.result
    if result is not None and result.errors:
        return list(result.errors)
    pre_execution = getattr(execution_context, "pre_execution_errors", None)
    if pre_execution:
        return list(pre_execution)
    return list(getattr(execution_context, "errors", None) or [])


def should_mask_error(error: GraphQLError) -> bool:
    """Mask unexpected exceptions and internal errors, only in production."""
    if not get_app_settings().is_production:
        return False
    original = error.original_error
    if original is None:
        return False
    return not isinstance(original, AppException) or isinstance(original, InternalServerException)


class ProductionMaskErrors(MaskErrors):
    def __init__(self) -> None:
        super().__init__(should_mask_error=should_mask_error, error_message=INTERNAL_ERROR_MESSAGE)

    def anonymise_error(self, error: GraphQLError) -> GraphQLError:
        masked = super().anonymise_error(error)
        masked.extensions = {**(masked.extensions or {}), "code": ERROR_CODES[500]}
        return masked


class AppErrorExtension(SchemaExtension):
    """Error codes, error logging and the 400 status for failed operations."""

    def on_operation(self) -> Iterator[None]:
        yield
        errors = collect_errors(self.execution_context)
        if not errors:
            return

        operation = self.execution_context.operation_name
        for error in errors:
            original = error.original_error
            extensions = dict(error.extensions or {})
            if isinstance(original, AppException):
                extensions.setdefault("code", error_code(original))
                log = logger.error if original.status_code >= 500 else logger.info
                log(
                    "GraphQL operation failed",
                    extra={"operation": operation, "path": error.path, "code": extensions["code"], "detail": original.detail},
                )
            elif original is not None:
                extensions.setdefault("code", ERROR_CODES[500])
                logger.error(
                    "Unexpected error in GraphQL resolver",
                    extra={"operation": operation, "path": error.path},
                    exc_info=original,
                )
            else:
                extensions.setdefault("code", "GRAPHQL_VALIDATION_FAILED")
            error.extensions = extensions

        response = getattr(self.execution_context.context, "response", None)
        if response is not None:
            response.status_code = 400


def get_extensions() -> list:
    """Extensions installed on the schema."""
    return [AppErrorExtension, ProductionMaskErrors]


__all__ = [
    "AppErrorExtension",
    "ERROR_CODES",
    "ProductionMaskErrors",
    "get_extensions",
    "should_mask_error",
]
