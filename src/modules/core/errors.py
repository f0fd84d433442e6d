"""Error body formatting for the HTTP API.

Every error response carries ``{"error": <summary>}`` plus an optional
``"details"`` entry, matching what storefront clients already parse.
Views translate domain exceptions themselves; ``api_exception_handler``
covers what reaches DRF (parse errors, serializer validation, 405s) and
anything unexpected, which becomes a 500 with the exception message.
"""

from __future__ import annotations

from typing import Any, Dict, List

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def format_validation_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    """Flatten a pydantic error into ``[{"field": ..., "message": ...}]``."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": first_error_message_of(error),
        }
        for error in exc.errors(include_url=False)
    ]


def first_error_message(exc: PydanticValidationError) -> str:
    errors = exc.errors(include_url=False)
    return first_error_message_of(errors[0]) if errors else str(exc)


def first_error_message_of(error: Dict[str, Any]) -> str:
    # Messages from ValueError validators carry a "Value error, " prefix.
    ctx_error = error.get("ctx", {}).get("error")
    return str(ctx_error) if ctx_error is not None else error["msg"]


def validation_error_response(exc: PydanticValidationError) -> Response:
    return Response(
        {"error": "Validation failed", "details": format_validation_errors(exc)},
        status=status.HTTP_400_BAD_REQUEST,
    )


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER`` producing ``{error, details}`` bodies."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            "api.unhandled_error",
            view=type(view).__name__ if view else None,
            error=str(exc),
            exc_info=exc,
        )
        return Response(
            {"error": "Internal Server Error", "details": str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {"error": "Validation failed", "details": response.data}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}
    else:
        response.data = {"error": "Request failed", "details": response.data}
    return response
