"""View decorators shared by the API modules."""

from __future__ import annotations

import functools
from typing import Any, Callable
from uuid import UUID

import structlog
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

logger = structlog.get_logger(__name__)


def validate_id(view_method: Callable[..., Response]) -> Callable[..., Response]:
    """Reject malformed ``pk`` URL segments with 400 before any store access.

    Wraps detail actions of a ViewSet (``retrieve``, ``update``,
    ``destroy`` and ``@action(detail=True)`` methods).
    """

    @functools.wraps(view_method)
    def wrapper(
        self, request: Request, pk: str | None = None, *args: Any, **kwargs: Any
    ) -> Response:
        try:
            UUID(str(pk))
        except ValueError:
            logger.info("request.invalid_id", pk=pk, path=request.path)
            return Response(
                {"error": "Invalid id format"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return view_method(self, request, pk, *args, **kwargs)

    return wrapper
