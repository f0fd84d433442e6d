"""Page/limit pagination for list endpoints.

Responses use the ``{items, page, limit, total, pages}`` envelope:

- ``page`` is at least 1; non-numeric values fall back to 1.
- ``limit`` is clamped to ``[1, max_limit]``; non-numeric values fall back
  to ``default_limit``.
- ``pages == ceil(total / limit)``; a page past the end yields no items
  instead of a 404.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Tuple

from rest_framework.pagination import BasePagination
from rest_framework.request import Request
from rest_framework.response import Response


def _parse_int(raw: Any, fallback: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return fallback


def clamp_page_params(
    raw_page: Any,
    raw_limit: Any,
    default_limit: int,
    max_limit: int,
) -> Tuple[int, int]:
    """Return a safe ``(page, limit)`` pair from raw query values."""
    page = max(1, _parse_int(raw_page, 1))
    limit = min(max_limit, max(1, _parse_int(raw_limit, default_limit)))
    return page, limit


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit)


class PageLimitPagination(BasePagination):
    """Offset pagination driven by ``?page=`` and ``?limit=``.

    Subclasses set ``default_limit`` / ``max_limit`` per resource.
    """

    page_query_param = "page"
    limit_query_param = "limit"
    default_limit = 100
    max_limit = 500

    def __init__(self) -> None:
        self.page = 1
        self.limit = self.default_limit
        self.total = 0

    def paginate_queryset(
        self, queryset, request: Request, view: Optional[Any] = None
    ) -> List[Any]:
        self.page, self.limit = clamp_page_params(
            request.query_params.get(self.page_query_param),
            request.query_params.get(self.limit_query_param),
            self.default_limit,
            self.max_limit,
        )
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        if offset >= self.total:
            # Past the last page: no query, whatever the offset.
            return []
        return list(queryset[offset : offset + self.limit])

    def get_paginated_response(self, data: List[Any]) -> Response:
        return Response(
            {
                "items": data,
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "pages": page_count(self.total, self.limit),
            }
        )

    def get_paginated_response_schema(self, schema: dict) -> dict:
        return {
            "type": "object",
            "required": ["items", "page", "limit", "total", "pages"],
            "properties": {
                "items": schema,
                "page": {"type": "integer", "example": 1},
                "limit": {"type": "integer", "example": self.default_limit},
                "total": {"type": "integer", "example": 123},
                "pages": {"type": "integer", "example": 2},
            },
        }

    def get_schema_operation_parameters(self, view) -> list:
        return [
            {
                "name": self.page_query_param,
                "required": False,
                "in": "query",
                "schema": {"type": "integer", "minimum": 1},
            },
            {
                "name": self.limit_query_param,
                "required": False,
                "in": "query",
                "schema": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": self.max_limit,
                },
            },
        ]
