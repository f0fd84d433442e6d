"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes — the view never swallows generic exceptions.
"""

from __future__ import annotations

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.decorators import validate_id
from modules.core.errors import validation_error_response
from modules.core.pagination import PageLimitPagination
from modules.orders.dtos import CreateOrderDTO
from modules.orders.exceptions import (
    InvalidOrderStatus,
    OrderAlreadyExists,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import CreateOrderSerializer, OrderSerializer
from modules.orders.services import OrderService

NOT_FOUND = {"error": "Not found"}


class OrderPagination(PageLimitPagination):
    default_limit = settings.ORDER_PAGE_SIZE
    max_limit = settings.ORDER_MAX_PAGE_SIZE


class OrderViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with an injected repository (DIP).
    Does **not** extend ``ModelViewSet`` — all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]
    pagination_class = OrderPagination
    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(order_repository=OrderDjangoRepository())

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/orders"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        try:
            dto = CreateOrderDTO.model_validate(create_serializer.validated_data)
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        try:
            order = self._service.create_order(dto)
        except OrderAlreadyExists as exc:
            return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)

        out = OrderSerializer(self._service.get_order(str(order.id)))
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        """List filtering (status) and ``sort`` are handled by ``OrderFilter``."""
        return self._service.list_orders()

    @validate_id
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/orders/{pk}"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    @validate_id
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/orders/{pk}/status

        Body: ``{"status": "pending" | "dispatched"}``.
        """
        body = request.data if isinstance(request.data, dict) else {}
        try:
            order = self._service.update_status(pk, body.get("status"))
        except InvalidOrderStatus as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except OrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @validate_id
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/orders/{pk}"""
        try:
            self._service.delete_order(pk)
        except OrderNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response({"message": "Order deleted successfully"})
