"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderItems) is persisted atomically.

Status updates lock the row with ``select_for_update()``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

from modules.orders.exceptions import OrderAlreadyExists
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` keys: ``order_number``, ``order_date``, ``customer_name``,
        ``customer_number``, ``customer_address``, ``customer_state``,
        ``total_rate``, ``status`` (optional) and ``items``.
        """
        fields = {key: value for key, value in data.items() if key != "items"}
        items = data.get("items", [])

        try:
            with transaction.atomic():
                order = Order.objects.create(**fields)
                for position, item_data in enumerate(items):
                    OrderItem(order=order, position=position, **item_data).save()
        except IntegrityError as exc:
            if Order.objects.filter(order_number=fields.get("order_number")).exists():
                raise OrderAlreadyExists(
                    f"Order number {fields.get('order_number')} already exists."
                ) from exc
            raise

        logger.info("order.persisted", order_id=str(order.id), item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def update(self, id: str, data: Dict[str, Any]) -> Optional[Order]:
        """Update order fields using ``select_for_update`` for safety."""
        try:
            order = Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        if not order:
            return None

        for field, value in data.items():
            setattr(order, field, value)
        order.save(update_fields=list(data))

        logger.info("order.fields_updated", order_id=str(id), fields=sorted(data))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its items prefetched.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.prefetch_related("items").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        return (
            Order.objects.prefetch_related("items")
            .filter(order_number=order_number)
            .first()
        )

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders with optional filters and prefetched items.

        Examples of valid filters::

            {"status": "pending"}
            {"customer_state__iexact": "Tamil Nadu"}
        """
        queryset = Order.objects.prefetch_related("items")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete an order and, by cascade, its items.

        Returns ``True`` if the order was deleted, ``False`` otherwise.
        """
        try:
            deleted = Order.objects.filter(id=id).delete()[1].get("orders.Order", 0)
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("order.deleted", order_id=str(id))
        return deleted > 0
