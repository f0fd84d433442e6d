"""Order and OrderItem models.

Business rules implemented:
- ``order_number`` is supplied by the client and unique (UNIQUE index).
- ``status`` is restricted to ``OrderStatus`` (choices + check constraint).
- Items are a denormalized snapshot taken at order time; they carry no
  reference back to the catalog and are deleted with their order.
- ``OrderItem.amount`` defaults to ``quantity * rate`` when not supplied.
- Orders are hard-deleted.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import ORDER_NUMBER_MAX_LENGTH, OrderStatus

logger = structlog.get_logger(__name__)


class Order(BaseModel):
    """Order aggregate root.

    ``order_number`` is the human-readable identifier printed on the
    invoice; the UUIDv7 ``id`` is used for API look-ups.  ``order_date`` is
    stored exactly as the storefront sends it.
    """

    order_number: models.CharField = models.CharField(
        max_length=ORDER_NUMBER_MAX_LENGTH, unique=True
    )
    order_date: models.CharField = models.CharField(max_length=50)
    customer_name: models.CharField = models.CharField(max_length=255)
    customer_number: models.CharField = models.CharField(max_length=30)
    customer_address: models.TextField = models.TextField()
    customer_state: models.CharField = models.CharField(max_length=100)
    total_rate: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=OrderStatus.values),
                name="orders_status_valid",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"


class OrderItem(BaseModel):
    """Line item of an order.

    ``name``, ``tamil_name``, ``rate`` and ``category`` are copied from the
    catalog when the order is placed and never change afterwards.
    ``position`` keeps the items in the order the client sent them.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    name: models.CharField = models.CharField(max_length=255)
    tamil_name: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    rate: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
    )
    category: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )

    class Meta:
        db_table = "order_items"
        ordering = ["position", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.amount is None:
            self.amount = self.quantity * self.rate
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} ({self.amount})"
