"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.

Field names on the wire are camelCase (``orderNumber``, ``totalRate`` ...);
``source=`` maps them onto the snake_case model and DTO fields.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import ORDER_NUMBER_MAX_LENGTH
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    name = serializers.CharField(max_length=255)
    tamilName = serializers.CharField(
        source="tamil_name", required=False, allow_blank=True, default=""
    )
    quantity = serializers.IntegerField(min_value=1)
    rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0
    )
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    category = serializers.CharField(required=False, allow_blank=True, default="")


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    orderNumber = serializers.CharField(
        source="order_number", max_length=ORDER_NUMBER_MAX_LENGTH
    )
    orderDate = serializers.CharField(source="order_date", max_length=50)
    customerName = serializers.CharField(source="customer_name", max_length=255)
    customerNumber = serializers.CharField(source="customer_number", max_length=30)
    customerAddress = serializers.CharField(source="customer_address")
    customerState = serializers.CharField(source="customer_state", max_length=100)
    totalRate = serializers.DecimalField(
        source="total_rate", max_digits=12, decimal_places=2, min_value=0
    )
    status = serializers.CharField(required=False)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items."""

    tamilName = serializers.CharField(source="tamil_name", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "name",
            "tamilName",
            "quantity",
            "rate",
            "amount",
            "category",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    orderDate = serializers.CharField(source="order_date", read_only=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    customerNumber = serializers.CharField(source="customer_number", read_only=True)
    customerAddress = serializers.CharField(source="customer_address", read_only=True)
    customerState = serializers.CharField(source="customer_state", read_only=True)
    totalRate = serializers.DecimalField(
        source="total_rate", max_digits=12, decimal_places=2, read_only=True
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "orderDate",
            "customerName",
            "customerNumber",
            "customerAddress",
            "customerState",
            "totalRate",
            "status",
            "items",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
