"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import OrderStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    ``amount`` is optional; when omitted the stored item computes
    ``quantity * rate``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    tamil_name: str = Field(default="", max_length=255)
    quantity: int
    rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    amount: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    category: str = Field(default="", max_length=100)

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump()


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - ``status`` (optional) must be one of ``OrderStatus``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    order_number: str = Field(min_length=1, max_length=50)
    order_date: str = Field(min_length=1, max_length=50)
    customer_name: str = Field(min_length=1, max_length=255)
    customer_number: str = Field(min_length=1, max_length=30)
    customer_address: str = Field(min_length=1)
    customer_state: str = Field(min_length=1, max_length=100)
    total_rate: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    status: str = OrderStatus.PENDING.value
    items: List[CreateOrderItemDTO]

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: str) -> str:
        if v not in OrderStatus.values:
            raise ValueError("Invalid status value")
        return v

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    def to_record(self) -> Dict[str, Any]:
        """Field -> value mapping accepted by ``IOrderRepository.create``."""
        data = self.model_dump(exclude={"items"})
        data["items"] = [item.to_record() for item in self.items]
        return data
