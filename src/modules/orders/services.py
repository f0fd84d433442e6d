"""Order service layer (Use Cases).

Orders are plain records: created whole with their items, moved between
``pending`` and ``dispatched``, and deleted.  There is no asset store
involvement and no compensation logic here.

Business rules enforced:
- ``order_number`` is unique; a duplicate raises ``OrderAlreadyExists``.
- Status values outside ``OrderStatus`` are rejected before any write, so
  the stored status is unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import (
    InvalidOrderStatus,
    OrderAlreadyExists,
    OrderNotFound,
)

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives the repository via constructor injection (DIP).
    """

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order with its items.

        Raises:
            OrderAlreadyExists: the order number is already taken.
        """
        log = logger.bind(order_number=dto.order_number)

        if self._order_repo.get_by_order_number(dto.order_number):
            log.warning("order.duplicate_number")
            raise OrderAlreadyExists(
                f"Order number {dto.order_number} already exists."
            )

        order = self._order_repo.create(dto.to_record())
        log.info(
            "order.created",
            order_id=str(order.id),
            item_count=len(dto.items),
            total_rate=str(dto.total_rate),
        )
        return order

    def update_status(self, order_id: str, new_status: Any) -> Order:
        """Set the dispatch status.

        Raises:
            InvalidOrderStatus: ``new_status`` is not a known status.
            OrderNotFound: the order does not exist.
        """
        if new_status not in OrderStatus.values:
            logger.warning(
                "order.invalid_status", order_id=str(order_id), status=new_status
            )
            raise InvalidOrderStatus("Invalid status value")

        order = self._order_repo.update(order_id, {"status": new_status})
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        logger.info("order.status_changed", order_id=str(order_id), status=new_status)
        return order

    def delete_order(self, order_id: str) -> None:
        """Hard-delete an order and its items.

        Raises:
            OrderNotFound: the order does not exist.
        """
        if not self._order_repo.delete(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")
        logger.info("order.removed", order_id=str(order_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None):
        """Return a lazy queryset of orders, optionally filtered."""
        return self._order_repo.list(filters)
