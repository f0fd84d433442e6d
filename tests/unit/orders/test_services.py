"""Unit tests for OrderService.

Covers:
- create_order: happy path, duplicate order number.
- update_status: valid values, invalid values leave the order untouched,
  not found.
- get_order / delete_order: not found.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO
from modules.orders.exceptions import (
    InvalidOrderStatus,
    OrderAlreadyExists,
    OrderNotFound,
)
from modules.orders.models import Order
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return OrderService(order_repository=mock_repo)


def _dto(**overrides) -> CreateOrderDTO:
    data = {
        "order_number": "ORD-1001",
        "order_date": "19/10/2026",
        "customer_name": "Karthik R",
        "customer_number": "9876543210",
        "customer_address": "12 Gandhi Road, Sivakasi",
        "customer_state": "Tamil Nadu",
        "total_rate": "192.00",
        "items": [
            {"name": "Flower Pots Big", "quantity": 2, "rate": "96.00"},
        ],
    }
    data.update(overrides)
    return CreateOrderDTO.model_validate(data)


class TestCreateOrder:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_order_number.return_value = None
        mock_repo.create.return_value = Order(order_number="ORD-1001")

        order = service.create_order(_dto())

        assert order.order_number == "ORD-1001"
        record = mock_repo.create.call_args.args[0]
        assert record["order_number"] == "ORD-1001"
        assert record["status"] == OrderStatus.PENDING
        assert record["total_rate"] == Decimal("192.00")
        assert record["items"] == [
            {
                "name": "Flower Pots Big",
                "tamil_name": "",
                "quantity": 2,
                "rate": Decimal("96.00"),
                "amount": None,
                "category": "",
            }
        ]

    def test_duplicate_order_number(self, service, mock_repo):
        mock_repo.get_by_order_number.return_value = Order(order_number="ORD-1001")

        with pytest.raises(OrderAlreadyExists):
            service.create_order(_dto())

        mock_repo.create.assert_not_called()


class TestUpdateStatus:
    @pytest.mark.parametrize("status", ["pending", "dispatched"])
    def test_valid(self, service, mock_repo, status):
        mock_repo.update.return_value = Order(status=status)

        order = service.update_status("some-id", status)

        assert order.status == status
        mock_repo.update.assert_called_once_with("some-id", {"status": status})

    @pytest.mark.parametrize(
        "status", ["shipped", "DISPATCHED", "", None, 1, ["pending"]]
    )
    def test_invalid_leaves_order_untouched(self, service, mock_repo, status):
        with pytest.raises(InvalidOrderStatus, match="Invalid status value"):
            service.update_status("some-id", status)

        mock_repo.update.assert_not_called()

    def test_not_found(self, service, mock_repo):
        mock_repo.update.return_value = None
        with pytest.raises(OrderNotFound):
            service.update_status("missing", "dispatched")


class TestQueriesAndDelete:
    def test_get_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(OrderNotFound):
            service.get_order("missing")

    def test_delete(self, service, mock_repo):
        mock_repo.delete.return_value = True
        service.delete_order("some-id")
        mock_repo.delete.assert_called_once_with("some-id")

    def test_delete_not_found(self, service, mock_repo):
        mock_repo.delete.return_value = False
        with pytest.raises(OrderNotFound):
            service.delete_order("missing")

    def test_list_passes_filters(self, service, mock_repo):
        service.list_orders({"status": "pending"})
        mock_repo.list.assert_called_once_with({"status": "pending"})
