"""Unit tests for OrderService with mocked repositories."""

from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.utils import timezone

from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.events import (
    OrderCreated,
    OrderDeleted,
    OrderStatusChanged,
    OrderUpdated,
)
from modules.orders.exceptions import (
    CustomerNotFound,
    InvalidAdvanceAmount,
    OrderNotFound,
)
from modules.orders.models import Order
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit

ACTOR = "florist@bloomora.test"


@pytest.fixture()
def order_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda o: o
    return repo


@pytest.fixture()
def customer_repo():
    repo = MagicMock()
    repo.get_by_id.return_value = MagicMock(full_name="Eleanor Vance")
    return repo


@pytest.fixture()
def service(order_repo, customer_repo):
    return OrderService(order_repository=order_repo, customer_repository=customer_repo)


def _create_dto(**overrides) -> CreateOrderDTO:
    data = {
        "customer_id": uuid.uuid4(),
        "delivery_date": timezone.now() + timedelta(days=1),
        "products": "Sunflower arrangement",
        "total_value": Decimal("95.00"),
    }
    data.update(overrides)
    return CreateOrderDTO(**data)


def _existing(**overrides) -> Order:
    data = {
        "display_id": "PT-000042",
        "customer_id": uuid.uuid4(),
        "delivery_date": timezone.now() + timedelta(days=1),
        "products": "Small rose bouquet",
        "total_value": Decimal("100.00"),
        "status": OrderStatus.ADVANCE_TAKEN,
        "advance_amount": Decimal("40.00"),
        "special_instructions": "Ring twice",
    }
    data.update(overrides)
    return Order(**data)


class TestCreateOrder:
    def test_success(self, service, order_repo):
        order = service.create_order(_create_dto(), actor=ACTOR)

        order_repo.save.assert_called_once_with(order)
        assert order.status == OrderStatus.COD
        assert order.advance_amount is None
        assert order.created_by == ACTOR
        event = order.domain_events[0]
        assert isinstance(event, OrderCreated)
        assert event.aggregate_id == order.id

    def test_advance_taken_keeps_advance(self, service):
        dto = _create_dto(status=OrderStatus.ADVANCE_TAKEN, advance_amount=Decimal("50"))
        order = service.create_order(dto)
        assert order.advance_amount == Decimal("50")
        assert order.balance_due == Decimal("45.00")

    def test_unknown_customer(self, service, customer_repo, order_repo):
        customer_repo.get_by_id.return_value = None
        with pytest.raises(CustomerNotFound):
            service.create_order(_create_dto())
        order_repo.save.assert_not_called()


class TestUpdateOrder:
    def test_status_change_records_both_events(self, service, order_repo):
        existing = _existing()
        order_repo.get_by_id.return_value = existing

        order = service.update_order(
            str(existing.id), UpdateOrderDTO(status="Delivered"), actor=ACTOR
        )

        assert order.status == OrderStatus.DELIVERED
        assert order.advance_amount is None
        assert order.updated_by == ACTOR
        events = order.domain_events
        assert [type(e) for e in events] == [OrderUpdated, OrderStatusChanged]
        assert events[1].old_status == OrderStatus.ADVANCE_TAKEN
        assert events[1].new_status == OrderStatus.DELIVERED

    def test_any_transition_is_allowed(self, service, order_repo):
        existing = _existing(status=OrderStatus.DELIVERED, advance_amount=None)
        order_repo.get_by_id.return_value = existing

        order = service.update_order(str(existing.id), UpdateOrderDTO(status="COD"))

        assert order.status == OrderStatus.COD

    def test_same_status_only_records_update(self, service, order_repo):
        existing = _existing()
        order_repo.get_by_id.return_value = existing

        order = service.update_order(
            str(existing.id), UpdateOrderDTO(products="Large peony bouquet")
        )

        assert order.products == "Large peony bouquet"
        assert order.advance_amount == Decimal("40.00")
        assert [type(e) for e in order.domain_events] == [OrderUpdated]

    def test_advance_checked_against_stored_status(self, service, order_repo):
        existing = _existing(status=OrderStatus.COD, advance_amount=None)
        order_repo.get_by_id.return_value = existing

        with pytest.raises(InvalidAdvanceAmount):
            service.update_order(str(existing.id), UpdateOrderDTO(status="Advance Taken"))
        order_repo.save.assert_not_called()

    def test_clearing_advance_under_advance_taken_rejected(self, service, order_repo):
        existing = _existing()
        order_repo.get_by_id.return_value = existing

        with pytest.raises(InvalidAdvanceAmount):
            service.update_order(str(existing.id), UpdateOrderDTO(advance_amount=None))

    def test_empty_instructions_clear_them(self, service, order_repo):
        existing = _existing()
        order_repo.get_by_id.return_value = existing

        order = service.update_order(
            str(existing.id), UpdateOrderDTO(special_instructions=None)
        )

        assert order.special_instructions == ""

    def test_new_customer_must_exist(self, service, order_repo, customer_repo):
        existing = _existing()
        order_repo.get_by_id.return_value = existing
        customer_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.update_order(str(existing.id), UpdateOrderDTO(customer_id=uuid.uuid4()))

    def test_not_found(self, service, order_repo):
        order_repo.get_by_id.return_value = None
        with pytest.raises(OrderNotFound):
            service.update_order("missing", UpdateOrderDTO(status="COD"))


class TestDeleteAndQueries:
    def test_delete(self, service, order_repo):
        existing = _existing()
        order_repo.get_by_id.return_value = existing

        service.delete_order(str(existing.id), actor=ACTOR)

        order_repo.delete.assert_called_once_with(existing)
        assert isinstance(existing.domain_events[-1], OrderDeleted)

    def test_delete_not_found(self, service, order_repo):
        order_repo.get_by_id.return_value = None
        with pytest.raises(OrderNotFound):
            service.delete_order("missing")

    def test_get_not_found(self, service, order_repo):
        order_repo.get_by_id.return_value = None
        with pytest.raises(OrderNotFound):
            service.get_order("missing")
