"""Order service layer (Use Cases).

Orchestrates order creation, edits and deletion.  All write operations
are atomic; the service defines the unit-of-work boundary.

Rules enforced here:
- A new order must reference an existing customer.
- ``advance_amount`` is kept only under "Advance Taken", where it must
  be positive.  It is re-checked against the resulting status on edit.
- Status may move between any two values.
- Every write stamps the acting identity and records a domain event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.core.identity import SYSTEM_ACTOR
from modules.orders.events import (
    OrderCreated,
    OrderDeleted,
    OrderStatusChanged,
    OrderUpdated,
)
from modules.orders.exceptions import CustomerNotFound, OrderNotFound
from modules.orders.models import Order
from modules.orders.payments import normalize_advance_amount

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

#: Field that an explicit empty value clears.
CLEARABLE_FIELDS = ("special_instructions",)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO, actor: str = SYSTEM_ACTOR) -> Order:
        """Create a new order for an existing customer.

        The display id and order date are assigned on insert.

        Raises:
            CustomerNotFound: customer does not exist.
            InvalidAdvanceAmount: "Advance Taken" without a positive advance.
        """
        log = logger.bind(customer_id=str(dto.customer_id), actor=actor)
        log.info("order.creation_started")

        self._require_customer(str(dto.customer_id))

        order = Order(
            customer_id=dto.customer_id,
            delivery_date=dto.delivery_date,
            products=dto.products,
            total_value=dto.total_value,
            status=dto.status,
            advance_amount=normalize_advance_amount(dto.status, dto.advance_amount),
            special_instructions=dto.special_instructions or "",
        )
        order.stamp_created(actor)
        order.add_domain_event(OrderCreated(aggregate_id=order.id, actor=actor))
        order = self._order_repo.save(order)

        log.info(
            "order.created",
            order_id=str(order.id),
            display_id=order.display_id,
            status=order.status,
        )
        return order

    @transaction.atomic
    def update_order(
        self, order_id: str, dto: UpdateOrderDTO, actor: str = SYSTEM_ACTOR
    ) -> Order:
        """Apply the fields present in *dto* to an existing order.

        ``None`` leaves a required field unchanged.  The advance amount is
        normalised against the status the order ends up with, so moving an
        order out of "Advance Taken" drops its advance.

        Raises:
            OrderNotFound: order does not exist.
            CustomerNotFound: the new customer does not exist.
            InvalidAdvanceAmount: "Advance Taken" without a positive advance.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(order_id=str(order.id), actor=actor)
        fields = dto.model_fields_set
        old_status = order.status

        if dto.customer_id is not None and dto.customer_id != order.customer_id:
            self._require_customer(str(dto.customer_id))

        for field in sorted(fields - {"status", "advance_amount"}):
            value = getattr(dto, field)
            if value is None:
                if field not in CLEARABLE_FIELDS:
                    continue
                value = ""
            setattr(order, field, value)

        if dto.status is not None:
            order.status = dto.status
        advance = dto.advance_amount if "advance_amount" in fields else order.advance_amount
        order.advance_amount = normalize_advance_amount(order.status, advance)

        order.stamp_updated(actor)
        order.add_domain_event(OrderUpdated(aggregate_id=order.id, actor=actor))
        if order.status != old_status:
            order.add_domain_event(
                OrderStatusChanged(
                    aggregate_id=order.id,
                    actor=actor,
                    old_status=old_status,
                    new_status=order.status,
                )
            )
        order = self._order_repo.save(order)

        log.info("order.updated", fields=sorted(fields), status=order.status)
        return order

    @transaction.atomic
    def delete_order(self, order_id: str, actor: str = SYSTEM_ACTOR) -> None:
        """Permanently delete an order.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        order.add_domain_event(OrderDeleted(aggregate_id=order.id, actor=actor))
        self._order_repo.delete(order)
        logger.info("order.deleted", order_id=str(order_id), actor=actor)

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

    def customer_names(self) -> Dict[Any, str]:
        """Customer id to full name, for labelling orders."""
        return self._customer_repo.names_by_id()

    def get_customer_for(self, order: Order) -> Optional[Customer]:
        """The order's customer, or ``None`` if it was deleted."""
        return self._customer_repo.get_by_id(str(order.customer_id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_customer(self, customer_id: str) -> None:
        if not self._customer_repo.get_by_id(customer_id):
            logger.warning("order.customer_not_found", customer_id=customer_id)
            raise CustomerNotFound(f"Customer {customer_id} not found.")
