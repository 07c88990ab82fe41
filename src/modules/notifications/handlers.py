"""Event handlers that turn committed customer/order changes into messages.

They run after the write has committed, so they re-read the row.  A row
that vanished in the meantime is skipped.
"""

from __future__ import annotations

from typing import Callable

import structlog

from modules.customers.events import CustomerCreated, CustomerUpdated
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.notifications.formatters import (
    format_new_customer_message,
    format_new_order_message,
    format_updated_customer_message,
    format_updated_order_message,
)
from modules.notifications.notifier import notify
from modules.orders.constants import UNKNOWN_CUSTOMER
from modules.orders.events import OrderCreated, OrderUpdated
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from shared.domain.bus import IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class CustomerNotificationHandler(IEventHandler[DomainEvent]):
    def __init__(self, formatter: Callable[[Customer], str]) -> None:
        self._formatter = formatter
        self._customers = CustomerDjangoRepository()

    def handle(self, event: DomainEvent) -> None:
        customer = self._customers.get_by_id(str(event.aggregate_id))
        if customer is None:
            logger.info(
                "notification.subject_missing",
                event_name=event.event_name,
                customer_id=str(event.aggregate_id),
            )
            return
        notify(self._formatter(customer))


class OrderNotificationHandler(IEventHandler[DomainEvent]):
    def __init__(self, formatter: Callable[[Order, str], str]) -> None:
        self._formatter = formatter
        self._orders = OrderDjangoRepository()
        self._customers = CustomerDjangoRepository()

    def handle(self, event: DomainEvent) -> None:
        order = self._orders.get_by_id(str(event.aggregate_id))
        if order is None:
            logger.info(
                "notification.subject_missing",
                event_name=event.event_name,
                order_id=str(event.aggregate_id),
            )
            return
        customer = self._customers.get_by_id(str(order.customer_id))
        customer_name = customer.full_name if customer else UNKNOWN_CUSTOMER
        notify(self._formatter(order, customer_name))


HANDLERS = (
    (CustomerCreated, CustomerNotificationHandler(format_new_customer_message)),
    (CustomerUpdated, CustomerNotificationHandler(format_updated_customer_message)),
    (OrderCreated, OrderNotificationHandler(format_new_order_message)),
    (OrderUpdated, OrderNotificationHandler(format_updated_order_message)),
)
