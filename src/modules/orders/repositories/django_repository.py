"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Writes run
inside ``transaction.atomic()``; pending domain events are handed to the
event bus only once the outermost transaction commits.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.repositories.publishing import publish_on_commit
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def queryset(self) -> "models.QuerySet[Order]":
        return Order.objects.all()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional ORM look-ups.

        Examples of valid filters::

            {"status": "COD"}
            {"order_date__range": (start, end)}
        """
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        is_new = entity._state.adding
        entity.save()
        published = publish_on_commit(entity.pull_domain_events())
        logger.info(
            "order.saved",
            order_id=str(entity.id),
            is_new=is_new,
            event_count=published,
        )
        return entity

    @transaction.atomic
    def delete(self, entity: Order) -> None:
        """Hard-delete an order.  No history is kept."""
        order_id = entity.id
        entity.delete()
        publish_on_commit(entity.pull_domain_events())
        logger.info("order.hard_deleted", order_id=str(order_id))
