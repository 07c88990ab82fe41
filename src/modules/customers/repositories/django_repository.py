"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.repositories.publishing import publish_on_commit
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers, most recent first, with optional ORM look-ups."""
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def names_by_id(self) -> Dict[UUID, str]:
        return dict(Customer.objects.values_list("id", "full_name"))

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        published = publish_on_commit(entity.pull_domain_events())
        logger.info(
            "customer.saved",
            customer_id=str(entity.id),
            is_new=is_new,
            event_count=published,
        )
        return entity

    @transaction.atomic
    def delete(self, entity: Customer) -> None:
        """Hard-delete a customer.  Its orders are left untouched."""
        customer_id = entity.id
        entity.delete()
        publish_on_commit(entity.pull_domain_events())
        logger.info("customer.hard_deleted", customer_id=str(customer_id))
