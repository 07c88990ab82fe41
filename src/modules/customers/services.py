"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Every write stamps the acting identity on the row and records a domain
event; the repository publishes it after commit, which is what triggers
the Telegram notification.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.core.identity import SYSTEM_ACTOR
from modules.customers.events import CustomerCreated, CustomerDeleted, CustomerUpdated
from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

#: Optional text fields that an empty value clears.
CLEARABLE_FIELDS = ("email", "preferences")


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(
        self, dto: CreateCustomerDTO, actor: str = SYSTEM_ACTOR
    ) -> Customer:
        """Create a new customer stamped with *actor*."""
        customer = Customer(
            full_name=dto.full_name,
            phone=dto.phone,
            email=dto.email or "",
            address=dto.address,
            preferences=dto.preferences or "",
        )
        customer.stamp_created(actor)
        customer.add_domain_event(CustomerCreated(aggregate_id=customer.id, actor=actor))
        customer = self._repo.save(customer)
        logger.info("customer.created", customer_id=str(customer.id), actor=actor)
        return customer

    @transaction.atomic
    def update_customer(
        self, id: str, dto: UpdateCustomerDTO, actor: str = SYSTEM_ACTOR
    ) -> Customer:
        """Apply the fields present in *dto* to an existing customer.

        ``None`` leaves a required field unchanged; for ``email`` and
        ``preferences`` it clears the stored value.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        log = logger.bind(customer_id=str(id), actor=actor)

        changed = []
        for field in sorted(dto.model_fields_set):
            value = getattr(dto, field)
            if value is None:
                if field not in CLEARABLE_FIELDS:
                    continue
                value = ""
            setattr(customer, field, value)
            changed.append(field)

        customer.stamp_updated(actor)
        customer.add_domain_event(CustomerUpdated(aggregate_id=customer.id, actor=actor))
        customer = self._repo.save(customer)
        log.info("customer.updated", fields=changed)
        return customer

    @transaction.atomic
    def delete_customer(self, id: str, actor: str = SYSTEM_ACTOR) -> None:
        """Permanently delete a customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        customer.add_domain_event(CustomerDeleted(aggregate_id=customer.id, actor=actor))
        self._repo.delete(customer)
        logger.info("customer.deleted", customer_id=str(id), actor=actor)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self) -> List[Customer]:
        """Return every customer, newest first."""
        return self._repo.list()

    def get_customer(self, id: str) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
