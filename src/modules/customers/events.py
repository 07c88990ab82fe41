"""Domain events for the Customers module."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class CustomerCreated(DomainEvent):
    """Raised when a customer is created."""


@dataclass(frozen=True)
class CustomerUpdated(DomainEvent):
    """Raised when customer details are edited."""


@dataclass(frozen=True)
class CustomerDeleted(DomainEvent):
    """Raised when a customer is permanently removed."""


CUSTOMER_CHANGE_EVENTS = (CustomerCreated, CustomerUpdated, CustomerDeleted)
