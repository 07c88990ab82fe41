"""Domain events for the Orders module."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created."""


@dataclass(frozen=True)
class OrderUpdated(DomainEvent):
    """Raised when an order is edited."""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised alongside ``OrderUpdated`` when the edit moved the status."""

    old_status: str = ""
    new_status: str = ""


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """Raised when an order is permanently removed."""


ORDER_CHANGE_EVENTS = (OrderCreated, OrderUpdated, OrderDeleted)
