"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist (or was deleted)."""


class CustomerNotFound(Exception):
    """The customer referenced by a new order does not exist."""


class InvalidAdvanceAmount(ValueError):
    """An "Advance Taken" order has no positive advance amount."""
