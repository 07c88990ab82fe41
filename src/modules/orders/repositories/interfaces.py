"""Order repository interface.

Extends ``IRepository[Order]`` with the queryset hook used by the list
filters.  The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    collection = "orders"

    @abstractmethod
    def queryset(self) -> "models.QuerySet[Order]":
        """Unevaluated queryset over every order, for filter backends."""
