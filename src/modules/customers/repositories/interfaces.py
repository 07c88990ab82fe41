"""Customer repository interface.

Extends ``IRepository[Customer]`` with the name look-up used to label
orders with their customer.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    collection = "customers"

    @abstractmethod
    def names_by_id(self) -> Dict[UUID, str]:
        """Map every customer id to its full name."""
