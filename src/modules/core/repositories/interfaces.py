"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the record-store contract that the
customers and orders repositories extend.  Service-layer code depends on
this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` is the entity stored in the collection
    (``Customer`` or ``Order``).  Implementations publish the entity's
    pending domain events once the write commits.
    """

    #: Logical collection name (``"customers"`` / ``"orders"``).
    collection: str = ""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key, ``None`` if missing."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """Materialise the collection, optionally filtered."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Permanently remove an entity."""
