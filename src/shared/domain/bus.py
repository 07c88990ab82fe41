"""Event bus contracts.

Repositories publish committed customer/order changes on the bus; the
notification handlers and the collection feeds consume them.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    """Anything with ``handle(event)``."""

    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    """Publish/subscribe keyed on the exact event class."""

    def publish(self, event: DomainEvent) -> None: ...

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None:
        """Register *handler*; registering it twice has no effect."""
        ...

    def unsubscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None:
        """Detach *handler*; unknown handlers are ignored."""
        ...
