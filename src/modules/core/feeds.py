"""Live subscriptions over a record collection.

A ``CollectionFeed`` pushes the materialised list of a collection to its
subscribers: once on subscribe, then again after every committed change.
Change notifications arrive through the in-process event bus; repositories
publish their events only after the transaction commits, so subscribers
never see uncommitted rows.

The customers feed and the orders feed are independent.  A consumer that
joins them (e.g. resolving customer names for orders) must tolerate one
stream being ahead of the other.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, List, Type, TypeVar

import structlog

from modules.core.repositories.interfaces import IRepository
from shared.domain.bus import IEventBus
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus as default_event_bus

logger = structlog.get_logger(__name__)

T = TypeVar("T")

OnChange = Callable[[List[T]], None]
OnError = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class _FeedSubscription(Generic[T]):
    """Event handler bound to one subscriber."""

    def __init__(
        self,
        repository: IRepository[T],
        on_change: OnChange,
        on_error: OnError,
    ) -> None:
        self._repository = repository
        self._on_change = on_change
        self._on_error = on_error

    def handle(self, event: DomainEvent) -> None:
        self.deliver()

    def deliver(self) -> None:
        try:
            records = self._repository.list()
        except Exception as exc:
            logger.warning(
                "feed.load_failed",
                collection=self._repository.collection,
                error=str(exc),
            )
            self._on_error(exc)
            return
        self._on_change(records)


class CollectionFeed(Generic[T]):
    """Subscribe to a collection and receive its full contents on change."""

    def __init__(
        self,
        repository: IRepository[T],
        change_events: Iterable[Type[DomainEvent]],
        bus: IEventBus | None = None,
    ) -> None:
        self._repository = repository
        self._change_events = tuple(change_events)
        self._bus = bus or default_event_bus

    def subscribe(self, on_change: OnChange, on_error: OnError) -> Unsubscribe:
        """Register a subscriber and deliver the current list immediately.

        Returns a callable that detaches the subscriber; calling it twice
        is harmless.
        """
        subscription = _FeedSubscription(self._repository, on_change, on_error)
        for event_class in self._change_events:
            self._bus.subscribe(event_class, subscription)
        logger.debug("feed.subscribed", collection=self._repository.collection)

        subscription.deliver()

        def unsubscribe() -> None:
            for event_class in self._change_events:
                self._bus.unsubscribe(event_class, subscription)
            logger.debug("feed.unsubscribed", collection=self._repository.collection)

        return unsubscribe

    def snapshot(self) -> List[T]:
        """Subscribe, take the first delivered list and detach again.

        Request-scoped readers use this to see the same list a live
        subscriber would.  A load failure is re-raised to the caller.
        """
        delivered: List[List[T]] = []
        failures: List[Exception] = []
        unsubscribe = self.subscribe(delivered.append, failures.append)
        unsubscribe()
        if failures:
            raise failures[0]
        return delivered[0]
