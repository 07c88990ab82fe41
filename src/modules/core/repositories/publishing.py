"""Post-commit publication of domain events."""

from __future__ import annotations

from functools import partial
from typing import Iterable

import structlog
from django.db import transaction

from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


def publish_on_commit(events: Iterable[DomainEvent]) -> int:
    """Publish *events* on the bus once the current transaction commits.

    Outside a transaction the events are published immediately.  If the
    transaction rolls back nothing is published.
    """
    count = 0
    for event in events:
        transaction.on_commit(partial(event_bus.publish, event))
        count += 1
    if count:
        logger.debug("events.scheduled", count=count)
    return count
