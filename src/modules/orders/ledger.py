"""Order ledger: payment amounts and dashboard aggregates.

Everything here is a pure function over orders that are already in memory.
Nothing touches the database, so the same functions serve the dashboard,
the report and the list views.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import (
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
)
from uuid import UUID

from django.utils import timezone

from modules.orders.constants import (
    PAYMENT_RECEIVED_STATES,
    PENDING_PAYMENT_STATES,
    UNKNOWN_CUSTOMER,
    UPCOMING_DELIVERIES_WINDOW,
    OrderStatus,
)
from modules.orders.payments import ZERO, payment_terms


class LedgerOrder(Protocol):
    display_id: str
    customer_id: UUID
    order_date: datetime
    delivery_date: datetime
    status: str
    total_value: Decimal
    advance_amount: Optional[Decimal]


class SearchableCustomer(Protocol):
    full_name: str
    phone: str
    email: str


O = TypeVar("O", bound=LedgerOrder)
C = TypeVar("C", bound=SearchableCustomer)


@dataclass(frozen=True)
class DashboardStats:
    cod: int = 0
    advance_taken: int = 0
    completed: int = 0
    delivered: int = 0
    total_orders: int = 0
    total_payments: Decimal = ZERO
    outstanding_balance: Decimal = ZERO
    upcoming_deliveries: List[LedgerOrder] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-order amounts
# ---------------------------------------------------------------------------


def amount_paid(order: LedgerOrder) -> Decimal:
    """Money already collected for *order*, derived from its status."""
    return payment_terms(order.status, order.advance_amount).amount_paid(
        order.total_value
    )


def balance_due(order: LedgerOrder) -> Decimal:
    return order.total_value - amount_paid(order)


# ---------------------------------------------------------------------------
# Date range
# ---------------------------------------------------------------------------


#: Last instant of a day that a date range still includes.
END_OF_DAY = time(23, 59, 59, 999000)


def day_bounds(start: date, end: Optional[date] = None) -> Tuple[datetime, datetime]:
    """Return aware datetimes from midnight of *start* to 23:59:59.999 of *end*.

    Both ends are inclusive and interpreted in the current time zone.  A
    missing *end* means the single day *start*.
    """
    end = end or start
    tz = timezone.get_current_timezone()
    lower = timezone.make_aware(datetime.combine(start, time.min), tz)
    upper = timezone.make_aware(datetime.combine(end, END_OF_DAY), tz)
    return lower, upper


def filter_by_date_range(
    orders: Iterable[O], start: Optional[date], end: Optional[date] = None
) -> List[O]:
    """Keep orders whose ``order_date`` falls inside the inclusive range.

    Without *start* only the upper bound applies; with neither bound every
    order is kept.
    """
    if start is None:
        if end is None:
            return list(orders)
        upper = day_bounds(end)[1]
        return [order for order in orders if order.order_date <= upper]
    lower, upper = day_bounds(start, end)
    return [order for order in orders if lower <= order.order_date <= upper]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def sort_recent_first(orders: Iterable[O]) -> List[O]:
    return sorted(orders, key=lambda order: order.order_date, reverse=True)


def sort_oldest_first(orders: Iterable[O]) -> List[O]:
    return sorted(orders, key=lambda order: order.order_date)


def sort_by_delivery(orders: Iterable[O]) -> List[O]:
    return sorted(orders, key=lambda order: order.delivery_date)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


def upcoming_deliveries(
    orders: Iterable[O],
    now: Optional[datetime] = None,
    limit: int = UPCOMING_DELIVERIES_WINDOW,
) -> List[O]:
    """Undelivered orders due from *now* on, soonest first."""
    now = now or timezone.now()
    pending = [
        order
        for order in orders
        if order.status != OrderStatus.DELIVERED and order.delivery_date >= now
    ]
    return sort_by_delivery(pending)[:limit]


def compute_stats(
    orders: Sequence[LedgerOrder], now: Optional[datetime] = None
) -> DashboardStats:
    """Aggregate dashboard figures over *orders*.

    Restrict *orders* with :func:`filter_by_date_range` first when a date
    range applies.  ``outstanding_balance`` only counts orders that still
    have money to collect (COD and Advance Taken).
    """
    counts = {status: 0 for status in OrderStatus.values}
    total_payments = ZERO
    outstanding = ZERO

    for order in orders:
        counts[order.status] = counts.get(order.status, 0) + 1
        total_payments += amount_paid(order)
        if order.status in PENDING_PAYMENT_STATES:
            outstanding += balance_due(order)

    return DashboardStats(
        cod=counts[OrderStatus.COD],
        advance_taken=counts[OrderStatus.ADVANCE_TAKEN],
        completed=counts[OrderStatus.COMPLETED],
        delivered=counts[OrderStatus.DELIVERED],
        total_orders=len(orders),
        total_payments=total_payments,
        outstanding_balance=outstanding,
        upcoming_deliveries=upcoming_deliveries(orders, now=now),
    )


# ---------------------------------------------------------------------------
# Drill-down buckets
# ---------------------------------------------------------------------------


def orders_with_status(orders: Iterable[O], status: str) -> List[O]:
    return sort_recent_first(order for order in orders if order.status == status)


def orders_with_payments(orders: Iterable[O]) -> List[O]:
    """Orders that received some money (full or advance)."""
    return sort_recent_first(
        order for order in orders if order.status in PAYMENT_RECEIVED_STATES
    )


def orders_with_outstanding_balance(orders: Iterable[O]) -> List[O]:
    return sort_recent_first(
        order for order in orders if order.status in PENDING_PAYMENT_STATES
    )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def resolve_customer_name(
    customer_id: Optional[UUID], names: Mapping[UUID, str]
) -> str:
    """Full name for *customer_id*, or ``"Unknown"`` if it no longer exists."""
    if customer_id is None:
        return UNKNOWN_CUSTOMER
    return names.get(customer_id, UNKNOWN_CUSTOMER)


def search_orders(
    orders: Iterable[O], term: Optional[str], customer_names: Mapping[UUID, str]
) -> List[O]:
    """Case-insensitive match on display id or customer name."""
    orders = list(orders)
    needle = (term or "").strip().lower()
    if not needle:
        return orders
    return [
        order
        for order in orders
        if needle in order.display_id.lower()
        or needle
        in resolve_customer_name(order.customer_id, customer_names).lower()
    ]


def search_customers(customers: Iterable[C], term: Optional[str]) -> List[C]:
    """Case-insensitive match on name, phone or email."""
    customers = list(customers)
    needle = (term or "").strip().lower()
    if not needle:
        return customers
    return [
        customer
        for customer in customers
        if needle in customer.full_name.lower()
        or needle in customer.phone.lower()
        or needle in (customer.email or "").lower()
    ]
