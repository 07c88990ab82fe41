"""Dashboard and report use-cases.

Both read the two collections through their feeds, join them by customer
id in memory and hand the result to the order ledger.  Nothing here writes.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple
from uuid import UUID

import structlog
from django.utils import timezone

from modules.core.feeds import CollectionFeed
from modules.customers.events import CUSTOMER_CHANGE_EVENTS
from modules.orders import ledger
from modules.orders.constants import OrderStatus
from modules.orders.events import ORDER_CHANGE_EVENTS
from modules.reports.dtos import ReportSummary
from modules.reports.exceptions import NoReportData, UnknownBucket

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)

PAYMENTS_BUCKET = "payments"
OUTSTANDING_BUCKET = "outstanding"


def default_report_range(today: Optional[date] = None) -> Tuple[date, date]:
    """First day of the current month through *today*."""
    today = today or timezone.localdate()
    return today.replace(day=1), today


class ReportService:
    """Read-only service over orders and customers."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._orders = CollectionFeed(order_repository, ORDER_CHANGE_EVENTS, bus=bus)
        self._customers = CollectionFeed(
            customer_repository, CUSTOMER_CHANGE_EVENTS, bus=bus
        )

    def _orders_in_range(
        self, start: Optional[date], end: Optional[date]
    ) -> List[Order]:
        return ledger.filter_by_date_range(self._orders.snapshot(), start, end)

    def customer_names(self) -> Dict[UUID, str]:
        customers = self._customers.snapshot()
        return {customer.id: customer.full_name for customer in customers}

    def dashboard(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> ledger.DashboardStats:
        """Aggregate statistics, optionally restricted to an order-date range."""
        orders = self._orders_in_range(start, end)
        stats = ledger.compute_stats(orders, now=now)
        logger.info(
            "dashboard.computed",
            start_date=str(start) if start else None,
            end_date=str(end) if end else None,
            total_orders=stats.total_orders,
        )
        return stats

    def bucket(
        self,
        name: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Order]:
        """Orders behind one dashboard figure, most recent first.

        *name* is a status value, ``"payments"`` or ``"outstanding"``.

        Raises:
            UnknownBucket: *name* is none of those.
        """
        orders = self._orders_in_range(start, end)
        if name == PAYMENTS_BUCKET:
            return ledger.orders_with_payments(orders)
        if name == OUTSTANDING_BUCKET:
            return ledger.orders_with_outstanding_balance(orders)
        if name in OrderStatus.values:
            return ledger.orders_with_status(orders, name)
        raise UnknownBucket(
            f"Unknown bucket {name!r}. Use a status, "
            f"{PAYMENTS_BUCKET!r} or {OUTSTANDING_BUCKET!r}."
        )

    def summary(self, start: date, end: Optional[date] = None) -> ReportSummary:
        """Figures and order rows (oldest first) for the summary report."""
        end = end or start
        orders = ledger.sort_oldest_first(self._orders_in_range(start, end))
        summary = ReportSummary(
            start_date=start,
            end_date=end,
            stats=ledger.compute_stats(orders),
            orders=orders,
            customer_names=self.customer_names(),
        )
        logger.info(
            "report.summary_computed",
            start_date=str(start),
            end_date=str(end),
            total_orders=len(orders),
        )
        return summary

    def summary_for_pdf(self, start: date, end: Optional[date] = None) -> ReportSummary:
        """Like :meth:`summary`, but an empty range is an error.

        Raises:
            NoReportData: no orders fall in the range.
        """
        summary = self.summary(start, end)
        if not summary.orders:
            logger.warning(
                "report.no_data", start_date=str(start), end_date=str(summary.end_date)
            )
            raise NoReportData(
                "There is no data to generate a report for the selected date range."
            )
        return summary
