"""Payment terms of an order, one variant per status.

An order row stores ``status`` plus an optional ``advance_amount`` that only
means something under "Advance Taken".  In the domain that pair is a tagged
variant instead, so the amount can only be reached through the status that
owns it:

========================  =============================
status                    variant
========================  =============================
``COD``                   ``CashOnDelivery()``
``Advance Taken``         ``AdvanceTaken(advance)``
``Completed``             ``Completed()``
``Delivered``             ``Delivered()``
========================  =============================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional, Union

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import InvalidAdvanceAmount

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class CashOnDelivery:
    """Nothing collected yet; the full value is due on delivery."""

    status: ClassVar[str] = OrderStatus.COD

    def amount_paid(self, total_value: Decimal) -> Decimal:
        return ZERO


@dataclass(frozen=True)
class AdvanceTaken:
    """Part of the value was collected up front."""

    status: ClassVar[str] = OrderStatus.ADVANCE_TAKEN

    advance: Decimal = ZERO

    def amount_paid(self, total_value: Decimal) -> Decimal:
        return self.advance


@dataclass(frozen=True)
class Completed:
    """Paid in full, not delivered yet."""

    status: ClassVar[str] = OrderStatus.COMPLETED

    def amount_paid(self, total_value: Decimal) -> Decimal:
        return total_value


@dataclass(frozen=True)
class Delivered:
    """Paid in full and fulfilled."""

    status: ClassVar[str] = OrderStatus.DELIVERED

    def amount_paid(self, total_value: Decimal) -> Decimal:
        return total_value


PaymentTerms = Union[CashOnDelivery, AdvanceTaken, Completed, Delivered]


def payment_terms(status: str, advance_amount: Optional[Decimal] = None) -> PaymentTerms:
    """Build the variant for a stored ``(status, advance_amount)`` pair.

    Rows saved without an advance under "Advance Taken" read as an advance
    of zero.  ``advance_amount`` is ignored for every other status.
    """
    if status == OrderStatus.COD:
        return CashOnDelivery()
    if status == OrderStatus.ADVANCE_TAKEN:
        return AdvanceTaken(advance=advance_amount if advance_amount is not None else ZERO)
    if status == OrderStatus.COMPLETED:
        return Completed()
    if status == OrderStatus.DELIVERED:
        return Delivered()
    raise ValueError(f"Unknown order status: {status!r}.")


def normalize_advance_amount(
    status: str, advance_amount: Optional[Decimal]
) -> Optional[Decimal]:
    """Return the ``advance_amount`` to store for *status*.

    Raises:
        InvalidAdvanceAmount: status is "Advance Taken" and the advance is
            missing or not positive.
    """
    if status != OrderStatus.ADVANCE_TAKEN:
        return None
    if advance_amount is None or advance_amount <= 0:
        raise InvalidAdvanceAmount(
            'Advance amount is required when status is "Advance Taken".'
        )
    return advance_amount
