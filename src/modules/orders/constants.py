"""Order domain constants.

The status set is closed.  Transitions are unconstrained: any status may
move to any other.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    COD = "COD", "Cash on Delivery"
    ADVANCE_TAKEN = "Advance Taken", "Advance Taken"
    COMPLETED = "Completed", "Completed"
    DELIVERED = "Delivered", "Delivered"


#: Statuses whose order value has been collected in full.
PAID_IN_FULL_STATES: frozenset[str] = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.DELIVERED}
)

#: Statuses that still have money to collect.
PENDING_PAYMENT_STATES: frozenset[str] = frozenset(
    {OrderStatus.COD, OrderStatus.ADVANCE_TAKEN}
)

#: Statuses that have received a payment (full or partial).
PAYMENT_RECEIVED_STATES: frozenset[str] = PAID_IN_FULL_STATES | {
    OrderStatus.ADVANCE_TAKEN
}

UPCOMING_DELIVERIES_WINDOW = 5

UNKNOWN_CUSTOMER = "Unknown"

DISPLAY_ID_PREFIX = "PT"
DISPLAY_ID_MAX_RETRIES = 5
