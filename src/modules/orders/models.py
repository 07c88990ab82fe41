"""Order model.

Rules:
- ``display_id`` is a human-readable code (``PT-NNNNNN``) generated on first
  save and unique across orders.  The UUIDv7 ``id`` is used for API lookups.
- ``customer_id`` is a plain reference with no foreign key: deleting a
  customer keeps its orders, which then resolve to ``"Unknown"``.
- ``total_value`` is never negative (database check constraint).
- ``advance_amount`` is only meaningful while ``status`` is
  "Advance Taken"; read it through :attr:`Order.payment`.
- Deletion is permanent.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

import structlog
from django.db import models
from django.utils import timezone

from modules.core.models import AuditedModel
from modules.orders.constants import (
    DISPLAY_ID_MAX_RETRIES,
    DISPLAY_ID_PREFIX,
    OrderStatus,
)
from modules.orders.payments import PaymentTerms, payment_terms
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, AuditedModel):
    """Order aggregate root."""

    display_id = models.CharField(max_length=20, unique=True, editable=False)
    customer_id = models.UUIDField(db_index=True)
    order_date = models.DateTimeField(default=timezone.now)
    delivery_date = models.DateTimeField()
    products = models.TextField()
    total_value = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.COD,
    )
    advance_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    special_instructions = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-order_date"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-order_date"], name="orders_order_date_idx"),
            models.Index(fields=["delivery_date"], name="orders_delivery_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_value__gte=0),
                name="orders_total_value_non_negative",
            ),
        ]

    @property
    def payment(self) -> PaymentTerms:
        """Payment terms as a status variant."""
        return payment_terms(self.status, self.advance_amount)

    @property
    def amount_paid(self) -> Decimal:
        return self.payment.amount_paid(self.total_value)

    @property
    def balance_due(self) -> Decimal:
        return self.total_value - self.amount_paid

    @staticmethod
    def generate_display_id() -> str:
        """Generate a display code: ``PT-`` followed by six digits."""
        return f"{DISPLAY_ID_PREFIX}-{secrets.randbelow(10**6):06d}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.display_id:
            for _ in range(DISPLAY_ID_MAX_RETRIES):
                candidate = self.generate_display_id()
                if not Order.objects.filter(display_id=candidate).exists():
                    self.display_id = candidate
                    break
            else:
                logger.error("order.display_id_exhausted")
                raise RuntimeError(
                    f"Failed to generate unique display_id after "
                    f"{DISPLAY_ID_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.display_id} ({self.status})"
