"""Customer model.

Rules:
- ``full_name``, ``phone`` and ``address`` are always present; ``email`` and
  ``preferences`` are optional.
- ``id`` is assigned by the store and never changes.
- Deletion is permanent.  Orders keep their ``customer_id`` and resolve the
  missing customer as ``"Unknown"``.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import AuditedModel
from shared.domain.events import DomainEventMixin


class Customer(DomainEventMixin, AuditedModel):
    """Customer aggregate root."""

    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32)
    email = models.EmailField(max_length=254, blank=True, default="")
    address = models.TextField()
    preferences = models.TextField(blank=True, default="")

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
            models.Index(fields=["full_name"], name="customers_full_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.phone})"
