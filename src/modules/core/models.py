"""Base abstract models for the order management system.

Provides:
- ``BaseModel``: UUIDv7 primary key + created_at / updated_at timestamps.
- ``AuditedModel``: Extends BaseModel with ``created_by`` / ``updated_by``
  actor stamps (the audit quad shared by customers and orders).

Deletion is permanent everywhere and there is no
history table.
"""

from __future__ import annotations

import uuid6
from django.db import models

from modules.core.identity import SYSTEM_ACTOR

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Audit stamping
# ---------------------------------------------------------------------------


class AuditedModel(BaseModel):
    """Abstract model carrying the actor that created / last updated a row.

    Actors are plain strings (an email address in practice); ``"System"``
    is used when no authenticated user was involved.
    """

    created_by = models.CharField(max_length=255, default=SYSTEM_ACTOR)
    updated_by = models.CharField(max_length=255, default=SYSTEM_ACTOR)

    class Meta:
        abstract = True

    def stamp_created(self, actor: str) -> None:
        self.created_by = actor
        self.updated_by = actor

    def stamp_updated(self, actor: str) -> None:
        self.updated_by = actor
