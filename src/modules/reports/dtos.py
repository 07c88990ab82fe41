"""Report DTOs.

- ``DateRangeDTO``: inclusive ``start_date`` / ``end_date`` query input.
- ``ReportSummary``: everything the summary report renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator

from modules.orders.ledger import DashboardStats
from modules.orders.models import Order


class DateRangeDTO(BaseModel):
    """Inclusive date range.

    A missing ``end_date`` means ``start_date``; a missing ``start_date``
    leaves ``end_date`` as an upper bound only.
    """

    model_config = ConfigDict(frozen=True)

    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must not be before start date.")
        return self

    @property
    def upper(self) -> Optional[date]:
        return self.end_date or self.start_date


@dataclass(frozen=True)
class ReportSummary:
    start_date: date
    end_date: date
    stats: DashboardStats
    orders: List[Order] = field(default_factory=list)
    customer_names: Dict[UUID, str] = field(default_factory=dict)
