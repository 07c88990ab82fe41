"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order creation.
- ``UpdateOrderDTO``: partial input for order edits.

Both normalise ``advance_amount`` against ``status``: it is dropped for
every status other than "Advance Taken" and required (positive) under it.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.orders.constants import OrderStatus
from modules.orders.payments import normalize_advance_amount

PRODUCTS_MIN_LENGTH = 3


def _check_products(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if len(value) < PRODUCTS_MIN_LENGTH:
        raise ValueError("Products description must be at least 3 characters.")
    return value


def _check_total_value(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is not None and value <= 0:
        raise ValueError("Total value must be a positive number.")
    return value


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests."""

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    delivery_date: datetime
    products: str
    total_value: Decimal
    status: OrderStatus = OrderStatus.COD
    advance_amount: Optional[Decimal] = None
    special_instructions: str = ""

    @field_validator("products")
    @classmethod
    def products_min_length(cls, v: str) -> str:
        return _check_products(v)

    @field_validator("total_value")
    @classmethod
    def total_value_positive(cls, v: Decimal) -> Decimal:
        return _check_total_value(v)

    @model_validator(mode="before")
    @classmethod
    def couple_advance_to_status(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            status = data.get("status") or OrderStatus.COD
            advance = data.get("advance_amount")
            if advance in ("", None):
                advance = None
            else:
                try:
                    advance = Decimal(str(advance))
                except InvalidOperation:
                    # Left for field validation to reject.
                    return data
            data["advance_amount"] = normalize_advance_amount(status, advance)
        return data


class UpdateOrderDTO(BaseModel):
    """Immutable DTO for order edit requests.

    Only fields the client sent are applied (see ``model_fields_set``).
    ``advance_amount`` is checked against ``status`` when both are given;
    the service re-checks it against the stored status otherwise.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[UUID] = None
    delivery_date: Optional[datetime] = None
    products: Optional[str] = None
    total_value: Optional[Decimal] = None
    status: Optional[OrderStatus] = None
    advance_amount: Optional[Decimal] = None
    special_instructions: Optional[str] = None

    @field_validator("products")
    @classmethod
    def products_min_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_products(v)

    @field_validator("total_value")
    @classmethod
    def total_value_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_total_value(v)

    @field_validator("advance_amount", mode="before")
    @classmethod
    def empty_advance_is_none(cls, v):
        return None if v == "" else v
