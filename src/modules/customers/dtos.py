"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateCustomerDTO``: input for customer creation.
- ``UpdateCustomerDTO``: partial input for customer edits.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

FULL_NAME_MIN_LENGTH = 2
PHONE_MIN_LENGTH = 10
ADDRESS_MIN_LENGTH = 5


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_min_length(value: Optional[str], minimum: int, message: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if len(value) < minimum:
        raise ValueError(message)
    return value


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer creation requests.

    ``email`` is optional; an empty string is treated as "not given".
    """

    model_config = ConfigDict(frozen=True)

    full_name: str
    phone: str
    email: Optional[EmailStr] = None
    address: str
    preferences: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("full_name")
    @classmethod
    def full_name_min_length(cls, v: str) -> str:
        return _check_min_length(
            v, FULL_NAME_MIN_LENGTH, "Full name must be at least 2 characters."
        )

    @field_validator("phone")
    @classmethod
    def phone_min_length(cls, v: str) -> str:
        return _check_min_length(
            v, PHONE_MIN_LENGTH, "Phone number must be at least 10 digits."
        )

    @field_validator("address")
    @classmethod
    def address_min_length(cls, v: str) -> str:
        return _check_min_length(
            v, ADDRESS_MIN_LENGTH, "Address must be at least 5 characters."
        )


class UpdateCustomerDTO(BaseModel):
    """Immutable DTO for customer update requests.

    All fields are optional; only supplied fields are updated.  Sending an
    empty ``email`` clears it.
    """

    model_config = ConfigDict(frozen=True)

    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    preferences: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("full_name")
    @classmethod
    def full_name_min_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_min_length(
            v, FULL_NAME_MIN_LENGTH, "Full name must be at least 2 characters."
        )

    @field_validator("phone")
    @classmethod
    def phone_min_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_min_length(
            v, PHONE_MIN_LENGTH, "Phone number must be at least 10 digits."
        )

    @field_validator("address")
    @classmethod
    def address_min_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_min_length(
            v, ADDRESS_MIN_LENGTH, "Address must be at least 5 characters."
        )
