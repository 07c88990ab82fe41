"""Unit tests for customer DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {
        "full_name": "Eleanor Vance",
        "phone": "+1 555-0101",
        "address": "123 Rose Lane",
    }
    data.update(overrides)
    return data


class TestCreateCustomerDTO:
    def test_minimal_valid(self):
        dto = CreateCustomerDTO(**_payload())
        assert dto.email is None
        assert dto.preferences == ""

    def test_strips_whitespace(self):
        dto = CreateCustomerDTO(**_payload(full_name="  Chloe Price  "))
        assert dto.full_name == "Chloe Price"

    def test_blank_email_is_none(self):
        assert CreateCustomerDTO(**_payload(email="  ")).email is None

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            CreateCustomerDTO(**_payload(email="not-an-email"))

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("full_name", "A", "Full name must be at least 2 characters."),
            ("phone", "555-01", "Phone number must be at least 10 digits."),
            ("address", "Lane", "Address must be at least 5 characters."),
        ],
    )
    def test_minimum_lengths(self, field, value, message):
        with pytest.raises(ValidationError, match=message):
            CreateCustomerDTO(**_payload(**{field: value}))

    def test_missing_required_field(self):
        data = _payload()
        del data["phone"]
        with pytest.raises(ValidationError):
            CreateCustomerDTO(**data)


class TestUpdateCustomerDTO:
    def test_all_optional(self):
        dto = UpdateCustomerDTO()
        assert dto.model_fields_set == set()

    def test_empty_email_marks_field_as_sent(self):
        dto = UpdateCustomerDTO(email="")
        assert dto.email is None
        assert dto.model_fields_set == {"email"}

    def test_present_fields_still_validated(self):
        with pytest.raises(ValidationError, match="at least 10 digits"):
            UpdateCustomerDTO(phone="123")
