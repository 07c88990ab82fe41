import pytest
from pydantic import ValidationError

from modules.core.errors import validation_detail
from modules.customers.dtos import CreateCustomerDTO

pytestmark = pytest.mark.unit


class TestValidationDetail:
    def test_custom_message_without_prefix(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCustomerDTO(full_name="A", phone="+1 555-0101", address="1 Rose Lane")

        detail = validation_detail(exc_info.value)

        assert detail == "full_name: Full name must be at least 2 characters."

    def test_one_sentence_per_field(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCustomerDTO(full_name="A", phone="123", address="1 Rose Lane")

        detail = validation_detail(exc_info.value)

        assert "full_name: Full name must be at least 2 characters." in detail
        assert "phone: Phone number must be at least 10 digits." in detail
        assert "Value error" not in detail
