"""Post-commit Telegram notifications for customer and order writes."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture()
def telegram(settings):
    settings.TELEGRAM_BOT_TOKEN = "123:abc"
    settings.TELEGRAM_CHAT_IDS = ["1001", "1002"]
    with patch("modules.notifications.telegram.requests.post") as post:
        post.return_value = MagicMock(ok=True, status_code=200)
        yield post


def _texts(post):
    return [call.kwargs["json"]["text"] for call in post.call_args_list]


class TestCustomerNotifications:
    def test_created_customer_sent_to_every_chat(
        self, auth_client, telegram, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = auth_client.post(
                "/api/v1/customers/",
                {
                    "full_name": "Chloe Price",
                    "phone": "+1 555-0103",
                    "address": "789 Tulip St",
                },
                format="json",
            )

        assert response.status_code == 201
        assert telegram.call_count == 2
        chats = {call.kwargs["json"]["chat_id"] for call in telegram.call_args_list}
        assert chats == {"1001", "1002"}
        text = _texts(telegram)[0]
        assert "New Customer Added" in text
        assert "<b>Email:</b> N/A" in text
        assert "<b>Action By:</b> florist@bloomora.test" in text

    def test_updated_customer(
        self, auth_client, customer, telegram, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            auth_client.patch(
                f"/api/v1/customers/{customer.id}/", {"preferences": ""}, format="json"
            )

        assert "Customer Details Updated" in _texts(telegram)[0]

    def test_deleted_customer_sends_nothing(
        self, auth_client, customer, telegram, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            auth_client.delete(f"/api/v1/customers/{customer.id}/")

        telegram.assert_not_called()


class TestOrderNotifications:
    def test_created_order(
        self, auth_client, customer, telegram, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = auth_client.post(
                "/api/v1/orders/",
                {
                    "customer_id": str(customer.id),
                    "delivery_date": "2026-10-25T10:00:00Z",
                    "products": "Peony centerpiece",
                    "total_value": "120.5",
                },
                format="json",
            )

        text = _texts(telegram)[0]
        assert "New Order Added" in text
        assert f"<b>Order ID:</b> {response.json()['display_id']}" in text
        assert "<b>Customer:</b> Eleanor Vance" in text
        assert "<b>Total Value:</b> LKR 120.50" in text

    def test_updated_order(
        self, auth_client, make_order, telegram, django_capture_on_commit_callbacks
    ):
        order = make_order()
        with django_capture_on_commit_callbacks(execute=True):
            auth_client.patch(
                f"/api/v1/orders/{order.id}/", {"status": "Completed"}, format="json"
            )

        text = _texts(telegram)[0]
        assert "Order Updated" in text
        assert "<b>Status:</b> Completed" in text

    def test_failed_write_sends_nothing(
        self, auth_client, make_order, telegram, django_capture_on_commit_callbacks
    ):
        order = make_order()
        with django_capture_on_commit_callbacks(execute=True):
            response = auth_client.patch(
                f"/api/v1/orders/{order.id}/", {"status": "Advance Taken"}, format="json"
            )

        assert response.status_code == 400
        telegram.assert_not_called()

    def test_telegram_outage_does_not_fail_write(
        self, auth_client, make_order, telegram, django_capture_on_commit_callbacks
    ):
        telegram.return_value = MagicMock(ok=False, status_code=502, text="Bad Gateway")
        telegram.return_value.json.side_effect = ValueError("not json")
        order = make_order(total_value=Decimal("80"))

        with django_capture_on_commit_callbacks(execute=True):
            response = auth_client.patch(
                f"/api/v1/orders/{order.id}/", {"products": "Orchid in ceramic pot"},
                format="json",
            )

        assert response.status_code == 200
        assert telegram.call_count == 2

    def test_missing_token_skips_delivery(
        self, auth_client, make_order, settings, django_capture_on_commit_callbacks
    ):
        settings.TELEGRAM_BOT_TOKEN = ""
        order = make_order()
        with patch("modules.notifications.telegram.requests.post") as post:
            with django_capture_on_commit_callbacks(execute=True):
                response = auth_client.patch(
                    f"/api/v1/orders/{order.id}/", {"status": "Delivered"}, format="json"
                )

        assert response.status_code == 200
        post.assert_not_called()
