"""Integration tests for the dashboard and report endpoints."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.utils import timezone

from modules.orders.constants import OrderStatus
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.integration


@pytest.fixture()
def ledger_orders(make_order):
    now = timezone.now()
    return {
        "cod": make_order(
            status=OrderStatus.COD,
            total_value=Decimal("100"),
            delivery_date=now + timedelta(days=2),
        ),
        "advance": make_order(
            status=OrderStatus.ADVANCE_TAKEN,
            total_value=Decimal("100"),
            advance_amount=Decimal("30"),
            delivery_date=now + timedelta(days=1),
        ),
        "completed": make_order(
            status=OrderStatus.COMPLETED,
            total_value=Decimal("50"),
            delivery_date=now - timedelta(days=1),
        ),
        "delivered": make_order(
            status=OrderStatus.DELIVERED,
            total_value=Decimal("250"),
            order_date=now - timedelta(days=90),
            delivery_date=now + timedelta(days=4),
        ),
    }


class TestDashboard:
    def test_requires_authentication(self, api_client):
        assert api_client.get("/api/v1/dashboard/").status_code == 401

    def test_statistics(self, auth_client, ledger_orders):
        body = auth_client.get("/api/v1/dashboard/").json()

        assert body["total_orders"] == 4
        assert body["cod"] == 1
        assert body["advance_taken"] == 1
        assert body["completed"] == 1
        assert body["delivered"] == 1
        assert body["total_payments"] == "330.00"
        assert body["outstanding_balance"] == "170.00"

    def test_upcoming_deliveries_skip_delivered_and_past(self, auth_client, ledger_orders):
        body = auth_client.get("/api/v1/dashboard/").json()

        upcoming = [row["id"] for row in body["upcoming_deliveries"]]
        assert upcoming == [
            str(ledger_orders["advance"].id),
            str(ledger_orders["cod"].id),
        ]
        assert body["upcoming_deliveries"][0]["customer_name"] == "Eleanor Vance"

    def test_date_range(self, auth_client, ledger_orders):
        today = timezone.localdate().isoformat()

        body = auth_client.get(
            "/api/v1/dashboard/", {"start_date": today, "end_date": today}
        ).json()

        assert body["total_orders"] == 3
        assert body["delivered"] == 0

    def test_end_date_alone_matches_order_list(self, auth_client, make_order):
        now = timezone.now()
        old = make_order(order_date=now - timedelta(days=30))
        make_order(order_date=now)
        cutoff = {"end_date": (timezone.localdate() - timedelta(days=10)).isoformat()}

        body = auth_client.get("/api/v1/dashboard/", cutoff).json()
        bucket = auth_client.get(
            "/api/v1/dashboard/orders/", {"bucket": "outstanding", **cutoff}
        ).json()
        listed = auth_client.get("/api/v1/orders/", cutoff).json()

        assert body["total_orders"] == 1
        assert [row["id"] for row in bucket["results"]] == [str(old.id)]
        assert listed["count"] == 1

    def test_store_failure_is_unavailable(self, auth_client):
        with patch.object(
            OrderDjangoRepository, "list", side_effect=DatabaseError("down")
        ):
            response = auth_client.get("/api/v1/dashboard/")

        assert response.status_code == 503
        assert response.json() == {"detail": "Failed to fetch orders."}

    def test_end_before_start(self, auth_client):
        response = auth_client.get(
            "/api/v1/dashboard/",
            {"start_date": "2026-10-19", "end_date": "2026-10-01"},
        )
        assert response.status_code == 400


class TestDashboardOrders:
    URL = "/api/v1/dashboard/orders/"

    def test_bucket_required(self, auth_client):
        response = auth_client.get(self.URL)
        assert response.status_code == 400
        assert response.json() == {"detail": "Query parameter 'bucket' is required."}

    def test_unknown_bucket(self, auth_client):
        assert auth_client.get(self.URL, {"bucket": "refunds"}).status_code == 400

    def test_outstanding(self, auth_client, ledger_orders):
        results = auth_client.get(self.URL, {"bucket": "outstanding"}).json()["results"]
        assert {row["id"] for row in results} == {
            str(ledger_orders["cod"].id),
            str(ledger_orders["advance"].id),
        }

    def test_payments(self, auth_client, ledger_orders):
        results = auth_client.get(self.URL, {"bucket": "payments"}).json()["results"]
        assert len(results) == 3
        assert results[-1]["id"] == str(ledger_orders["delivered"].id)

    def test_status(self, auth_client, ledger_orders):
        results = auth_client.get(self.URL, {"bucket": "Completed"}).json()["results"]
        assert [row["id"] for row in results] == [str(ledger_orders["completed"].id)]


class TestReportSummary:
    URL = "/api/v1/reports/summary/"

    def test_default_range_is_month_to_date(self, auth_client, ledger_orders):
        today = timezone.localdate()

        body = auth_client.get(self.URL).json()

        assert body["start_date"] == today.replace(day=1).isoformat()
        assert body["end_date"] == today.isoformat()
        assert body["summary"]["total_orders"] == 3

    def test_orders_oldest_first(self, auth_client, make_order):
        now = timezone.now()
        newer = make_order(order_date=now)
        older = make_order(order_date=now - timedelta(hours=2))
        today = timezone.localdate().isoformat()

        body = auth_client.get(self.URL, {"start_date": today}).json()

        assert [row["id"] for row in body["orders"]] == [str(older.id), str(newer.id)]

    def test_pdf(self, auth_client, ledger_orders):
        today = timezone.localdate()

        response = auth_client.get(
            "/api/v1/reports/summary/pdf/", {"start_date": today.isoformat()}
        )

        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        assert f"_Report_{today:%Y-%m-%d}_to_{today:%Y-%m-%d}.pdf" in (
            response["Content-Disposition"]
        )
        assert response.content.startswith(b"%PDF")

    def test_pdf_without_data(self, auth_client):
        response = auth_client.get(
            "/api/v1/reports/summary/pdf/",
            {"start_date": "2020-01-01", "end_date": "2020-01-31"},
        )

        assert response.status_code == 404
        assert response.json() == {
            "detail": "There is no data to generate a report for the selected date range."
        }
