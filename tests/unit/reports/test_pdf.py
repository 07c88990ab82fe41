"""Row builders and rendering for invoices and summary reports."""

import uuid
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from modules.customers.models import Customer
from modules.orders.constants import OrderStatus
from modules.orders.ledger import DashboardStats
from modules.orders.models import Order
from modules.reports.pdf import (
    build_invoice_details,
    build_invoice_lines,
    build_report_rows,
    build_summary_rows,
    invoice_filename,
    render_invoice,
    render_summary_report,
    report_columns,
    report_filename,
)

pytestmark = pytest.mark.unit

DELIVERY = datetime(2026, 10, 9, 6, 0, tzinfo=dt_timezone.utc)


@pytest.fixture(autouse=True)
def _locale(settings):
    settings.TIME_ZONE = "Asia/Colombo"
    settings.CURRENCY = "LKR"
    settings.BRAND_NAME = "Bloomora"


def _order(**overrides) -> Order:
    data = {
        "display_id": "PT-001003",
        "customer_id": uuid.uuid4(),
        "order_date": DELIVERY,
        "delivery_date": DELIVERY,
        "products": "Large sunflower arrangement.",
        "total_value": Decimal("95.00"),
        "status": OrderStatus.ADVANCE_TAKEN,
        "advance_amount": Decimal("50.00"),
    }
    data.update(overrides)
    return Order(**data)


def _customer() -> Customer:
    return Customer(
        full_name="Chloe Price",
        phone="+1 555-0103",
        email="",
        address="789 Tulip St, Garden City",
    )


class TestFilenames:
    def test_report_filename(self):
        assert (
            report_filename(date(2026, 10, 1), date(2026, 10, 19))
            == "Bloomora_Report_2026-10-01_to_2026-10-19.pdf"
        )

    def test_invoice_filename(self):
        assert invoice_filename(_order()) == "Invoice_PT-001003.pdf"


class TestRowBuilders:
    def test_summary_rows(self):
        stats = DashboardStats(
            cod=1,
            advance_taken=1,
            completed=0,
            delivered=2,
            total_orders=4,
            total_payments=Decimal("330.00"),
            outstanding_balance=Decimal("145.00"),
            upcoming_deliveries=[],
        )
        rows = dict(build_summary_rows(stats))
        assert rows["Total Orders"] == "4"
        assert rows["Total Revenue"] == "LKR 330.00"
        assert rows["Outstanding Balance"] == "LKR 145.00"
        assert rows["Delivered Orders"] == "2"

    def test_report_rows_resolve_names(self):
        known, orphan = _order(), _order(display_id="PT-001004")
        names = {known.customer_id: "Chloe Price"}

        rows = build_report_rows([known, orphan], names)

        assert rows[0] == ["PT-001003", "Chloe Price", "Oct 9, 2026", "Advance Taken", "95.00"]
        assert rows[1][1] == "Unknown"
        assert len(rows[0]) == len(report_columns())

    def test_value_column_names_configured_currency(self, settings):
        assert report_columns()[-1] == "Value (LKR)"

        settings.CURRENCY = "USD"

        assert report_columns()[-1] == "Value (USD)"

    def test_invoice_details_with_missing_email(self):
        details = dict(build_invoice_details(_order(), _customer()))
        assert details["Customer"] == "Chloe Price"
        assert details["Email"] == "N/A"
        assert details["Delivery Date"] == "Oct 9, 2026"

    def test_invoice_details_for_deleted_customer(self):
        details = dict(build_invoice_details(_order(), None))
        assert details["Customer"] == "Unknown"
        assert details["Phone"] == "N/A"

    def test_invoice_lines_show_payment_state(self):
        lines = build_invoice_lines(_order())
        assert lines[0] == ["Description", "Amount (LKR)"]
        assert lines[-3:] == [
            ["Total", "95.00"],
            ["Amount Paid", "50.00"],
            ["Balance Due", "45.00"],
        ]


class TestRendering:
    def test_invoice_is_pdf(self):
        content = render_invoice(
            _order(special_instructions="Card: <Happy Birthday> & love"), _customer()
        )
        assert content.startswith(b"%PDF")

    def test_invoice_without_customer(self):
        assert render_invoice(_order(), None).startswith(b"%PDF")

    def test_summary_report_spans_pages(self):
        orders = [_order(display_id=f"PT-{i:06d}") for i in range(120)]
        rows = build_report_rows(orders, {})
        stats_rows = [["Total Orders", "120"]]

        content = render_summary_report(
            stats_rows, rows, date(2026, 10, 1), date(2026, 10, 19)
        )

        assert content.startswith(b"%PDF")
