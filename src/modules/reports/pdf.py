"""PDF rendering for invoices and summary reports (ReportLab platypus).

Row builders are kept separate from the drawing code: they return plain
lists of strings, which is what the tables are made of and what tests
assert against.
"""

from __future__ import annotations

from datetime import date, datetime
from html import escape
from io import BytesIO
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence
from uuid import UUID

from django.conf import settings
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from modules.core.formatting import (
    NOT_AVAILABLE,
    format_amount,
    format_date,
    format_datetime,
    format_money,
)
from modules.orders.constants import UNKNOWN_CUSTOMER
from modules.orders.ledger import DashboardStats, resolve_customer_name

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.orders.models import Order

Row = List[str]

REPORT_TITLE = "Sales & Order Report"
INVOICE_TITLE = "Invoice"


def report_columns() -> Row:
    return ["ID", "Customer", "Delivery Date", "Status", f"Value ({settings.CURRENCY})"]


PRIMARY_COLOR = colors.Color(105 / 255, 87 / 255, 227 / 255)
MARGIN = 14 * mm
CONTENT_WIDTH = A4[0] - 2 * MARGIN
REPORT_COL_WIDTHS = [28 * mm, 60 * mm, 34 * mm, 30 * mm, CONTENT_WIDTH - 152 * mm]
INVOICE_COL_WIDTHS = [CONTENT_WIDTH - 50 * mm, 50 * mm]


# ---------------------------------------------------------------------------
# File names
# ---------------------------------------------------------------------------


def report_filename(start: date, end: date) -> str:
    return f"{settings.BRAND_NAME}_Report_{start:%Y-%m-%d}_to_{end:%Y-%m-%d}.pdf"


def invoice_filename(order: Order) -> str:
    return f"Invoice_{order.display_id}.pdf"


# ---------------------------------------------------------------------------
# Row builders
# ---------------------------------------------------------------------------


def build_summary_rows(stats: DashboardStats) -> List[Row]:
    return [
        ["Total Orders", str(stats.total_orders)],
        ["Total Revenue", format_money(stats.total_payments)],
        ["Outstanding Balance", format_money(stats.outstanding_balance)],
        ["COD Orders", str(stats.cod)],
        ["Advance Taken Orders", str(stats.advance_taken)],
        ["Completed Orders", str(stats.completed)],
        ["Delivered Orders", str(stats.delivered)],
    ]


def build_report_rows(
    orders: Sequence[Order], customer_names: Mapping[UUID, str]
) -> List[Row]:
    """One detail row per order, in the order given."""
    return [
        [
            order.display_id,
            resolve_customer_name(order.customer_id, customer_names),
            format_date(order.delivery_date),
            order.status,
            format_amount(order.total_value),
        ]
        for order in orders
    ]


def build_invoice_details(order: Order, customer: Optional[Customer]) -> List[Row]:
    return [
        ["Invoice No.", order.display_id],
        ["Order Date", format_date(order.order_date)],
        ["Delivery Date", format_date(order.delivery_date)],
        ["Status", order.status],
        ["Customer", customer.full_name if customer else UNKNOWN_CUSTOMER],
        ["Phone", customer.phone if customer else NOT_AVAILABLE],
        ["Email", (customer.email if customer else "") or NOT_AVAILABLE],
        ["Address", customer.address if customer else NOT_AVAILABLE],
    ]


def build_invoice_lines(order: Order) -> List[Row]:
    return [
        ["Description", f"Amount ({settings.CURRENCY})"],
        [order.products, format_amount(order.total_value)],
        ["Total", format_amount(order.total_value)],
        ["Amount Paid", format_amount(order.amount_paid)],
        ["Balance Due", format_amount(order.balance_due)],
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _footer(label: str, generated_at: datetime):
    left = f"{label} generated on {format_datetime(generated_at)}"
    right = f"{settings.BRAND_NAME} Order Management"

    def draw(canvas, doc) -> None:
        canvas.saveState()
        canvas.setFont("Helvetica", 9)
        canvas.drawString(MARGIN, 10 * mm, left)
        canvas.drawRightString(A4[0] - MARGIN, 10 * mm, right)
        canvas.drawCentredString(A4[0] / 2, 5 * mm, f"Page {doc.page}")
        canvas.restoreState()

    return draw


def _build(
    story: list, generated_at: Optional[datetime], title: str, label: str
) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=20 * mm,
        title=title,
        author=settings.BRAND_NAME,
    )
    footer = _footer(label, generated_at or timezone.now())
    doc.build(story, onFirstPage=footer, onLaterPages=footer)
    return buffer.getvalue()


def _text(value: str, styles) -> Paragraph:
    return Paragraph(escape(value, quote=False), styles["BodyText"])


def _key_value_table(rows: List[Row], styles) -> Table:
    body = [
        [Paragraph(f"<b>{label}</b>", styles["BodyText"]), _text(value, styles)]
        for label, value in rows
    ]
    table = Table(body, colWidths=[50 * mm, CONTENT_WIDTH - 50 * mm])
    table.setStyle(
        TableStyle(
            [
                ("ROWBACKGROUNDS", (0, 0), (-1, -1), [colors.whitesmoke, colors.white]),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return table


def _grid_table(
    header: Row, rows: List[Row], styles, wrap_column: int, col_widths: List[float]
) -> Table:
    body = [header] + [
        [
            _text(cell, styles) if index == wrap_column else cell
            for index, cell in enumerate(row)
        ]
        for row in rows
    ]
    table = Table(body, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), PRIMARY_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    return table


def render_summary_report(
    summary_rows: List[Row],
    rows: List[Row],
    start: date,
    end: date,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Render the date-ranged report: summary table then one row per order."""
    styles = getSampleStyleSheet()
    story = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph(
            f"From: {format_date(start)} To: {format_date(end)}", styles["Normal"]
        ),
        Spacer(1, 8 * mm),
        Paragraph("Summary", styles["Heading2"]),
        _key_value_table(summary_rows, styles),
        Spacer(1, 8 * mm),
        Paragraph("Detailed Order List", styles["Heading2"]),
        _grid_table(
            report_columns(), rows, styles, wrap_column=1, col_widths=REPORT_COL_WIDTHS
        ),
    ]
    return _build(story, generated_at, REPORT_TITLE, "Report")


def render_invoice(
    order: Order,
    customer: Optional[Customer],
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Render a one-order invoice.  A missing *customer* prints as "Unknown"."""
    styles = getSampleStyleSheet()
    lines = build_invoice_lines(order)
    story = [
        Paragraph(settings.BRAND_NAME, styles["Title"]),
        Paragraph(INVOICE_TITLE, styles["Heading2"]),
        Spacer(1, 4 * mm),
        _key_value_table(build_invoice_details(order, customer), styles),
        Spacer(1, 8 * mm),
        _grid_table(
            lines[0], lines[1:], styles, wrap_column=0, col_widths=INVOICE_COL_WIDTHS
        ),
    ]
    if order.special_instructions:
        story += [
            Spacer(1, 6 * mm),
            Paragraph("<b>Special Instructions</b>", styles["BodyText"]),
            _text(order.special_instructions, styles),
        ]
    return _build(
        story, generated_at, f"{INVOICE_TITLE} {order.display_id}", INVOICE_TITLE
    )
