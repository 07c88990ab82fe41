"""Telegram message bodies (HTML parse mode).

Free text is escaped for ``&``, ``<`` and ``>``; optional fields that are
empty render as ``N/A``.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING, Optional

from modules.core.formatting import NOT_AVAILABLE, format_date, format_money

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.orders.models import Order


def _text(value: Optional[str]) -> str:
    return escape(value or "", quote=False)


def _optional(value: Optional[str]) -> str:
    return _text(value) or NOT_AVAILABLE


def _customer_message(heading: str, customer: Customer, actor: str) -> str:
    return (
        f"{heading}\n"
        "\n"
        f"<b>Name:</b> {_text(customer.full_name)}\n"
        f"<b>Phone:</b> {_text(customer.phone)}\n"
        f"<b>Email:</b> {_optional(customer.email)}\n"
        f"<b>Address:</b> {_text(customer.address)}\n"
        f"<b>Preferences:</b> {_optional(customer.preferences)}\n"
        f"<b>Action By:</b> {_optional(actor)}"
    )


def _order_message(heading: str, order: Order, customer_name: str, actor: str) -> str:
    return (
        f"{heading}\n"
        "\n"
        f"<b>Order ID:</b> {_text(order.display_id)}\n"
        f"<b>Customer:</b> {_text(customer_name)}\n"
        f"<b>Delivery Date:</b> {format_date(order.delivery_date)}\n"
        f"<b>Total Value:</b> {format_money(order.total_value)}\n"
        f"<b>Status:</b> {_text(order.status)}\n"
        "\n"
        "<b>Products:</b>\n"
        f"{_text(order.products)}\n"
        "\n"
        "<b>Instructions:</b>\n"
        f"{_optional(order.special_instructions)}\n"
        "\n"
        f"<b>Action By:</b> {_optional(actor)}"
    )


def format_new_customer_message(customer: Customer) -> str:
    return _customer_message(
        "✨ <b>New Customer Added</b> ✨", customer, customer.created_by
    )


def format_updated_customer_message(customer: Customer) -> str:
    return _customer_message(
        "✏️ <b>Customer Details Updated</b> ✏️", customer, customer.updated_by
    )


def format_new_order_message(order: Order, customer_name: str) -> str:
    return _order_message(
        "🎉 <b>New Order Added</b> 🎉", order, customer_name, order.created_by
    )


def format_updated_order_message(order: Order, customer_name: str) -> str:
    return _order_message(
        "✏️ <b>Order Updated</b> ✏️", order, customer_name, order.updated_by
    )
