"""Order DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``; these serializers
only render orders.  The customer name is resolved from the
``customer_names`` mapping passed in the serializer context.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.ledger import resolve_customer_name
from modules.orders.models import Order


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with derived payment amounts."""

    customer_name = serializers.SerializerMethodField()
    amount_paid = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )
    balance_due = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "display_id",
            "customer_id",
            "customer_name",
            "order_date",
            "delivery_date",
            "products",
            "total_value",
            "status",
            "advance_amount",
            "amount_paid",
            "balance_due",
            "special_instructions",
            "created_at",
            "created_by",
            "updated_at",
            "updated_by",
        ]
        read_only_fields = fields

    def get_customer_name(self, obj: Order) -> str:
        return resolve_customer_name(
            obj.customer_id, self.context.get("customer_names", {})
        )


class UpcomingDeliverySerializer(serializers.ModelSerializer):
    """Compact row for the dashboard's upcoming deliveries list."""

    customer_name = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "display_id",
            "customer_name",
            "delivery_date",
            "products",
            "status",
        ]
        read_only_fields = fields

    def get_customer_name(self, obj: Order) -> str:
        return resolve_customer_name(
            obj.customer_id, self.context.get("customer_names", {})
        )
