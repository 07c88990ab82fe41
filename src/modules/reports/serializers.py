"""Output serializers for the dashboard and the report preview."""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.serializers import UpcomingDeliverySerializer


class _Money(serializers.DecimalField):
    def __init__(self, **kwargs) -> None:
        super().__init__(max_digits=14, decimal_places=2, read_only=True, **kwargs)


class ReportTotalsSerializer(serializers.Serializer):
    """Counters and money totals shared by the dashboard and the report."""

    total_orders = serializers.IntegerField(read_only=True)
    total_payments = _Money()
    outstanding_balance = _Money()
    cod = serializers.IntegerField(read_only=True)
    advance_taken = serializers.IntegerField(read_only=True)
    completed = serializers.IntegerField(read_only=True)
    delivered = serializers.IntegerField(read_only=True)


class DashboardSerializer(ReportTotalsSerializer):
    upcoming_deliveries = serializers.SerializerMethodField()

    def get_upcoming_deliveries(self, obj) -> list:
        return UpcomingDeliverySerializer(
            obj.upcoming_deliveries, many=True, context=self.context
        ).data
