import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.ledger import day_bounds
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    """Query-string filters for the order list.

    ``start_date`` / ``end_date`` bound ``order_date`` inclusively in the
    local time zone; ``end_date`` defaults to ``start_date``.
    """

    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    customer = django_filters.UUIDFilter(field_name="customer_id")
    start_date = django_filters.DateFilter(method="filter_date_range")
    end_date = django_filters.DateFilter(method="filter_date_range")

    class Meta:
        model = Order
        fields = ["status", "customer", "start_date", "end_date"]

    def filter_date_range(self, queryset, name, value):
        # Applied once in filter_queryset, where both bounds are known.
        return queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        start = self.form.cleaned_data.get("start_date")
        end = self.form.cleaned_data.get("end_date")
        if start:
            queryset = queryset.filter(order_date__range=day_bounds(start, end))
        elif end:
            queryset = queryset.filter(order_date__lte=day_bounds(end)[1])
        return queryset
