import django_filters

from modules.core.filters import StableOrderingFilter
from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(
        field_name="status", choices=OrderStatus.choices
    )
    sort = StableOrderingFilter(
        fields=(
            ("created_at", "createdAt"),
            ("order_date", "orderDate"),
            ("order_number", "orderNumber"),
            ("total_rate", "totalRate"),
            ("status", "status"),
        )
    )

    class Meta:
        model = Order
        fields = ["status"]
