import django_filters

from modules.core.filters import StableOrderingFilter
from modules.crackers.models import Cracker


class CrackerFilter(django_filters.FilterSet):
    onlyActive = django_filters.BooleanFilter(method="filter_only_active")  # noqa: N815
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    sort = StableOrderingFilter(
        fields=(
            ("created_at", "createdAt"),
            ("updated_at", "updatedAt"),
            ("english_name", "englishName"),
            ("original_rate", "originalRate"),
            ("discount_rate", "discountRate"),
            ("category", "category"),
        )
    )

    class Meta:
        model = Cracker
        fields = ["onlyActive", "category"]

    def filter_only_active(self, queryset, name, value):
        # onlyActive=false means "no filter", not "inactive only".
        return queryset.filter(is_active=True) if value else queryset
