import django_filters


class StableOrderingFilter(django_filters.OrderingFilter):
    """``?sort=`` ordering with the primary key appended as a tie-breaker.

    Accepts mongoose-style values (``-createdAt``, ``englishName``); the
    exposed names are mapped to model fields through ``fields``.  Without the
    tie-breaker, rows sharing a sort key could shift between pages.
    """

    def filter(self, qs, value):
        qs = super().filter(qs, value)
        if value:
            qs = qs.order_by(*qs.query.order_by, "-id")
        return qs
