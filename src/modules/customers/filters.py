import django_filters

from modules.customers.models import Customer


class CustomerFilter(django_filters.FilterSet):
    first_name = django_filters.CharFilter(
        field_name="first_name", lookup_expr="iexact"
    )
    last_name = django_filters.CharFilter(field_name="last_name", lookup_expr="iexact")
    born_after = django_filters.DateFilter(
        field_name="date_of_birth", lookup_expr="gte"
    )
    born_before = django_filters.DateFilter(
        field_name="date_of_birth", lookup_expr="lte"
    )
    town = django_filters.CharFilter(field_name="address__town", lookup_expr="iexact")

    class Meta:
        model = Customer
        fields = ["first_name", "last_name", "born_after", "born_before", "town"]
