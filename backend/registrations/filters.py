import django_filters

from registrations.models import Registration


class RegistrationFilter(django_filters.FilterSet):
    activity = django_filters.NumberFilter(field_name="activity_id")
    student_name = django_filters.CharFilter(field_name="student_name", lookup_expr="icontains")
    payment_status = django_filters.ChoiceFilter(choices=Registration.PAYMENT_STATUSES)
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = Registration
        fields = ["activity", "student_name", "payment_status", "start_date", "end_date"]
