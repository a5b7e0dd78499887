from django.contrib import admin

from payments.models import Payment

from .models import Registration


class PaymentInline(admin.StackedInline):
    model = Payment
    extra = 0
    can_delete = False
    readonly_fields = (
        "method",
        "transaction_id",
        "amount",
        "currency",
        "status",
        "payment_data",
        "paid_at",
        "created_at",
    )


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = (
        "student_name",
        "activity",
        "guardian_name",
        "guardian_phone",
        "payment_amount",
        "payment_status",
        "created_at",
    )
    list_filter = ("payment_status", "activity")
    search_fields = ("student_name", "guardian_name", "guardian_phone", "student_school")
    readonly_fields = ("payment_amount", "payment_status", "ip_address", "created_at", "updated_at")
    inlines = [PaymentInline]
