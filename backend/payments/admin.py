from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("registration", "method", "amount", "currency", "status", "paid_at")
    list_filter = ("status", "method")
    search_fields = ("transaction_id", "registration__student_name")
    readonly_fields = ("payment_data", "paid_at", "created_at", "updated_at")

    def has_delete_permission(self, request, obj=None):
        return False
