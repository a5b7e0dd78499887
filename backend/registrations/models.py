from django.db import models


class Registration(models.Model):
    """One student's enrollment attempt for one activity."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    PAYMENT_STATUSES = [
        (PENDING, "Pending"),
        (PAID, "Paid"),
        (REFUNDED, "Refunded"),
    ]

    MALE = "男"
    FEMALE = "女"
    GENDERS = [
        (MALE, "Male"),
        (FEMALE, "Female"),
    ]

    activity = models.ForeignKey(
        "activities.Activity",
        on_delete=models.SET_NULL,
        null=True,
        related_name="registrations",
    )

    student_name = models.CharField(max_length=100)
    student_gender = models.CharField(max_length=2, choices=GENDERS)
    student_school = models.CharField(max_length=200)
    student_grade = models.CharField(max_length=50)
    student_class = models.CharField(max_length=50)
    student_id_card = models.CharField(max_length=18, blank=True)

    guardian_name = models.CharField(max_length=100)
    guardian_phone = models.CharField(max_length=20)

    emergency_contact_name = models.CharField(max_length=100, blank=True)
    emergency_contact_phone = models.CharField(max_length=20, blank=True)

    remarks = models.TextField(blank=True)

    # Copied from the activity price when the registration is created.
    payment_amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_status = models.CharField(max_length=12, choices=PAYMENT_STATUSES, default=PENDING)

    ip_address = models.CharField(max_length=50, blank=True)
    location = models.CharField(max_length=200, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        title = self.activity.title if self.activity_id else "(removed activity)"
        return f"{self.student_name} - {title}"
