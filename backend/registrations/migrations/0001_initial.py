import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("activities", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_name", models.CharField(max_length=100)),
                ("student_gender", models.CharField(choices=[("男", "Male"), ("女", "Female")], max_length=2)),
                ("student_school", models.CharField(max_length=200)),
                ("student_grade", models.CharField(max_length=50)),
                ("student_class", models.CharField(max_length=50)),
                ("student_id_card", models.CharField(blank=True, max_length=18)),
                ("guardian_name", models.CharField(max_length=100)),
                ("guardian_phone", models.CharField(max_length=20)),
                ("emergency_contact_name", models.CharField(blank=True, max_length=100)),
                ("emergency_contact_phone", models.CharField(blank=True, max_length=20)),
                ("remarks", models.TextField(blank=True)),
                ("payment_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("paid", "Paid"), ("refunded", "Refunded")],
                        default="pending",
                        max_length=12,
                    ),
                ),
                ("ip_address", models.CharField(blank=True, max_length=50)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "activity",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="registrations",
                        to="activities.activity",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
