from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from activities.models import Activity

User = get_user_model()

SUPERUSER_USERNAME = "admin"
SUPERUSER_EMAIL = "admin@portal.test"
SUPERUSER_PASSWORD = "AdminPortal123!"


class Command(BaseCommand):
    help = "Populate the local development database with sample data."

    def handle(self, *args, **options):
        if not settings.DEBUG:
            raise CommandError("Refusing to seed data while DEBUG is False.")

        with transaction.atomic():
            self.stdout.write(self.style.MIGRATE_HEADING("Ensuring admin superuser"))
            admin_user = self._ensure_superuser()

            self.stdout.write(self.style.MIGRATE_HEADING("Creating activities"))
            self._ensure_activity(
                title="Summer Research Study Trip",
                price=Decimal("980.00"),
                created_by=admin_user,
                contact_person="Ms. Li",
                contact_phone="13800000000",
                itinerary="Day 1: campus visit\nDay 2: lab workshop\nDay 3: presentations",
            )
            self._ensure_activity(
                title="Autumn Museum Workshop",
                price=Decimal("320.00"),
                created_by=admin_user,
                is_active=False,
            )

        self.stdout.write(self.style.SUCCESS("Development seed data created."))
        self.stdout.write(self.style.NOTICE(f"Admin superuser {SUPERUSER_USERNAME} password: {SUPERUSER_PASSWORD}"))

    def _ensure_activity(self, *, title: str, price: Decimal, created_by, is_active: bool = True, **extra) -> Activity:
        activity, created = Activity.objects.get_or_create(
            title=title,
            defaults={"price": price, "is_active": is_active, "created_by": created_by, **extra},
        )
        if created:
            self.stdout.write(self.style.NOTICE(f"Added activity {title} ({price})"))
        return activity

    def _ensure_superuser(self):
        user, created = User.objects.get_or_create(
            username=SUPERUSER_USERNAME,
            defaults={
                "email": SUPERUSER_EMAIL,
                "is_staff": True,
                "is_superuser": True,
            },
        )
        flag_updates = {}
        if not user.is_staff:
            flag_updates["is_staff"] = True
        if not user.is_superuser:
            flag_updates["is_superuser"] = True
        if flag_updates:
            for attr, value in flag_updates.items():
                setattr(user, attr, value)
            user.save(update_fields=list(flag_updates.keys()))
        if created or not user.has_usable_password():
            user.set_password(SUPERUSER_PASSWORD)
            user.save(update_fields=["password"])
        return user
