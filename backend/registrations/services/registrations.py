from __future__ import annotations

import logging
from typing import Any, Dict

from activities.models import Activity
from core.exceptions import InvalidState, NotFound
from registrations.models import Registration

logger = logging.getLogger(__name__)


def create_registration(*, activity_id: int, data: Dict[str, Any], ip_address: str = "") -> Registration:
    """
    Create a pending registration against an open activity.

    The payment amount is fixed here from the activity's current price and is
    never recomputed afterwards. Duplicate submissions produce duplicate rows.
    """

    try:
        activity = Activity.objects.get(pk=activity_id)
    except Activity.DoesNotExist:
        raise NotFound("Activity not found.")

    if not activity.is_active:
        raise InvalidState("Activity is closed.")

    registration = Registration.objects.create(
        activity=activity,
        payment_amount=activity.price,
        payment_status=Registration.PENDING,
        ip_address=ip_address,
        **data,
    )
    logger.info(
        "Registration %s created for activity %s (amount %s)",
        registration.id,
        activity.id,
        registration.payment_amount,
    )
    return registration


def get_registration(registration_id) -> Registration:
    try:
        return Registration.objects.select_related("activity").get(pk=registration_id)
    except (Registration.DoesNotExist, ValueError):
        raise NotFound("Registration not found.")
