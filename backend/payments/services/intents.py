from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

import stripe
from django.conf import settings
from django.db import transaction

from core.exceptions import AlreadyCompleted, NotFound, UpstreamFailure
from payments.models import Payment
from payments.services.checkout import create_checkout_session
from registrations.services.registrations import get_registration

logger = logging.getLogger(__name__)


@dataclass
class PaymentIntent:
    checkout_url: str
    amount: Decimal


def create_payment_intent(*, registration_id: int, origin: str) -> PaymentIntent:
    """
    Start (or restart) checkout for a registration.

    Re-invoking for the same pending registration reuses its single Payment
    row and points it at the newest session. Concurrent calls are not
    serialized against each other (the last session written wins), but a
    payment completed meanwhile is never reopened.
    """

    registration = get_registration(registration_id)

    existing = Payment.objects.filter(registration=registration).first()
    if existing is not None and existing.status == Payment.COMPLETED:
        raise AlreadyCompleted()

    if registration.activity is None:
        raise NotFound("Activity not found.")

    try:
        session = create_checkout_session(registration=registration, origin=origin)
    except stripe.StripeError as exc:
        logger.exception("Failed to create Stripe checkout session for registration %s: %s", registration.id, exc)
        raise UpstreamFailure() from exc

    with transaction.atomic():
        # A webhook may have completed an earlier session while Stripe was called.
        current = Payment.objects.select_for_update().filter(registration=registration).first()
        if current is not None and current.status == Payment.COMPLETED:
            logger.warning(
                "Registration %s was paid while session %s was being created",
                registration.id,
                session.id,
            )
            raise AlreadyCompleted()

        payment, created = Payment.objects.update_or_create(
            registration=registration,
            defaults={
                "status": Payment.PENDING,
                "transaction_id": session.id,
            },
            create_defaults={
                "status": Payment.PENDING,
                "transaction_id": session.id,
                "method": Payment.METHOD_STRIPE,
                "currency": settings.PAYMENT_CURRENCY,
                "amount": registration.payment_amount,
            },
        )
    logger.info(
        "%s payment %s for registration %s with session %s",
        "Created" if created else "Reset",
        payment.id,
        registration.id,
        session.id,
    )
    return PaymentIntent(checkout_url=session.url, amount=registration.payment_amount)
