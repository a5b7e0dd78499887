"""
Stripe webhook verification and payment reconciliation.

Verification is independent of the HTTP layer: it takes the raw body, the
``Stripe-Signature`` header value and the configured secret, and returns a
plain ``WebhookEvent``. Reconciliation is idempotent so Stripe's redelivery of
the same event leaves state unchanged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import stripe
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework import status

from core.exceptions import Unauthorized
from payments.amounts import from_minor_units
from payments.models import Payment
from registrations.models import Registration

logger = logging.getLogger(__name__)

TEST_EVENT_PREFIX = "evt_test_"

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"


@dataclass
class WebhookEvent:
    id: str
    type: str
    data_object: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_test(self) -> bool:
        return self.id.startswith(TEST_EVENT_PREFIX)


def verify_webhook(payload: bytes, signature: Optional[str], secret: Optional[str]) -> WebhookEvent:
    """Verify a Stripe delivery and return the decoded event; raises ``Unauthorized``."""

    if not signature:
        raise Unauthorized("Missing signature.")
    if not secret:
        raise Unauthorized(
            "Webhook secret not configured.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    try:
        stripe.Webhook.construct_event(payload, signature, secret)
    except ValueError as exc:
        raise Unauthorized(f"Invalid payload: {exc}") from exc
    except stripe.SignatureVerificationError as exc:
        raise Unauthorized(f"Webhook Error: {exc}") from exc

    body = json.loads(payload)
    data = body.get("data") or {}
    return WebhookEvent(
        id=body.get("id") or "",
        type=body.get("type") or "",
        data_object=data.get("object") or {},
    )


def registration_id_from_session(session: Dict[str, Any]) -> Optional[int]:
    metadata = session.get("metadata") or {}
    raw = session.get("client_reference_id") or metadata.get("registration_id")
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def complete_checkout_session(session: Dict[str, Any]) -> Optional[Payment]:
    registration_id = registration_id_from_session(session)
    if registration_id is None:
        logger.error("Stripe session %s carries no registration id", session.get("id"))
        return None

    payment_intent = session.get("payment_intent") or ""
    snapshot = {
        "session_id": session.get("id"),
        "payment_intent_id": payment_intent or None,
    }

    with transaction.atomic():
        registration = (
            Registration.objects.select_for_update()
            .filter(pk=registration_id)
            .first()
        )
        if registration is None:
            logger.warning("Stripe session %s references unknown registration %s", session.get("id"), registration_id)
            return None

        if registration.payment_status != Registration.PAID:
            registration.payment_status = Registration.PAID
            registration.save(update_fields=["payment_status", "updated_at"])

        payment = Payment.objects.select_for_update().filter(registration=registration).first()
        if payment is None:
            currency = (session.get("currency") or settings.PAYMENT_CURRENCY).upper()
            payment = Payment.objects.create(
                registration=registration,
                method=Payment.METHOD_STRIPE,
                amount=from_minor_units(session.get("amount_total"), default=registration.payment_amount),
                currency=currency,
                status=Payment.COMPLETED,
                transaction_id=payment_intent,
                paid_at=timezone.now(),
                payment_data=snapshot,
            )
        else:
            changed_fields: list[str] = []
            updates = {
                "status": Payment.COMPLETED,
                "transaction_id": payment_intent,
                "payment_data": snapshot,
            }
            for attr, value in updates.items():
                if getattr(payment, attr) != value:
                    setattr(payment, attr, value)
                    changed_fields.append(attr)
            if payment.paid_at is None:
                payment.paid_at = timezone.now()
                changed_fields.append("paid_at")
            if changed_fields:
                changed_fields.append("updated_at")
                payment.save(update_fields=changed_fields)

    logger.info("Payment completed for registration %s", registration_id)
    return payment


def handle_event(event: WebhookEvent) -> None:
    if event.type == CHECKOUT_SESSION_COMPLETED:
        complete_checkout_session(event.data_object)
    elif event.type == PAYMENT_INTENT_SUCCEEDED:
        logger.info("PaymentIntent succeeded: %s", event.data_object.get("id"))
    elif event.type == PAYMENT_INTENT_FAILED:
        logger.warning("PaymentIntent failed: %s", event.data_object.get("id"))
    else:
        logger.info("Unhandled Stripe event type %s (%s)", event.type, event.id)
