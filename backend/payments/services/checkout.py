from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

import stripe
from django.conf import settings

from payments.amounts import to_minor_units
from registrations.models import Registration


@dataclass
class CheckoutSession:
    """
    The subset of a Stripe Checkout session the payment flow relies on.

    Stripe objects are narrowed to this shape as soon as they come back so
    provider-specific fields never leak into the rest of the code.
    """

    id: str
    url: str


def build_checkout_preview_url(*, origin: str, registration: Registration, session_id: str) -> str:
    return (
        f"{origin.rstrip('/')}/payment/preview?"
        f"registration={registration.id}&amount={registration.payment_amount}&session={session_id}"
    )


def _stub_checkout_session(*, registration: Registration, origin: str) -> CheckoutSession:
    session_id = f"cs_test_{uuid4().hex}"
    return CheckoutSession(
        id=session_id,
        url=build_checkout_preview_url(origin=origin, registration=registration, session_id=session_id),
    )


def _get_stripe_api_key() -> Optional[str]:
    key = getattr(settings, "STRIPE_SECRET_KEY", "")
    return key or None


def _should_use_stub() -> bool:
    if getattr(settings, "STRIPE_USE_STUB", False):
        return True
    return _get_stripe_api_key() is None


def create_checkout_session(*, registration: Registration, origin: str) -> CheckoutSession:
    """
    Create a Stripe Checkout session (or stub equivalent) for a registration.

    The registration id is written to both ``client_reference_id`` and
    ``metadata.registration_id`` so the webhook can reconcile from either.
    """

    if _should_use_stub():
        return _stub_checkout_session(registration=registration, origin=origin)

    stripe.api_key = _get_stripe_api_key()
    origin = origin.rstrip("/")
    reference = str(registration.id)

    session = stripe.checkout.Session.create(
        mode="payment",
        payment_method_types=["card"],
        line_items=[
            {
                "quantity": 1,
                "price_data": {
                    "currency": settings.PAYMENT_CURRENCY.lower(),
                    "unit_amount": to_minor_units(registration.payment_amount),
                    "product_data": {
                        "name": registration.activity.title,
                        "description": f"Student: {registration.student_name}",
                    },
                },
            }
        ],
        success_url=f"{origin}/receipt/{registration.id}",
        cancel_url=f"{origin}/payment/{registration.id}",
        client_reference_id=reference,
        metadata={
            "registration_id": reference,
            "student_name": registration.student_name,
        },
    )
    return CheckoutSession(id=session.id, url=session.url)
