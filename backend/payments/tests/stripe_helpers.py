import hashlib
import hmac
import json
import time

WEBHOOK_SECRET = "whsec_test_secret"


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a ``Stripe-Signature`` header the way Stripe signs webhook deliveries."""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def checkout_completed_event(
    *,
    registration_id=None,
    metadata_registration_id=None,
    event_id="evt_1Pcheckout",
    session_id="cs_live_123",
    payment_intent="pi_live_123",
    amount_total=98000,
    currency="cny",
) -> str:
    metadata = {}
    if metadata_registration_id is not None:
        metadata["registration_id"] = str(metadata_registration_id)
    session = {
        "id": session_id,
        "object": "checkout.session",
        "client_reference_id": str(registration_id) if registration_id is not None else None,
        "metadata": metadata,
        "payment_intent": payment_intent,
        "amount_total": amount_total,
        "currency": currency,
    }
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": session},
        }
    )


def event_payload(event_type: str, data_object: dict, event_id: str = "evt_1Pother") -> str:
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "data": {"object": data_object},
        }
    )
