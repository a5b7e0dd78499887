import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import NotFound, Unauthorized
from payments.models import Payment
from payments.serializers import (
    PaymentIntentRequestSerializer,
    PaymentIntentResponseSerializer,
    PaymentSerializer,
)
from payments.services.intents import create_payment_intent
from payments.services.webhooks import handle_event, verify_webhook

logger = logging.getLogger(__name__)


def _resolve_origin(request, requested: str) -> str:
    return requested or request.META.get("HTTP_ORIGIN") or settings.FRONTEND_URL


class PaymentIntentView(APIView):
    """Create a Stripe Checkout session for a registration and return its URL."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = PaymentIntentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        intent = create_payment_intent(
            registration_id=serializer.validated_data["registration_id"],
            origin=_resolve_origin(request, serializer.validated_data.get("origin", "")),
        )
        payload = PaymentIntentResponseSerializer(intent).data
        return Response(payload, status=status.HTTP_200_OK)


class RegistrationPaymentView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, registration_id, *args, **kwargs):
        payment = Payment.objects.filter(registration_id=registration_id).first()
        if payment is None:
            raise NotFound("Payment not found.")
        return Response(PaymentSerializer(payment).data)


class StripeWebhookView(APIView):
    """Receive Stripe checkout events and reconcile registration payments."""

    permission_classes: list = []
    authentication_classes: list = []

    def post(self, request, *args, **kwargs):
        payload = request.body
        sig_header = request.META.get("HTTP_STRIPE_SIGNATURE")

        try:
            event = verify_webhook(payload, sig_header, settings.STRIPE_WEBHOOK_SECRET)
        except Unauthorized as exc:
            if exc.status_code >= 500:
                logger.error("Stripe webhook rejected: %s", exc.detail)
            else:
                logger.warning("Stripe webhook rejected: %s", exc.detail)
            return Response({"detail": exc.detail}, status=exc.status_code)

        if event.is_test:
            logger.info("Stripe test event %s acknowledged", event.id)
            return Response({"verified": True}, status=status.HTTP_200_OK)

        logger.info("Received Stripe event %s (%s)", event.type, event.id)
        try:
            handle_event(event)
        except DatabaseError:
            logger.exception("Error processing Stripe event %s (%s)", event.type, event.id)
            return Response(
                {"detail": "Error processing webhook."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"received": True}, status=status.HTTP_200_OK)
