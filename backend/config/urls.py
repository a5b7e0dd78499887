from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from activities.api import ActivityViewSet
from payments.api import PaymentIntentView, RegistrationPaymentView, StripeWebhookView
from registrations.api import RegistrationViewSet

router = DefaultRouter()
router.register(r"activities", ActivityViewSet, basename="activity")
router.register(r"registrations", RegistrationViewSet, basename="registration")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/login/", TokenObtainPairView.as_view(), name="auth-login"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="auth-refresh"),
    path("api/payments/intents/", PaymentIntentView.as_view(), name="payment-intent"),
    path(
        "api/payments/registrations/<int:registration_id>/",
        RegistrationPaymentView.as_view(),
        name="registration-payment",
    ),
    path("api/webhooks/stripe/", StripeWebhookView.as_view(), name="stripe-webhook"),
    path("api/", include(router.urls)),
]
