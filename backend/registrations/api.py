from django.db import transaction
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.pagination import PagedResultsPagination
from core.request import client_ip
from registrations.filters import RegistrationFilter
from registrations.models import Registration
from registrations.serializers import (
    BatchDeleteSerializer,
    RegistrationCreateSerializer,
    RegistrationSerializer,
)
from registrations.services.registrations import create_registration, get_registration


class RegistrationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Public submission/lookup of registrations and the admin search screen.
    """

    serializer_class = RegistrationSerializer
    pagination_class = PagedResultsPagination
    filterset_class = RegistrationFilter
    search_fields = ["student_name", "guardian_name", "guardian_phone", "student_school"]
    ordering_fields = ["created_at", "payment_amount"]

    def get_permissions(self):
        if self.action in {"create", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def get_queryset(self):
        return Registration.objects.select_related("activity").order_by("-created_at", "-id")

    def get_object(self):
        registration = get_registration(self.kwargs["pk"])
        self.check_object_permissions(self.request, registration)
        return registration

    def create(self, request, *args, **kwargs):
        serializer = RegistrationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        activity_id = data.pop("activity_id")

        registration = create_registration(
            activity_id=activity_id,
            data=data,
            ip_address=client_ip(request),
        )
        return Response({"registration_id": registration.id}, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="batch-delete")
    def batch_delete(self, request):
        serializer = BatchDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            deleted, _ = Registration.objects.filter(id__in=serializer.validated_data["ids"]).delete()
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)
