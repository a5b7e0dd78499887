from rest_framework import mixins, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.exceptions import NotFound

from .models import Activity
from .serializers import ActivitySerializer


class ActivityViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Public browsing of open activities plus admin management.

    Activities are never deleted through the API; closing one is done by
    clearing ``is_active``.
    """

    serializer_class = ActivitySerializer
    queryset = Activity.objects.all()
    search_fields = ["title", "description"]
    ordering_fields = ["created_at", "price"]

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def get_queryset(self):
        queryset = Activity.objects.all()
        if self.action == "list":
            return queryset.filter(is_active=True)
        return queryset

    def get_object(self):
        try:
            activity = self.get_queryset().get(pk=self.kwargs["pk"])
        except (Activity.DoesNotExist, ValueError):
            raise NotFound("Activity not found.")
        self.check_object_permissions(self.request, activity)
        return activity

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    @action(detail=False, methods=["get"], url_path="all")
    def list_all(self, request):
        queryset = self.filter_queryset(Activity.objects.all())
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)
