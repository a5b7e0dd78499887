from rest_framework import serializers

from registrations.models import Registration


class RegistrationCreateSerializer(serializers.Serializer):
    activity_id = serializers.IntegerField()

    student_name = serializers.CharField(max_length=100)
    student_gender = serializers.ChoiceField(choices=Registration.GENDERS)
    student_school = serializers.CharField(max_length=200)
    student_grade = serializers.CharField(max_length=50)
    student_class = serializers.CharField(max_length=50)
    student_id_card = serializers.CharField(max_length=18, required=False, allow_blank=True)

    guardian_name = serializers.CharField(max_length=100)
    guardian_phone = serializers.CharField(max_length=20)

    emergency_contact_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    emergency_contact_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True)


class RegistrationSerializer(serializers.ModelSerializer):
    activity_id = serializers.IntegerField(read_only=True, allow_null=True)
    activity_title = serializers.CharField(source="activity.title", read_only=True, default="")

    class Meta:
        model = Registration
        fields = [
            "id",
            "activity_id",
            "activity_title",
            "student_name",
            "student_gender",
            "student_school",
            "student_grade",
            "student_class",
            "student_id_card",
            "guardian_name",
            "guardian_phone",
            "emergency_contact_name",
            "emergency_contact_phone",
            "remarks",
            "payment_amount",
            "payment_status",
            "ip_address",
            "location",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BatchDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
