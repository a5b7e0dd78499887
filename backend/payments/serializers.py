from rest_framework import serializers

from payments.models import Payment


class PaymentIntentRequestSerializer(serializers.Serializer):
    registration_id = serializers.IntegerField()
    origin = serializers.CharField(required=False, allow_blank=True, max_length=500)


class PaymentIntentResponseSerializer(serializers.Serializer):
    checkout_url = serializers.CharField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)


class PaymentSerializer(serializers.ModelSerializer):
    registration_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "registration_id",
            "method",
            "transaction_id",
            "amount",
            "currency",
            "status",
            "paid_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
