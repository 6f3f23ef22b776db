from decimal import Decimal

from rest_framework import serializers

from transactions.models import Transaction


class TransactionSerializer(serializers.ModelSerializer):
    member = serializers.UUIDField(source="member_id", required=False, allow_null=True)
    loan = serializers.UUIDField(source="loan_id", required=False, allow_null=True)
    member_name = serializers.SerializerMethodField()
    loan_number = serializers.CharField(source="loan.loan_number", read_only=True)
    amount = serializers.DecimalField(
        max_digits=15, decimal_places=2, min_value=Decimal("0.01")
    )
    processed_by = serializers.CharField(max_length=255, required=False)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "member",
            "member_name",
            "loan",
            "loan_number",
            "type",
            "amount",
            "description",
            "transaction_date",
            "processed_by",
            "reference",
            "created_at",
        ]
        read_only_fields = ["id", "transaction_date", "reference", "created_at"]

    def get_member_name(self, obj):
        return obj.member.get_full_name() if obj.member else None
