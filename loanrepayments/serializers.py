from decimal import Decimal

from rest_framework import serializers

from loanrepayments.models import Repayment


class RepaymentSerializer(serializers.ModelSerializer):
    loan = serializers.UUIDField(source="loan_id")
    loan_number = serializers.CharField(source="loan.loan_number", read_only=True)
    member_name = serializers.CharField(
        source="loan.member.get_full_name", read_only=True
    )
    processed_by = serializers.UUIDField(source="processed_by.id", read_only=True)
    processor_name = serializers.CharField(
        source="processed_by.get_full_name", read_only=True
    )
    amount = serializers.DecimalField(
        max_digits=15, decimal_places=2, min_value=Decimal("0.01")
    )

    class Meta:
        model = Repayment
        fields = [
            "id",
            "loan",
            "loan_number",
            "member_name",
            "amount",
            "payment_method",
            "processed_by",
            "processor_name",
            "payment_date",
            "notes",
            "reference",
            "created_at",
        ]
        read_only_fields = ["id", "payment_date", "reference", "created_at"]
