from decimal import Decimal

from rest_framework import serializers

from loans.models import Loan
from loanrepayments.serializers import RepaymentSerializer


class LoanSerializer(serializers.ModelSerializer):
    member = serializers.UUIDField(source="member_id", required=False)
    member_number = serializers.CharField(
        source="member.member_number", read_only=True
    )
    member_name = serializers.CharField(source="member.get_full_name", read_only=True)
    approver_name = serializers.SerializerMethodField()
    principal = serializers.DecimalField(
        max_digits=15, decimal_places=2, min_value=Decimal("0.01")
    )
    interest_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0")
    )
    term_months = serializers.IntegerField(min_value=1)
    repayments = RepaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Loan
        fields = [
            "id",
            "member",
            "member_number",
            "member_name",
            "loan_number",
            "principal",
            "interest_rate",
            "term_months",
            "disbursement_date",
            "due_date",
            "status",
            "balance",
            "intended_purpose",
            "approved_by",
            "approver_name",
            "approved_at",
            "reference",
            "created_at",
            "updated_at",
            "repayments",
        ]
        read_only_fields = [
            "id",
            "disbursement_date",
            "due_date",
            "status",
            "balance",
            "approved_by",
            "approved_at",
            "reference",
            "created_at",
            "updated_at",
        ]
        # Duplicate loan numbers are reported by LoanService as conflicts.
        extra_kwargs = {
            "loan_number": {"required": False, "validators": []},
        }

    def get_approver_name(self, obj):
        return obj.approved_by.get_full_name() if obj.approved_by else None


class LoanStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Loan.STATUS_CHOICES)
