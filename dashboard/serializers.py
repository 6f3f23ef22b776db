from rest_framework import serializers


def money_field():
    return serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)


class DashboardStatsSerializer(serializers.Serializer):
    total_members = serializers.IntegerField(read_only=True)
    total_savings = money_field()
    active_loans = money_field()
    monthly_revenue = money_field()
    pending_loans = serializers.IntegerField(read_only=True)
    loan_count = serializers.IntegerField(read_only=True)
    default_rate = serializers.FloatField(read_only=True)
    currency = serializers.CharField(read_only=True)


class LoanStatusSummarySerializer(serializers.Serializer):
    status = serializers.CharField(read_only=True)
    label = serializers.CharField(read_only=True)
    count = serializers.IntegerField(read_only=True)
    principal = money_field()


class MonthlyContributionSerializer(serializers.Serializer):
    month = serializers.CharField(read_only=True)
    label = serializers.CharField(read_only=True)
    deposits = money_field()
    loan_payments = money_field()
    total = money_field()


class SavingsVsLoansSerializer(serializers.Serializer):
    total_savings = money_field()
    active_loans = money_field()
    net_position = money_field()
    currency = serializers.CharField(read_only=True)
