from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminOrManager
from dashboard.serializers import (
    DashboardStatsSerializer,
    LoanStatusSummarySerializer,
    MonthlyContributionSerializer,
    SavingsVsLoansSerializer,
)
from dashboard.services import DashboardService


class DashboardStatsView(APIView):
    permission_classes = (IsAdminOrManager,)

    def get(self, request):
        stats = DashboardService.get_stats(request.user)
        return Response(DashboardStatsSerializer(stats).data)


class LoansByStatusView(APIView):
    permission_classes = (IsAdminOrManager,)

    def get(self, request):
        rows = DashboardService.loans_by_status(request.user)
        return Response(LoanStatusSummarySerializer(rows, many=True).data)


class MonthlyContributionsView(APIView):
    """
    GET /dashboard/monthly-contributions/?months=6
    """

    permission_classes = (IsAdminOrManager,)

    def get(self, request):
        months = request.query_params.get("months", 6)
        try:
            months = int(months)
        except (TypeError, ValueError):
            raise ValidationError({"months": "Months must be a whole number."})
        if not 1 <= months <= 24:
            raise ValidationError({"months": "Months must be between 1 and 24."})

        rows = DashboardService.monthly_contributions(request.user, months=months)
        return Response(MonthlyContributionSerializer(rows, many=True).data)


class SavingsVsLoansView(APIView):
    permission_classes = (IsAdminOrManager,)

    def get(self, request):
        figures = DashboardService.savings_vs_loans(request.user)
        return Response(SavingsVsLoansSerializer(figures).data)
