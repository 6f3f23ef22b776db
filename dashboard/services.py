from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.db.models import Count, Q, Sum
from django.db.models.functions import ExtractMonth, ExtractYear
from django.utils import timezone

from accounts.models import Member
from accounts.permissions import STAFF_ROLES, require_role
from loans.models import Loan
from savings.models import Savings
from transactions.models import Transaction


ZERO = Decimal("0.00")

OUTSTANDING_STATUSES = (Loan.ACTIVE, Loan.OVERDUE)
REVENUE_TYPES = (Transaction.FEE, Transaction.LOAN_PAYMENT)


def total(queryset, field="amount"):
    return queryset.aggregate(total=Sum(field))["total"] or ZERO


def month_start(moment):
    return timezone.localtime(moment).replace(
        day=1, hour=0, minute=0, second=0, microsecond=0
    )


class DashboardService:
    """Read-only figures for the dashboard and the report charts."""

    @classmethod
    def get_stats(cls, actor):
        require_role(actor, *STAFF_ROLES)

        loans = Loan.objects.aggregate(
            loan_total=Count("id"),
            defaulted=Count("id", filter=Q(status=Loan.DEFAULTED)),
            pending=Count("id", filter=Q(status=Loan.PENDING)),
            active=Count("id", filter=Q(status=Loan.ACTIVE)),
            outstanding=Sum("balance", filter=Q(status__in=OUTSTANDING_STATUSES)),
        )

        default_rate = Decimal("0.0")
        if loans["loan_total"]:
            default_rate = (
                Decimal(loans["defaulted"]) * 100 / Decimal(loans["loan_total"])
            ).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)

        start = month_start(timezone.now())
        monthly_revenue = total(
            Transaction.objects.filter(
                type__in=REVENUE_TYPES,
                transaction_date__gte=start,
                transaction_date__lt=start + relativedelta(months=1),
            )
        )

        return {
            "total_members": Member.objects.filter(is_active=True).count(),
            "total_savings": total(Savings.objects.all(), "balance"),
            "active_loans": loans["outstanding"] or ZERO,
            "monthly_revenue": monthly_revenue,
            "pending_loans": loans["pending"],
            "loan_count": loans["active"],
            "default_rate": float(default_rate),
            "currency": settings.SACCO_CURRENCY,
        }

    @classmethod
    def loans_by_status(cls, actor):
        require_role(actor, *STAFF_ROLES)

        queryset = (
            Loan.objects.order_by()
            .values("status")
            .annotate(count=Count("id"), principal=Sum("principal"))
        )
        rows = {row["status"]: row for row in queryset}
        return [
            {
                "status": status,
                "label": label,
                "count": rows.get(status, {}).get("count", 0),
                "principal": rows.get(status, {}).get("principal") or ZERO,
            }
            for status, label in Loan.STATUS_CHOICES
        ]

    @classmethod
    def monthly_contributions(cls, actor, months=6):
        """
        Deposits and loan payments for each of the last ``months`` calendar
        months, oldest first. The current month is included.
        """
        require_role(actor, *STAFF_ROLES)

        current = month_start(timezone.now())
        first = current - relativedelta(months=months - 1)

        rows = (
            Transaction.objects.filter(
                transaction_date__gte=first,
                type__in=(Transaction.DEPOSIT, Transaction.LOAN_PAYMENT),
            )
            .annotate(
                year=ExtractYear("transaction_date"),
                month=ExtractMonth("transaction_date"),
            )
            .values("year", "month", "type")
            .annotate(total=Sum("amount"))
            .order_by()
        )
        totals = {(row["year"], row["month"], row["type"]): row["total"] for row in rows}

        results = []
        for offset in range(months):
            period = first + relativedelta(months=offset)
            deposits = totals.get((period.year, period.month, Transaction.DEPOSIT), ZERO)
            payments = totals.get(
                (period.year, period.month, Transaction.LOAN_PAYMENT), ZERO
            )
            results.append(
                {
                    "month": period.strftime("%Y-%m"),
                    "label": period.strftime("%b %Y"),
                    "deposits": deposits,
                    "loan_payments": payments,
                    "total": deposits + payments,
                }
            )
        return results

    @classmethod
    def savings_vs_loans(cls, actor):
        require_role(actor, *STAFF_ROLES)

        savings = total(Savings.objects.all(), "balance")
        loans = total(Loan.objects.filter(status__in=OUTSTANDING_STATUSES), "balance")
        return {
            "total_savings": savings,
            "active_loans": loans,
            "net_position": savings - loans,
            "currency": settings.SACCO_CURRENCY,
        }
