import json
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from loanrepayments.services import RepaymentService
from loans.models import Loan
from loans.services import LoanService
from transactions.models import Transaction
from transactions.services import TransactionService

User = get_user_model()


class DashboardTests(APITestCase):
    def setUp(self):
        self.manager = User.objects.create_user(
            member_number="MGR001",
            password="password",
            first_name="Peter",
            last_name="Okello",
            phone="0700000002",
            role=User.ROLE_MANAGER,
        )
        self.member = User.objects.create_user(
            member_number="MBR001",
            password="password",
            first_name="Sarah",
            last_name="Achieng",
            phone="0700000003",
        )
        self.client.force_authenticate(user=self.manager)

    def make_loan(self, principal, status_=None):
        loan = LoanService.originate(
            self.manager, self.member, principal, Decimal("12.00"), 12
        )
        if status_ in (Loan.ACTIVE, Loan.DEFAULTED):
            LoanService.approve(self.manager, loan.id)
            LoanService.disburse(self.manager, loan.id)
        if status_ == Loan.DEFAULTED:
            LoanService.transition(self.manager, loan.id, Loan.DEFAULTED)
        loan.refresh_from_db()
        return loan

    def test_empty_dashboard(self):
        response = self.client.get("/api/v1/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_members"], 2)
        self.assertEqual(Decimal(response.data["total_savings"]), Decimal("0"))
        self.assertEqual(Decimal(response.data["active_loans"]), Decimal("0"))
        self.assertEqual(response.data["pending_loans"], 0)
        self.assertEqual(response.data["default_rate"], 0.0)

    @override_settings(SACCO_CURRENCY="KES")
    def test_stats(self):
        TransactionService.record(
            self.manager,
            type=Transaction.DEPOSIT,
            amount=Decimal("200000"),
            description="Savings deposit",
            member=self.member,
        )
        TransactionService.record(
            self.manager,
            type=Transaction.FEE,
            amount=Decimal("5000"),
            description="Membership fee",
            member=self.member,
        )
        active = self.make_loan(Decimal("300000"), Loan.ACTIVE)
        RepaymentService.apply(self.manager, active.id, Decimal("100000"))
        self.make_loan(Decimal("50000"))
        self.make_loan(Decimal("40000"), Loan.DEFAULTED)

        response = self.client.get("/api/v1/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["total_savings"]), Decimal("200000"))
        self.assertEqual(Decimal(response.data["active_loans"]), Decimal("200000"))
        self.assertEqual(Decimal(response.data["monthly_revenue"]), Decimal("105000"))
        self.assertEqual(response.data["pending_loans"], 1)
        self.assertEqual(response.data["loan_count"], 1)
        self.assertEqual(response.data["default_rate"], 33.3)
        self.assertEqual(response.data["currency"], "KES")

    def test_loans_by_status(self):
        self.make_loan(Decimal("50000"))
        self.make_loan(Decimal("70000"))

        response = self.client.get("/api/v1/dashboard/loans-by-status/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        pending = next(row for row in response.data if row["status"] == Loan.PENDING)
        self.assertEqual(pending["count"], 2)
        self.assertEqual(pending["principal"], "120000.00")
        self.assertEqual(len(response.data), len(Loan.STATUS_CHOICES))

    def test_monthly_contributions(self):
        TransactionService.record(
            self.manager,
            type=Transaction.DEPOSIT,
            amount=Decimal("15000"),
            description="Savings deposit",
            member=self.member,
        )

        response = self.client.get(
            "/api/v1/dashboard/monthly-contributions/", {"months": 3}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        self.assertEqual(Decimal(response.data[-1]["deposits"]), Decimal("15000"))
        self.assertEqual(Decimal(response.data[-1]["total"]), Decimal("15000"))
        self.assertEqual(Decimal(response.data[0]["total"]), Decimal("0"))

    def test_monthly_contributions_rejects_bad_months(self):
        response = self.client.get(
            "/api/v1/dashboard/monthly-contributions/", {"months": "many"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_savings_vs_loans(self):
        TransactionService.record(
            self.manager,
            type=Transaction.DEPOSIT,
            amount=Decimal("80000"),
            description="Savings deposit",
            member=self.member,
        )
        self.make_loan(Decimal("50000"), Loan.ACTIVE)

        response = self.client.get("/api/v1/dashboard/savings-vs-loans/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["total_savings"]), Decimal("80000"))
        self.assertEqual(Decimal(response.data["active_loans"]), Decimal("50000"))
        self.assertEqual(Decimal(response.data["net_position"]), Decimal("30000"))

    def test_members_cannot_see_dashboard(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get("/api/v1/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["kind"], "forbidden")

    def test_money_is_rendered_as_exact_strings(self):
        for amount in ("0.10", "0.20"):
            TransactionService.record(
                self.manager,
                type=Transaction.DEPOSIT,
                amount=Decimal(amount),
                description="Savings deposit",
                member=self.member,
            )

        response = self.client.get("/api/v1/dashboard/stats/")
        body = json.loads(response.content)
        self.assertEqual(body["total_savings"], "0.30")
        self.assertEqual(body["active_loans"], "0.00")
        self.assertEqual(body["monthly_revenue"], "0.00")
        self.assertIsInstance(body["total_members"], int)

        response = self.client.get(
            "/api/v1/dashboard/monthly-contributions/", {"months": 1}
        )
        body = json.loads(response.content)
        self.assertEqual(body[0]["deposits"], "0.30")
        self.assertEqual(body[0]["total"], "0.30")

        response = self.client.get("/api/v1/dashboard/savings-vs-loans/")
        body = json.loads(response.content)
        self.assertEqual(body["total_savings"], "0.30")
        self.assertEqual(body["net_position"], "0.30")

        response = self.client.get(
            f"/api/v1/members/{self.member.id}/savings/"
        )
        self.assertEqual(json.loads(response.content)["balance"], "0.30")
