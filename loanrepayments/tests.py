from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from loanrepayments.models import Repayment
from loans.models import Loan
from loans.services import LoanService
from transactions.models import Transaction

User = get_user_model()


class RepaymentTests(APITestCase):
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
        self.loan = LoanService.originate(
            self.member, self.member, Decimal("100000.00"), Decimal("10.00"), 6
        )
        LoanService.approve(self.manager, self.loan.id)
        LoanService.disburse(self.manager, self.loan.id)
        self.url = "/api/v1/repayments/"
        self.client.force_authenticate(user=self.manager)

    def repay(self, amount, **extra):
        return self.client.post(
            self.url, {"loan": str(self.loan.id), "amount": amount, **extra}
        )

    def test_partial_repayment(self):
        response = self.repay("40000.00", payment_method=Repayment.MOBILE_MONEY)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["payment_method"], Repayment.MOBILE_MONEY)

        self.loan.refresh_from_db()
        self.assertEqual(self.loan.balance, Decimal("60000.00"))
        self.assertEqual(self.loan.status, Loan.ACTIVE)

        payment = Transaction.objects.get(type=Transaction.LOAN_PAYMENT)
        self.assertEqual(payment.amount, Decimal("40000.00"))
        self.assertEqual(payment.member, self.member)
        self.assertEqual(payment.loan, self.loan)

    def test_repayment_equal_to_balance_marks_loan_paid(self):
        response = self.repay("100000.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.loan.refresh_from_db()
        self.assertEqual(self.loan.balance, Decimal("0"))
        self.assertEqual(self.loan.status, Loan.PAID)

    def test_overpayment_is_refused_by_default(self):
        response = self.repay("100000.01")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["kind"], "conflict")
        self.loan.refresh_from_db()
        self.assertEqual(self.loan.balance, Decimal("100000.00"))
        self.assertFalse(Repayment.objects.exists())
        self.assertFalse(
            Transaction.objects.filter(type=Transaction.LOAN_PAYMENT).exists()
        )

    @override_settings(SACCO_OVERPAYMENT_POLICY="clamp")
    def test_overpayment_is_clamped_when_configured(self):
        response = self.repay("150000.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data["amount"]), Decimal("100000.00"))
        self.loan.refresh_from_db()
        self.assertEqual(self.loan.balance, Decimal("0"))
        self.assertEqual(self.loan.status, Loan.PAID)

    def test_balance_stays_within_bounds(self):
        for amount in ("30000.00", "30000.00", "50000.00", "40000.00"):
            self.repay(amount)
            self.loan.refresh_from_db()
            self.assertGreaterEqual(self.loan.balance, Decimal("0"))
            self.assertLessEqual(self.loan.balance, self.loan.principal)

        self.assertEqual(self.loan.balance, Decimal("0"))
        self.assertEqual(self.loan.status, Loan.PAID)
        self.assertEqual(Repayment.objects.count(), 3)

    def test_paid_loan_accepts_no_further_repayments(self):
        self.repay("100000.00")
        response = self.repay("1.00")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_pending_loan_accepts_no_repayments(self):
        pending = LoanService.originate(
            self.member, self.member, Decimal("5000.00"), Decimal("10.00"), 3
        )
        response = self.client.post(
            self.url, {"loan": str(pending.id), "amount": "1000.00"}
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_non_positive_amount_is_rejected(self):
        response = self.repay("0")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_loan_is_not_found(self):
        response = self.client.post(
            self.url,
            {"loan": "7b0f6f0e-1c1e-4d7f-9a1b-8d2f5f0c9a11", "amount": "1000.00"},
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_member_cannot_apply_repayment(self):
        self.client.force_authenticate(user=self.member)
        response = self.repay("1000.00")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_sees_own_repayments(self):
        self.repay("1000.00")
        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.url, {"loan": str(self.loan.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
