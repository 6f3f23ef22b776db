from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from loans.models import Loan
from transactions.models import Transaction

User = get_user_model()


class LoanLifecycleTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            member_number="ADM001",
            password="password",
            first_name="Grace",
            last_name="Nakato",
            phone="0700000001",
            role=User.ROLE_ADMIN,
        )
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
        self.url = "/api/v1/loans/"

    def request_loan(self, principal="500000.00", **extra):
        self.client.force_authenticate(user=self.member)
        return self.client.post(
            self.url,
            {
                "principal": principal,
                "interest_rate": "12.50",
                "term_months": 12,
                "intended_purpose": "School fees",
                **extra,
            },
        )

    def test_member_requests_loan(self):
        response = self.request_loan()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], Loan.PENDING)
        self.assertEqual(Decimal(response.data["balance"]), Decimal("500000"))
        self.assertEqual(response.data["member"], str(self.member.id))
        self.assertTrue(response.data["loan_number"].startswith("LN"))

    def test_non_positive_principal_is_rejected(self):
        response = self.request_loan(principal="0")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Loan.objects.exists())

    def test_frozen_member_cannot_borrow(self):
        self.member.status = User.STATUS_FROZEN
        self.member.save()
        response = self.request_loan()
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_member_cannot_borrow_for_someone_else(self):
        response = self.request_loan(member=str(self.manager.id))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_originate_for_member(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(
            self.url,
            {
                "member": str(self.member.id),
                "principal": "100000.00",
                "interest_rate": "10.00",
                "term_months": 6,
            },
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Loan.objects.get().member, self.member)

    def test_duplicate_loan_number_is_a_conflict(self):
        self.request_loan(loan_number="LN-0001")
        response = self.request_loan(loan_number="LN-0001")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_full_lifecycle_to_paid(self):
        loan_id = self.request_loan().data["id"]

        self.client.force_authenticate(user=self.manager)
        response = self.client.post(f"{self.url}{loan_id}/approve/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["loan"]["status"], Loan.APPROVED)

        response = self.client.post(f"{self.url}{loan_id}/disburse/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        loan = Loan.objects.get(id=loan_id)
        self.assertEqual(loan.status, Loan.ACTIVE)
        self.assertEqual(loan.approved_by, self.manager)
        self.assertIsNotNone(loan.disbursement_date)
        self.assertGreater(loan.due_date, loan.disbursement_date)
        self.assertTrue(
            Transaction.objects.filter(
                loan=loan, type=Transaction.LOAN_DISBURSEMENT, amount=loan.principal
            ).exists()
        )

        for amount in ("200000.00", "300000.00"):
            response = self.client.post(
                "/api/v1/repayments/", {"loan": loan_id, "amount": amount}
            )
            self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        loan.refresh_from_db()
        self.assertEqual(loan.balance, Decimal("0"))
        self.assertEqual(loan.status, Loan.PAID)

        response = self.client.get(f"{self.url}{loan_id}/repayments/")
        self.assertEqual(len(response.data), 2)

    def test_invalid_transition_is_a_conflict(self):
        loan_id = self.request_loan().data["id"]
        self.client.force_authenticate(user=self.manager)

        response = self.client.post(f"{self.url}{loan_id}/disburse/")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Loan.objects.get(id=loan_id).status, Loan.PENDING)

        self.client.post(f"{self.url}{loan_id}/reject/")
        response = self.client.post(f"{self.url}{loan_id}/approve/")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Loan.objects.get(id=loan_id).status, Loan.REJECTED)

    def test_paid_requires_zero_balance(self):
        loan_id = self.request_loan().data["id"]
        self.client.force_authenticate(user=self.manager)
        self.client.post(f"{self.url}{loan_id}/approve/")
        self.client.post(f"{self.url}{loan_id}/disburse/")

        response = self.client.patch(
            f"{self.url}{loan_id}/status/", {"status": Loan.PAID}
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.patch(
            f"{self.url}{loan_id}/status/", {"status": Loan.OVERDUE}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Loan.objects.get(id=loan_id).status, Loan.OVERDUE)

    def test_member_cannot_approve(self):
        loan_id = self.request_loan().data["id"]
        response = self.client.post(f"{self.url}{loan_id}/approve/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Loan.objects.get(id=loan_id).status, Loan.PENDING)

    def test_members_only_see_their_own_loans(self):
        loan_id = self.request_loan().data["id"]
        other = User.objects.create_user(
            member_number="MBR002",
            first_name="John",
            last_name="Mugisha",
            phone="0700000004",
        )
        self.client.force_authenticate(user=other)
        response = self.client.get(f"{self.url}{loan_id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.get(self.url)
        self.assertEqual(len(response.data), 0)

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.url, {"status": Loan.PENDING})
        self.assertEqual(len(response.data), 1)
        response = self.client.get(f"/api/v1/members/{self.member.id}/loans/")
        self.assertEqual(len(response.data), 1)
