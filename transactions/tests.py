from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from transactions.models import Transaction

User = get_user_model()


class TransactionTests(APITestCase):
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
        self.url = "/api/v1/transactions/"
        self.client.force_authenticate(user=self.manager)

    def post(self, type, amount, **extra):
        return self.client.post(
            self.url,
            {
                "member": str(self.member.id),
                "type": type,
                "amount": amount,
                "description": f"{type} at branch",
                **extra,
            },
        )

    def test_deposit_credits_savings(self):
        response = self.post(Transaction.DEPOSIT, "50000.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["processed_by"], "Peter Okello (MGR001)")
        self.member.savings.refresh_from_db()
        self.assertEqual(self.member.savings.balance, Decimal("50000.00"))

    def test_withdrawal_debits_savings(self):
        self.post(Transaction.DEPOSIT, "50000.00")
        response = self.post(Transaction.WITHDRAWAL, "20000.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.member.savings.refresh_from_db()
        self.assertEqual(self.member.savings.balance, Decimal("30000.00"))

    def test_withdrawal_above_balance_is_a_conflict(self):
        self.post(Transaction.DEPOSIT, "10000.00")
        response = self.post(Transaction.WITHDRAWAL, "10000.01")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.member.savings.refresh_from_db()
        self.assertEqual(self.member.savings.balance, Decimal("10000.00"))
        self.assertEqual(Transaction.objects.count(), 1)

    def test_fee_leaves_savings_alone(self):
        response = self.post(Transaction.FEE, "2000.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.member.savings.refresh_from_db()
        self.assertEqual(self.member.savings.balance, Decimal("0"))

    def test_loan_entries_cannot_be_posted(self):
        response = self.post(Transaction.LOAN_PAYMENT, "2000.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Transaction.objects.exists())

    def test_non_positive_amount_is_rejected(self):
        response = self.post(Transaction.DEPOSIT, "-5.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_member_cannot_post(self):
        self.client.force_authenticate(user=self.member)
        response = self.post(Transaction.DEPOSIT, "5000.00")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_entries_are_append_only(self):
        self.post(Transaction.DEPOSIT, "5000.00")
        entry = Transaction.objects.get()
        entry.amount = Decimal("1.00")
        with self.assertRaises(ValueError):
            entry.save()

    def test_list_filters_and_limit(self):
        self.post(Transaction.DEPOSIT, "5000.00")
        self.post(Transaction.DEPOSIT, "7000.00")
        self.post(Transaction.FEE, "1000.00")

        response = self.client.get(self.url, {"type": Transaction.DEPOSIT})
        self.assertEqual(len(response.data), 2)

        response = self.client.get(self.url, {"limit": 1})
        self.assertEqual(len(response.data), 1)

        response = self.client.get(self.url, {"limit": "all"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.force_authenticate(user=self.member)
        response = self.client.get(f"/api/v1/members/{self.member.id}/transactions/")
        self.assertEqual(len(response.data), 3)

    def test_download_csv(self):
        self.post(Transaction.DEPOSIT, "5000.00")
        response = self.client.get(f"{self.url}download/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Type"], "text/csv")
        lines = response.content.decode().strip().split("\n")
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("Reference,Date,Type,Amount"))
        self.assertIn("MBR001", lines[1])

    def test_member_cannot_download(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(f"{self.url}download/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
