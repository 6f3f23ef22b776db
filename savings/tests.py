from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

User = get_user_model()


class SavingsTests(APITestCase):
    def setUp(self):
        self.member = User.objects.create_user(
            member_number="MBR001",
            first_name="Sarah",
            last_name="Achieng",
            phone="0700000003",
        )
        self.other = User.objects.create_user(
            member_number="MBR002",
            first_name="John",
            last_name="Mugisha",
            phone="0700000004",
        )

    def test_members_only_see_own_savings(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get("/api/v1/savings/")
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["member_number"], "MBR001")

        response = self.client.get(f"/api/v1/savings/{self.other.savings.id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
