from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import models
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from loans.models import Loan
from savings.models import Savings
from unfreezerequests.models import UnfreezeRequest

User = get_user_model()


class MemberTests(APITestCase):
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
        self.url = "/api/v1/members/"

    def test_member_created_with_defaults(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(
            self.url,
            {
                "member_number": "VFA001",
                "first_name": "Moses",
                "last_name": "Kato",
                "phone": "0772000111",
                "email": "moses@example.com",
            },
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], User.STATUS_ACTIVE)
        self.assertEqual(response.data["role"], User.ROLE_MEMBER)

        member = User.objects.get(member_number="VFA001")
        self.assertTrue(Savings.objects.filter(member=member).exists())
        self.assertEqual(member.savings.balance, 0)

    def test_duplicate_member_number_is_a_conflict(self):
        self.client.force_authenticate(user=self.manager)
        data = {
            "member_number": "VFA001",
            "first_name": "Moses",
            "last_name": "Kato",
            "phone": "0772000111",
        }
        self.client.post(self.url, data)
        response = self.client.post(self.url, {**data, "first_name": "Ruth"})
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["kind"], "conflict")
        self.assertEqual(User.objects.filter(member_number="VFA001").count(), 1)

    def test_member_number_generated_when_missing(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(
            self.url,
            {"first_name": "Moses", "last_name": "Kato", "phone": "0772000111"},
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["member_number"].startswith("MBR"))

    def test_missing_name_is_rejected(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(self.url, {"phone": "0772000111"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["kind"], "validation")
        self.assertIn("first_name", response.data)

    def test_member_cannot_register_members(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.post(
            self.url,
            {"first_name": "Moses", "last_name": "Kato", "phone": "0772000111"},
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_only_admin_can_create_admin(self):
        self.client.force_authenticate(user=self.manager)
        data = {
            "first_name": "Moses",
            "last_name": "Kato",
            "phone": "0772000111",
            "role": User.ROLE_ADMIN,
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_status_update(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.patch(
            f"{self.url}{self.member.id}/status/", {"status": User.STATUS_FROZEN}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, User.STATUS_FROZEN)

    def test_status_update_rejects_unknown_status(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.patch(
            f"{self.url}{self.member.id}/status/", {"status": "suspended"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_member_cannot_change_status(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.patch(
            f"{self.url}{self.member.id}/status/", {"status": User.STATUS_INACTIVE}
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, User.STATUS_ACTIVE)

    def test_members_only_see_themselves(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.url)
        self.assertEqual(len(response.data), 1)

        response = self.client.get(f"{self.url}{self.manager.id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.get(f"{self.url}{self.member.id}/savings/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_staff_filter_by_role(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.url, {"role": User.ROLE_MANAGER})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["member_number"], "MGR001")

    def test_unknown_member_is_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f"{self.url}7b0f6f0e-1c1e-4d7f-9a1b-8d2f5f0c9a11/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["kind"], "not_found")

    def test_profile_update(self):
        for actor in (self.admin, self.manager):
            self.client.force_authenticate(user=actor)
            response = self.client.patch(
                f"{self.url}{self.member.id}/",
                {"phone": f"0711{actor.member_number}", "address": "Plot 12, Gulu"},
            )
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data["phone"], f"0711{actor.member_number}")

        self.member.refresh_from_db()
        self.assertEqual(self.member.phone, "0711MGR001")
        self.assertEqual(self.member.address, "Plot 12, Gulu")
        self.assertEqual(self.member.first_name, "Sarah")

    def test_profile_update_leaves_role_and_status_alone(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}{self.member.id}/",
            {
                "first_name": "Sara",
                "role": User.ROLE_ADMIN,
                "status": User.STATUS_FROZEN,
            },
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.member.refresh_from_db()
        self.assertEqual(self.member.first_name, "Sara")
        self.assertEqual(self.member.role, User.ROLE_MEMBER)
        self.assertEqual(self.member.status, User.STATUS_ACTIVE)

    def test_profile_update_duplicate_email_is_a_conflict(self):
        self.manager.email = "peter@example.com"
        self.manager.save()
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}{self.member.id}/", {"email": "peter@example.com"}
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["kind"], "conflict")
        self.member.refresh_from_db()
        self.assertIsNone(self.member.email)

    def test_profile_update_duplicate_national_id_is_a_conflict(self):
        self.manager.national_id = "CM900100"
        self.manager.save()
        self.client.force_authenticate(user=self.manager)
        response = self.client.patch(
            f"{self.url}{self.member.id}/", {"national_id": "CM900100"}
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        # Keeping one's own national ID is not a conflict.
        response = self.client.patch(
            f"{self.url}{self.manager.id}/", {"national_id": "CM900100"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_member_cannot_edit_profiles(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.patch(
            f"{self.url}{self.member.id}/", {"phone": "0799999999"}
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.member.refresh_from_db()
        self.assertEqual(self.member.phone, "0700000003")

    def test_profile_update_unknown_member_is_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}7b0f6f0e-1c1e-4d7f-9a1b-8d2f5f0c9a11/", {"phone": "0799999999"}
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AuthenticationTests(APITestCase):
    def setUp(self):
        self.member = User.objects.create_user(
            member_number="MBR001",
            password="password",
            first_name="Sarah",
            last_name="Achieng",
            phone="0700000003",
        )

    def test_login_returns_token(self):
        response = self.client.post(
            "/api/v1/auth/token/",
            {"member_number": "MBR001", "password": "password"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("token", response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Token {response.data['token']}")
        response = self.client.get("/api/v1/auth/me/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["member_number"], "MBR001")

    def test_login_with_wrong_password(self):
        response = self.client.post(
            "/api/v1/auth/token/",
            {"member_number": "MBR001", "password": "wrong"},
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["kind"], "not_authenticated")

    def test_anonymous_requests_are_refused(self):
        response = self.client.get("/api/v1/members/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["kind"], "not_authenticated")


class SeedDemoDataTests(TestCase):
    def test_seed_populates_empty_database(self):
        call_command("seed_demo_data", stdout=StringIO())

        self.assertEqual(User.objects.count(), 10)
        self.assertEqual(User.objects.get(member_number="VFA001").role, User.ROLE_ADMIN)
        self.assertEqual(Loan.objects.filter(status=Loan.PAID).count(), 1)
        self.assertEqual(
            UnfreezeRequest.objects.filter(status=UnfreezeRequest.PENDING).count(), 1
        )

    def test_seed_refuses_when_members_exist(self):
        User.objects.create_user(
            member_number="MBR001",
            first_name="Sarah",
            last_name="Achieng",
            phone="0700000003",
        )
        with self.assertRaises(CommandError):
            call_command("seed_demo_data", stdout=StringIO())
        self.assertEqual(User.objects.count(), 1)


class PrimaryKeyTests(TestCase):
    def test_models_use_uuid_keys(self):
        for model in (User, Savings, Loan, UnfreezeRequest):
            self.assertIsInstance(model._meta.pk, models.UUIDField)

    def test_permission_tables_use_big_auto_keys(self):
        self.assertIsInstance(User.groups.through._meta.pk, models.BigAutoField)
        self.assertIsInstance(
            User.user_permissions.through._meta.pk, models.BigAutoField
        )
