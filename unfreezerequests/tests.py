from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from unfreezerequests.models import UnfreezeRequest

User = get_user_model()


class UnfreezeRequestTests(APITestCase):
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
            status=User.STATUS_FROZEN,
        )
        self.url = "/api/v1/unfreeze-requests/"

    def file_request(self, reason="Salary delays have been resolved"):
        self.client.force_authenticate(user=self.member)
        return self.client.post(self.url, {"reason": reason})

    def test_frozen_member_can_file_request(self):
        response = self.file_request()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], UnfreezeRequest.PENDING)
        self.assertEqual(response.data["member_number"], "MBR001")

    def test_active_member_cannot_file_request(self):
        self.member.status = User.STATUS_ACTIVE
        self.member.save()
        response = self.file_request()
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["kind"], "conflict")
        self.assertFalse(UnfreezeRequest.objects.exists())

    def test_second_pending_request_is_refused(self):
        self.file_request()
        response = self.file_request("Please reconsider")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(UnfreezeRequest.objects.count(), 1)

    def test_blank_reason_is_rejected(self):
        response = self.file_request("   ")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["kind"], "validation")

    def test_admin_approval_reactivates_member(self):
        request_id = self.file_request().data["id"]

        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}{request_id}/process/",
            {"status": "approved", "admin_notes": "Arrears cleared"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        unfreeze_request = UnfreezeRequest.objects.get(id=request_id)
        self.assertEqual(unfreeze_request.status, UnfreezeRequest.APPROVED)
        self.assertEqual(unfreeze_request.processed_by, self.admin)
        self.assertEqual(unfreeze_request.admin_notes, "Arrears cleared")
        self.assertIsNotNone(unfreeze_request.processed_at)

        self.member.refresh_from_db()
        self.assertEqual(self.member.status, User.STATUS_ACTIVE)

    def test_admin_denial_keeps_member_frozen(self):
        request_id = self.file_request().data["id"]

        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}{request_id}/process/", {"status": "denied"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            UnfreezeRequest.objects.get(id=request_id).status, UnfreezeRequest.DENIED
        )
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, User.STATUS_FROZEN)

    def test_processed_request_cannot_be_processed_again(self):
        request_id = self.file_request().data["id"]
        self.client.force_authenticate(user=self.admin)
        self.client.patch(f"{self.url}{request_id}/process/", {"status": "denied"})

        response = self.client.patch(
            f"{self.url}{request_id}/process/", {"status": "approved"}
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(
            UnfreezeRequest.objects.get(id=request_id).status, UnfreezeRequest.DENIED
        )
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, User.STATUS_FROZEN)

    def test_manager_cannot_process_request(self):
        request_id = self.file_request().data["id"]
        self.client.force_authenticate(user=self.manager)
        response = self.client.patch(
            f"{self.url}{request_id}/process/", {"status": "approved"}
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["kind"], "forbidden")
        self.assertEqual(
            UnfreezeRequest.objects.get(id=request_id).status, UnfreezeRequest.PENDING
        )

    def test_invalid_decision_is_rejected(self):
        request_id = self.file_request().data["id"]
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}{request_id}/process/", {"status": "pending"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_request_is_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}7b0f6f0e-1c1e-4d7f-9a1b-8d2f5f0c9a11/process/",
            {"status": "approved"},
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["kind"], "not_found")

    def test_members_only_see_their_own_requests(self):
        self.file_request()
        other = User.objects.create_user(
            member_number="MBR002",
            first_name="John",
            last_name="Mugisha",
            phone="0700000004",
            status=User.STATUS_FROZEN,
        )
        UnfreezeRequest.objects.create(member=other, reason="Back at work")

        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        self.client.force_authenticate(user=self.manager)
        response = self.client.get(self.url, {"status": "pending"})
        self.assertEqual(len(response.data), 2)
