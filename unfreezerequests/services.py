import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from accounts.exceptions import Conflict
from accounts.models import Member
from accounts.permissions import ADMIN, ALL_ROLES, require_role
from accounts.services import get_or_not_found
from unfreezerequests.models import UnfreezeRequest
from unfreezerequests.utils import send_unfreeze_decision_email

logger = logging.getLogger(__name__)


class UnfreezeRequestService:
    @classmethod
    def file(cls, actor, reason):
        """A frozen member asks for their account to be reactivated."""
        require_role(actor, *ALL_ROLES)

        reason = (reason or "").strip()
        if not reason:
            raise ValidationError({"reason": "A reason is required."})

        with transaction.atomic():
            member = Member.objects.select_for_update().get(pk=actor.pk)
            if member.status != Member.STATUS_FROZEN:
                raise Conflict("Only frozen accounts can request to be unfrozen.")

            if member.unfreeze_requests.filter(status=UnfreezeRequest.PENDING).exists():
                raise Conflict("You already have a pending unfreeze request.")

            unfreeze_request = UnfreezeRequest.objects.create(
                member=member, reason=reason
            )

        logger.info(
            f"Unfreeze request {unfreeze_request.reference} filed by {member.member_number}"
        )
        return unfreeze_request

    @classmethod
    def process(cls, actor, request_id, decision, admin_notes=None):
        """
        Approve or deny a pending request.

        The request update and, on approval, the member reactivation commit
        together. Requests that are no longer pending are left untouched.
        """
        require_role(actor, ADMIN)

        if decision not in UnfreezeRequest.DECISIONS:
            raise ValidationError(
                {"status": f"Decision must be one of: {', '.join(UnfreezeRequest.DECISIONS)}."}
            )

        with transaction.atomic():
            unfreeze_request = get_or_not_found(
                UnfreezeRequest.objects.select_for_update(),
                "Unfreeze request not found.",
                pk=request_id,
            )

            if unfreeze_request.status != UnfreezeRequest.PENDING:
                logger.warning(
                    f"Unfreeze request {unfreeze_request.reference} already {unfreeze_request.status}"
                )
                raise Conflict(
                    f"Unfreeze request has already been {unfreeze_request.status}."
                )

            unfreeze_request.status = decision
            unfreeze_request.processed_by = actor
            unfreeze_request.admin_notes = admin_notes
            unfreeze_request.processed_at = timezone.now()
            unfreeze_request.save(
                update_fields=[
                    "status",
                    "processed_by",
                    "admin_notes",
                    "processed_at",
                    "updated_at",
                ]
            )

            if decision == UnfreezeRequest.APPROVED:
                member = Member.objects.select_for_update().get(
                    pk=unfreeze_request.member_id
                )
                member.status = Member.STATUS_ACTIVE
                member.save(update_fields=["status", "updated_at"])

        logger.info(
            f"Unfreeze request {unfreeze_request.reference} {decision} by {actor.member_number}"
        )
        send_unfreeze_decision_email(unfreeze_request)
        return unfreeze_request
