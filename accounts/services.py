import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound, ValidationError

from accounts.exceptions import Conflict
from accounts.models import Member
from accounts.permissions import STAFF_ROLES, require_role

logger = logging.getLogger(__name__)


def get_or_not_found(queryset, message, **lookup):
    """Fetch one row or raise NotFound, treating malformed identifiers as unknown."""
    try:
        return queryset.get(**lookup)
    except (queryset.model.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFound(message)


class MemberService:
    UNIQUE_FIELDS = (
        ("member_number", "Member number"),
        ("email", "Email"),
        ("national_id", "National ID"),
    )
    PROFILE_FIELDS = (
        "first_name",
        "last_name",
        "email",
        "phone",
        "national_id",
        "address",
    )

    @staticmethod
    def get_member(member_id):
        return get_or_not_found(Member.objects.all(), "Member not found.", pk=member_id)

    @classmethod
    def register(cls, actor, **fields):
        """
        Create a member and, through the post_save signal, their savings record.

        Role defaults to member and status to active unless given.
        """
        require_role(actor, *STAFF_ROLES)

        if fields.get("role") == Member.ROLE_ADMIN:
            require_role(actor, Member.ROLE_ADMIN)

        for field, label in cls.UNIQUE_FIELDS:
            value = fields.get(field)
            if value and Member.objects.filter(**{field: value}).exists():
                raise Conflict(f"{label} '{value}' already exists.")

        password = fields.pop("password", None)
        member_number = fields.pop("member_number", None)
        try:
            with transaction.atomic():
                member = Member.objects.create_user(
                    member_number=member_number, password=password, **fields
                )
        except IntegrityError as e:
            logger.warning(f"Member registration conflict: {str(e)}")
            raise Conflict("A member with these details already exists.")

        logger.info(
            f"Member {member.member_number} registered by {actor.member_number}"
        )
        return member

    @classmethod
    def update(cls, actor, member_id, **fields):
        """
        Edit a member's profile details. Role and status are not profile
        fields and are ignored here; status has its own endpoint.
        """
        require_role(actor, *STAFF_ROLES)

        changes = {
            field: value for field, value in fields.items() if field in cls.PROFILE_FIELDS
        }
        if changes.get("email"):
            changes["email"] = Member.objects.normalize_email(changes["email"])

        try:
            with transaction.atomic():
                member = get_or_not_found(
                    Member.objects.select_for_update(), "Member not found.", pk=member_id
                )

                for field, label in cls.UNIQUE_FIELDS:
                    value = changes.get(field)
                    if (
                        value
                        and Member.objects.filter(**{field: value})
                        .exclude(pk=member.pk)
                        .exists()
                    ):
                        raise Conflict(f"{label} '{value}' already exists.")

                for field, value in changes.items():
                    setattr(member, field, value)
                member.save(update_fields=[*changes, "updated_at"])
        except IntegrityError as e:
            logger.warning(f"Member update conflict: {str(e)}")
            raise Conflict("A member with these details already exists.")

        logger.info(
            f"Member {member.member_number} profile updated by {actor.member_number}: {', '.join(changes) or 'no changes'}"
        )
        return member

    @classmethod
    def update_status(cls, actor, member_id, status):
        """
        Change only the member's status. Pending unfreeze requests are left
        as they are.
        """
        require_role(actor, *STAFF_ROLES)

        valid_statuses = [choice for choice, _ in Member.STATUS_CHOICES]
        if status not in valid_statuses:
            raise ValidationError(
                {"status": f"Status must be one of: {', '.join(valid_statuses)}."}
            )

        with transaction.atomic():
            member = get_or_not_found(
                Member.objects.select_for_update(), "Member not found.", pk=member_id
            )

            previous = member.status
            member.status = status
            member.save(update_fields=["status", "updated_at"])

        logger.info(
            f"Member {member.member_number} status changed from {previous} to {status} by {actor.member_number}"
        )
        return member

    @classmethod
    def get_visible_member(cls, actor, member_id):
        """
        Members may only look at themselves; admins and managers see everyone.
        Anything outside the actor's scope is reported as missing.
        """
        member = cls.get_member(member_id)
        if not actor.is_staff_member and member.pk != actor.pk:
            raise NotFound("Member not found.")
        return member
