import logging
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from accounts.exceptions import Conflict
from accounts.models import Member
from accounts.permissions import ALL_ROLES, STAFF_ROLES, require_role
from accounts.services import get_or_not_found
from loans.models import Loan
from loans.utils import send_loan_status_email
from transactions.models import Transaction
from transactions.services import TransactionService

logger = logging.getLogger(__name__)


class LoanService:
    NOTIFY_STATUSES = (Loan.APPROVED, Loan.REJECTED, Loan.ACTIVE)

    @staticmethod
    def get_loan(loan_id, queryset=None):
        queryset = Loan.objects.all() if queryset is None else queryset
        return get_or_not_found(queryset, "Loan not found.", pk=loan_id)

    @classmethod
    def get_visible_loan(cls, actor, loan_id):
        loan = cls.get_loan(loan_id, Loan.objects.select_related("member"))
        if not actor.is_staff_member and loan.member_id != actor.pk:
            raise NotFound("Loan not found.")
        return loan

    @classmethod
    def originate(
        cls,
        actor,
        member,
        principal,
        interest_rate,
        term_months,
        intended_purpose=None,
        loan_number=None,
    ):
        """
        Create a pending loan whose balance equals the principal.

        Members may only request loans for themselves; admins and managers may
        originate loans for anyone.
        """
        require_role(actor, *ALL_ROLES)
        if member.pk != actor.pk:
            require_role(actor, *STAFF_ROLES)

        principal = Decimal(principal)
        interest_rate = Decimal(interest_rate)
        errors = {}
        if principal <= 0:
            errors["principal"] = "Principal must be greater than 0."
        if interest_rate < 0:
            errors["interest_rate"] = "Interest rate cannot be negative."
        if term_months is None or int(term_months) < 1:
            errors["term_months"] = "Term must be at least one month."
        if errors:
            raise ValidationError(errors)

        if member.status != Member.STATUS_ACTIVE:
            raise Conflict(
                f"Member {member.member_number} is {member.status}; only active members can take loans."
            )

        if loan_number and Loan.objects.filter(loan_number=loan_number).exists():
            raise Conflict(f"Loan number '{loan_number}' already exists.")

        fields = {
            "member": member,
            "principal": principal,
            "interest_rate": interest_rate,
            "term_months": int(term_months),
            "intended_purpose": intended_purpose,
            "balance": principal,
            "status": Loan.PENDING,
        }
        if loan_number:
            fields["loan_number"] = loan_number

        try:
            with transaction.atomic():
                loan = Loan.objects.create(**fields)
        except IntegrityError as e:
            logger.warning(f"Loan origination conflict: {str(e)}")
            raise Conflict("A loan with these details already exists.")

        logger.info(
            f"Loan {loan.loan_number} of {loan.principal} originated for {member.member_number} by {actor.member_number}"
        )
        return loan

    @classmethod
    def transition(cls, actor, loan_id, status):
        """
        Move a loan one step forward through its lifecycle.

        approve/reject stamp the approver, disbursement stamps the dates and
        writes the disbursement to the ledger, paid requires a zero balance.
        """
        require_role(actor, *STAFF_ROLES)

        valid_statuses = [choice for choice, _ in Loan.STATUS_CHOICES]
        if status not in valid_statuses:
            raise ValidationError(
                {"status": f"Status must be one of: {', '.join(valid_statuses)}."}
            )

        with transaction.atomic():
            loan = cls.get_loan(loan_id, Loan.objects.select_for_update())

            if not loan.can_transition_to(status):
                logger.warning(
                    f"Refused loan {loan.loan_number} transition {loan.status} -> {status}"
                )
                raise Conflict(f"Cannot move loan from '{loan.status}' to '{status}'.")

            if status == Loan.PAID and loan.balance != 0:
                raise Conflict(
                    f"Loan {loan.loan_number} still has a balance of {loan.balance}."
                )

            previous = loan.status
            now = timezone.now()
            loan.status = status
            update_fields = ["status", "updated_at"]

            if status in (Loan.APPROVED, Loan.REJECTED):
                loan.approved_by = actor
                loan.approved_at = now
                update_fields += ["approved_by", "approved_at"]

            if status == Loan.ACTIVE:
                loan.disbursement_date = now
                loan.due_date = now + relativedelta(months=loan.term_months)
                update_fields += ["disbursement_date", "due_date"]

            loan.save(update_fields=update_fields)

            if status == Loan.ACTIVE:
                TransactionService.append(
                    type=Transaction.LOAN_DISBURSEMENT,
                    amount=loan.principal,
                    description=f"Loan Disbursement - {loan.loan_number}",
                    member=loan.member,
                    loan=loan,
                    processed_by=TransactionService.processor_label(actor),
                )

        logger.info(
            f"Loan {loan.loan_number} moved from {previous} to {status} by {actor.member_number}"
        )

        if status in cls.NOTIFY_STATUSES:
            send_loan_status_email(loan)

        return loan

    @classmethod
    def approve(cls, actor, loan_id):
        return cls.transition(actor, loan_id, Loan.APPROVED)

    @classmethod
    def reject(cls, actor, loan_id):
        return cls.transition(actor, loan_id, Loan.REJECTED)

    @classmethod
    def disburse(cls, actor, loan_id):
        return cls.transition(actor, loan_id, Loan.ACTIVE)
