import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import transaction
from rest_framework.exceptions import ValidationError

from accounts.exceptions import Conflict
from accounts.permissions import STAFF_ROLES, require_role
from loanrepayments.models import Repayment
from loans.models import Loan
from loans.services import LoanService
from transactions.models import Transaction
from transactions.services import TransactionService

logger = logging.getLogger(__name__)

REJECT = "reject"
CLAMP = "clamp"
OVERPAYMENT_POLICIES = (REJECT, CLAMP)


def get_overpayment_policy():
    policy = getattr(settings, "SACCO_OVERPAYMENT_POLICY", REJECT)
    if policy not in OVERPAYMENT_POLICIES:
        raise ImproperlyConfigured(
            f"SACCO_OVERPAYMENT_POLICY must be one of {OVERPAYMENT_POLICIES}, got '{policy}'."
        )
    return policy


class RepaymentService:
    @classmethod
    def apply(
        cls,
        actor,
        loan_id,
        amount,
        payment_method=Repayment.CASH,
        notes=None,
        policy=None,
    ):
        """
        Record a repayment and take it off the loan balance.

        The loan row is locked for the duration. A repayment that clears the
        balance marks the loan paid. Amounts above the balance are refused
        under the "reject" policy and cut down to the balance under "clamp".
        """
        require_role(actor, *STAFF_ROLES)

        amount = Decimal(amount)
        if amount <= 0:
            raise ValidationError({"amount": "Amount must be greater than 0."})

        valid_methods = [choice for choice, _ in Repayment.PAYMENT_METHOD_CHOICES]
        if payment_method not in valid_methods:
            raise ValidationError(
                {"payment_method": f"Payment method must be one of: {', '.join(valid_methods)}."}
            )

        policy = policy or get_overpayment_policy()

        with transaction.atomic():
            loan = LoanService.get_loan(loan_id, Loan.objects.select_for_update())

            if loan.status not in Loan.REPAYABLE_STATUSES:
                raise Conflict(
                    f"Loan {loan.loan_number} is {loan.status}; only active or overdue loans accept repayments."
                )

            if amount > loan.balance:
                if policy == REJECT:
                    logger.warning(
                        f"Repayment of {amount} refused on {loan.loan_number}: balance is {loan.balance}"
                    )
                    raise Conflict(
                        f"Repayment of {amount} exceeds the outstanding balance of {loan.balance}."
                    )
                logger.warning(
                    f"Repayment of {amount} on {loan.loan_number} clamped to balance {loan.balance}"
                )
                amount = loan.balance

            repayment = Repayment.objects.create(
                loan=loan,
                amount=amount,
                payment_method=payment_method,
                processed_by=actor,
                notes=notes,
            )

            loan.balance -= amount
            update_fields = ["balance", "updated_at"]
            if loan.balance == 0:
                loan.status = Loan.PAID
                update_fields.append("status")
            loan.save(update_fields=update_fields)

            member = loan.member
            TransactionService.append(
                type=Transaction.LOAN_PAYMENT,
                amount=amount,
                description=f"Loan payment for {loan.loan_number} - {member.get_full_name()}",
                member=member,
                loan=loan,
                processed_by=TransactionService.processor_label(actor),
            )

        logger.info(
            f"Repayment {repayment.reference} of {amount} applied to {loan.loan_number}, balance now {loan.balance}"
        )
        return repayment
