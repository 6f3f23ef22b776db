import logging
from decimal import Decimal

from django.db import transaction
from rest_framework.exceptions import ValidationError

from accounts.exceptions import Conflict
from accounts.permissions import STAFF_ROLES, require_role
from savings.models import Savings
from transactions.models import Transaction

logger = logging.getLogger(__name__)


class TransactionService:
    # Loan disbursements and payments are only written by the loan and
    # repayment operations so the ledger always agrees with loan balances.
    RECORDABLE_TYPES = (Transaction.DEPOSIT, Transaction.WITHDRAWAL, Transaction.FEE)
    SAVINGS_TYPES = (Transaction.DEPOSIT, Transaction.WITHDRAWAL)

    @staticmethod
    def processor_label(actor):
        if actor is None:
            return "System"
        return f"{actor.get_full_name()} ({actor.member_number})"

    @classmethod
    def record(
        cls,
        actor,
        type,
        amount,
        description,
        member=None,
        loan=None,
        processed_by=None,
    ):
        """
        Record a deposit, withdrawal or fee entered from the console.
        """
        require_role(actor, *STAFF_ROLES)

        if type not in cls.RECORDABLE_TYPES:
            raise ValidationError(
                {
                    "type": f"'{type}' entries are created by loan operations; "
                    f"record one of: {', '.join(cls.RECORDABLE_TYPES)}."
                }
            )

        if loan is not None:
            if member is None:
                member = loan.member
            elif loan.member_id != member.pk:
                raise ValidationError({"loan": "Loan does not belong to this member."})

        if type in cls.SAVINGS_TYPES and member is None:
            raise ValidationError({"member": f"A member is required for a {type}."})

        return cls.append(
            type=type,
            amount=amount,
            description=description,
            member=member,
            loan=loan,
            processed_by=processed_by or cls.processor_label(actor),
        )

    @classmethod
    def append(cls, type, amount, description, processed_by, member=None, loan=None):
        """
        Append a ledger entry and move the member's savings for deposits and
        withdrawals. Callers are responsible for authorization.
        """
        amount = Decimal(amount)
        if amount <= 0:
            raise ValidationError({"amount": "Amount must be greater than 0."})

        with transaction.atomic():
            if type in cls.SAVINGS_TYPES:
                savings, _ = Savings.objects.select_for_update().get_or_create(
                    member=member
                )
                if type == Transaction.DEPOSIT:
                    savings.balance += amount
                else:
                    if amount > savings.balance:
                        logger.warning(
                            f"Withdrawal of {amount} refused for {member.member_number}: balance {savings.balance}"
                        )
                        raise Conflict(
                            f"Insufficient savings: balance is {savings.balance}, "
                            f"withdrawal is {amount}."
                        )
                    savings.balance -= amount
                savings.save(update_fields=["balance", "last_updated", "updated_at"])

            entry = Transaction.objects.create(
                member=member,
                loan=loan,
                type=type,
                amount=amount,
                description=description,
                processed_by=processed_by,
            )

        logger.info(
            f"Recorded {entry.type} {entry.amount} ({entry.reference}) by {processed_by}"
        )
        return entry
