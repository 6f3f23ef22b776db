from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone

from accounts.abstracts import UniversalIdModel, TimeStampedModel, ReferenceModel


class Transaction(UniversalIdModel, TimeStampedModel, ReferenceModel):
    """
    Ledger entry. Rows are appended and never saved again.
    """

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    LOAN_DISBURSEMENT = "loan_disbursement"
    FEE = "fee"
    LOAN_PAYMENT = "loan_payment"
    TYPE_CHOICES = [
        (DEPOSIT, "Deposit"),
        (WITHDRAWAL, "Withdrawal"),
        (LOAN_DISBURSEMENT, "Loan Disbursement"),
        (FEE, "Fee"),
        (LOAN_PAYMENT, "Loan Payment"),
    ]

    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="transactions",
        null=True,
        blank=True,
    )
    loan = models.ForeignKey(
        "loans.Loan",
        on_delete=models.PROTECT,
        related_name="transactions",
        null=True,
        blank=True,
    )
    type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(0.01, message="Amount must be greater than 0")],
    )
    description = models.TextField()
    transaction_date = models.DateTimeField(default=timezone.now)
    processed_by = models.CharField(max_length=255)

    class Meta:
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"
        ordering = ["-transaction_date"]
        indexes = [
            models.Index(fields=["member", "transaction_date"], name="txn_member_date_idx"),
            models.Index(fields=["loan", "transaction_date"], name="txn_loan_date_idx"),
            models.Index(fields=["type", "transaction_date"], name="txn_type_date_idx"),
        ]

    def __str__(self):
        return f"{self.get_type_display()} {self.amount} ({self.reference})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Transactions are append-only and cannot be modified.")
        return super().save(*args, **kwargs)
