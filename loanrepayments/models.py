from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel
from loans.models import Loan


class Repayment(TimeStampedModel, UniversalIdModel, ReferenceModel):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    MOBILE_MONEY = "mobile_money"
    PAYMENT_METHOD_CHOICES = [
        (CASH, "Cash"),
        (BANK_TRANSFER, "Bank Transfer"),
        (MOBILE_MONEY, "Mobile Money"),
    ]

    loan = models.ForeignKey(
        Loan,
        on_delete=models.PROTECT,
        related_name="repayments",
    )
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(0.01, message="Amount must be greater than 0")],
    )
    payment_method = models.CharField(
        max_length=30, choices=PAYMENT_METHOD_CHOICES, default=CASH
    )
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="processed_repayments",
    )
    payment_date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True, null=True)

    class Meta:
        verbose_name = "Repayment"
        verbose_name_plural = "Repayments"
        ordering = ["-payment_date"]
        indexes = [
            models.Index(fields=["loan", "payment_date"], name="repayment_loan_date_idx"),
            models.Index(
                fields=["processed_by", "payment_date"],
                name="repayment_processor_date_idx",
            ),
        ]

    def __str__(self):
        return f"Repayment {self.reference} for Loan {self.loan.loan_number} - Amount: {self.amount}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Repayments are append-only and cannot be modified.")
        return super().save(*args, **kwargs)
