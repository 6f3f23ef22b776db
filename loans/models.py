from decimal import Decimal

from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel
from loans.utils import generate_loan_number


class Loan(TimeStampedModel, UniversalIdModel, ReferenceModel):
    PENDING = "pending"
    APPROVED = "approved"
    ACTIVE = "active"
    PAID = "paid"
    OVERDUE = "overdue"
    DEFAULTED = "defaulted"
    REJECTED = "rejected"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (ACTIVE, "Active"),
        (PAID, "Paid"),
        (OVERDUE, "Overdue"),
        (DEFAULTED, "Defaulted"),
        (REJECTED, "Rejected"),
    ]

    # Forward-only lifecycle. Loans become paid through repayments, or by an
    # explicit transition once the balance is zero.
    TRANSITIONS = {
        PENDING: (APPROVED, REJECTED),
        APPROVED: (ACTIVE,),
        ACTIVE: (PAID, OVERDUE, DEFAULTED),
        OVERDUE: (PAID, DEFAULTED),
        PAID: (),
        DEFAULTED: (),
        REJECTED: (),
    }

    REPAYABLE_STATUSES = (ACTIVE, OVERDUE)

    member = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="loans"
    )
    loan_number = models.CharField(
        max_length=50, unique=True, default=generate_loan_number
    )
    principal = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    interest_rate = models.DecimalField(
        max_digits=5, decimal_places=2, validators=[MinValueValidator(Decimal("0"))]
    )
    term_months = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    disbursement_date = models.DateTimeField(null=True, blank=True)
    due_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    balance = models.DecimalField(max_digits=15, decimal_places=2)
    intended_purpose = models.TextField(blank=True, null=True)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="approved_loans",
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Loan"
        verbose_name_plural = "Loans"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["member", "status"], name="loans_member_status_idx"),
            models.Index(fields=["status"], name="loans_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0)
                & models.Q(balance__lte=models.F("principal")),
                name="loan_balance_within_principal",
            ),
        ]

    def __str__(self):
        return f"{self.loan_number}"

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, ())

    def save(self, *args, **kwargs):
        if self._state.adding and self.balance is None:
            self.balance = self.principal
        super().save(*args, **kwargs)
