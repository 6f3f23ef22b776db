from django.db import models
from django.conf import settings
from django.utils import timezone

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel


class UnfreezeRequest(TimeStampedModel, UniversalIdModel, ReferenceModel):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (DENIED, "Denied"),
    ]
    DECISIONS = (APPROVED, DENIED)

    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="unfreeze_requests",
    )
    reason = models.TextField()
    requested_at = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="processed_unfreeze_requests",
    )
    admin_notes = models.TextField(blank=True, null=True)
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Unfreeze Request"
        verbose_name_plural = "Unfreeze Requests"
        ordering = ["-requested_at"]
        indexes = [
            models.Index(fields=["member", "status"], name="unfreeze_member_status_idx"),
            models.Index(fields=["status"], name="unfreeze_status_idx"),
        ]

    def __str__(self):
        return f"Unfreeze request {self.reference} by {self.member.member_number} - {self.status}"
