from django.db import models
from django.conf import settings

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel


class Savings(TimeStampedModel, UniversalIdModel, ReferenceModel):
    member = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="savings"
    )
    balance = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Savings"
        verbose_name_plural = "Savings"
        ordering = ["-last_updated"]

    def __str__(self):
        return f"{self.member.member_number} - {self.balance}"
