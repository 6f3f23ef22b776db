import uuid
from decimal import Decimal

import accounts.utils
import django.core.validators
import django.db.models.deletion
import loans.utils
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Loan",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reference", models.CharField(default=accounts.utils.generate_reference, editable=False, max_length=20, unique=True)),
                ("loan_number", models.CharField(default=loans.utils.generate_loan_number, max_length=50, unique=True)),
                ("principal", models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))])),
                ("interest_rate", models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("term_months", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("disbursement_date", models.DateTimeField(blank=True, null=True)),
                ("due_date", models.DateTimeField(blank=True, null=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("active", "Active"), ("paid", "Paid"), ("overdue", "Overdue"), ("defaulted", "Defaulted"), ("rejected", "Rejected")], default="pending", max_length=20)),
                ("balance", models.DecimalField(decimal_places=2, max_digits=15)),
                ("intended_purpose", models.TextField(blank=True, null=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approved_loans", to=settings.AUTH_USER_MODEL)),
                ("member", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="loans", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Loan",
                "verbose_name_plural": "Loans",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["member", "status"], name="loans_member_status_idx"),
                    models.Index(fields=["status"], name="loans_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("balance__gte", 0), ("balance__lte", models.F("principal"))),
                        name="loan_balance_within_principal",
                    ),
                ],
            },
        ),
    ]
