import uuid

import accounts.utils
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("loans", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Repayment",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reference", models.CharField(default=accounts.utils.generate_reference, editable=False, max_length=20, unique=True)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(0.01, message="Amount must be greater than 0")])),
                ("payment_method", models.CharField(choices=[("cash", "Cash"), ("bank_transfer", "Bank Transfer"), ("mobile_money", "Mobile Money")], default="cash", max_length=30)),
                ("payment_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("notes", models.TextField(blank=True, null=True)),
                ("loan", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="repayments", to="loans.loan")),
                ("processed_by", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="processed_repayments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Repayment",
                "verbose_name_plural": "Repayments",
                "ordering": ["-payment_date"],
                "indexes": [
                    models.Index(fields=["loan", "payment_date"], name="repayment_loan_date_idx"),
                    models.Index(fields=["processed_by", "payment_date"], name="repayment_processor_date_idx"),
                ],
            },
        ),
    ]
