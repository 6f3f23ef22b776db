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
            name="Transaction",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reference", models.CharField(default=accounts.utils.generate_reference, editable=False, max_length=20, unique=True)),
                ("type", models.CharField(choices=[("deposit", "Deposit"), ("withdrawal", "Withdrawal"), ("loan_disbursement", "Loan Disbursement"), ("fee", "Fee"), ("loan_payment", "Loan Payment")], max_length=30)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(0.01, message="Amount must be greater than 0")])),
                ("description", models.TextField()),
                ("transaction_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("processed_by", models.CharField(max_length=255)),
                ("loan", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="transactions", to="loans.loan")),
                ("member", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="transactions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Transaction",
                "verbose_name_plural": "Transactions",
                "ordering": ["-transaction_date"],
                "indexes": [
                    models.Index(fields=["member", "transaction_date"], name="txn_member_date_idx"),
                    models.Index(fields=["loan", "transaction_date"], name="txn_loan_date_idx"),
                    models.Index(fields=["type", "transaction_date"], name="txn_type_date_idx"),
                ],
            },
        ),
    ]
