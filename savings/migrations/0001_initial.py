import uuid

import accounts.utils
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Savings",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reference", models.CharField(default=accounts.utils.generate_reference, editable=False, max_length=20, unique=True)),
                ("balance", models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                ("last_updated", models.DateTimeField(auto_now=True)),
                ("member", models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name="savings", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Savings",
                "verbose_name_plural": "Savings",
                "ordering": ["-last_updated"],
            },
        ),
    ]
