import uuid
from decimal import Decimal

import accounts.utils
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("savings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SavingsDeposit",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "reference",
                    models.CharField(
                        default=accounts.utils.generate_reference,
                        editable=False,
                        max_length=20,
                        unique=True,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[
                            django.core.validators.MinValueValidator(
                                Decimal("0.01"), message="Amount must be greater than 0"
                            )
                        ],
                    ),
                ),
                (
                    "method",
                    models.CharField(
                        choices=[
                            ("bank", "Bank Transfer"),
                            ("mobile", "Mobile Money"),
                            ("cash", "Cash Deposit"),
                        ],
                        default="bank",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "identity",
                    models.CharField(blank=True, max_length=100, null=True, unique=True),
                ),
                (
                    "deposited_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="savings_deposits",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "savings_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="deposits",
                        to="savings.savingsaccount",
                    ),
                ),
            ],
            options={
                "verbose_name": "Savings Deposit",
                "verbose_name_plural": "Savings Deposits",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["savings_account", "created_at"],
                        name="sdep_account_created_idx",
                    ),
                    models.Index(
                        fields=["deposited_by", "created_at"],
                        name="sdep_depositor_created_idx",
                    ),
                ],
            },
        ),
    ]
