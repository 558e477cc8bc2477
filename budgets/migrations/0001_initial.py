import uuid
from decimal import Decimal

import accounts.utils
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

CATEGORY_CHOICES = [
    ("HOUSING", "Housing"),
    ("TRANSPORTATION", "Transportation"),
    ("FOOD", "Food"),
    ("UTILITIES", "Utilities"),
    ("INSURANCE", "Insurance"),
    ("HEALTHCARE", "Healthcare"),
    ("PERSONAL", "Personal"),
    ("ENTERTAINMENT", "Entertainment"),
    ("EDUCATION", "Education"),
    ("SAVINGS", "Savings"),
    ("DEBT", "Debt"),
    ("OTHER", "Other"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BudgetCategory",
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
                    "category",
                    models.CharField(choices=CATEGORY_CHOICES, max_length=20),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="budget_categories",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Budget Category",
                "verbose_name_plural": "Budget Categories",
                "ordering": ["category", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="BudgetRecommendation",
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
                    "recommendation_type",
                    models.CharField(
                        choices=[
                            ("SAVING", "Saving"),
                            ("SPENDING", "Spending"),
                            ("INVESTMENT", "Investment"),
                            ("DEBT_MANAGEMENT", "Debt Management"),
                            ("EMERGENCY_FUND", "Emergency Fund"),
                        ],
                        max_length=20,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                (
                    "suggested_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        blank=True, choices=CATEGORY_CHOICES, max_length=20, null=True
                    ),
                ),
                ("is_implemented", models.BooleanField(default=False)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="budget_recommendations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Budget Recommendation",
                "verbose_name_plural": "Budget Recommendations",
                "ordering": ["-created_at"],
            },
        ),
    ]
