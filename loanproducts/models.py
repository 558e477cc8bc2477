from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel


class LoanProduct(TimeStampedModel, UniversalIdModel, ReferenceModel):
    LOAN_TYPE_CHOICES = [
        ("PERSONAL", "Personal"),
        ("DEVELOPMENT", "Development"),
        ("EDUCATION", "Education"),
        ("EMERGENCY", "Emergency"),
        ("BUSINESS", "Business"),
        ("HOME", "Home"),
        ("VEHICLE", "Vehicle"),
    ]

    name = models.CharField(max_length=255, unique=True)
    loan_type = models.CharField(max_length=20, choices=LOAN_TYPE_CHOICES)
    interest_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    max_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    max_term = models.PositiveIntegerField(help_text="Maximum term in months")
    # Share of the requested amount the member must already hold in savings
    min_savings_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[
            MinValueValidator(Decimal("0.00")),
            MaxValueValidator(Decimal("100.00")),
        ],
    )
    description = models.TextField()
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Loan Product"
        verbose_name_plural = "Loan Products"
        ordering = ["name"]

    def __str__(self):
        return self.name
