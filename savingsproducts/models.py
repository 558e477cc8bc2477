from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel


class SavingsProduct(UniversalIdModel, TimeStampedModel, ReferenceModel):
    PRODUCT_TYPE_CHOICES = [
        ("REGULAR", "Regular"),
        ("FIXED_DEPOSIT", "Fixed Deposit"),
        ("EDUCATION", "Education"),
        ("RETIREMENT", "Retirement"),
        ("HOLIDAY", "Holiday"),
        ("EMERGENCY", "Emergency"),
    ]

    name = models.CharField(max_length=255, unique=True)
    product_type = models.CharField(max_length=20, choices=PRODUCT_TYPE_CHOICES)
    interest_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    min_balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    term_months = models.PositiveIntegerField(null=True, blank=True)
    description = models.TextField()
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Savings Product"
        verbose_name_plural = "Savings Products"
        ordering = ["name"]

    def __str__(self):
        return self.name
