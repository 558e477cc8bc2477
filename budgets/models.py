from decimal import Decimal

from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel

User = get_user_model()

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


class BudgetCategory(TimeStampedModel, UniversalIdModel, ReferenceModel):
    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="budget_categories"
    )
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    notes = models.TextField(blank=True, null=True)

    class Meta:
        verbose_name = "Budget Category"
        verbose_name_plural = "Budget Categories"
        ordering = ["category", "-created_at"]

    def __str__(self):
        return f"{self.user.member_no} - {self.category}: {self.amount}"

    @property
    def owner(self):
        return self.user


class BudgetRecommendation(TimeStampedModel, UniversalIdModel, ReferenceModel):
    SAVING = "SAVING"
    SPENDING = "SPENDING"
    INVESTMENT = "INVESTMENT"
    DEBT_MANAGEMENT = "DEBT_MANAGEMENT"
    EMERGENCY_FUND = "EMERGENCY_FUND"
    TYPE_CHOICES = [
        (SAVING, "Saving"),
        (SPENDING, "Spending"),
        (INVESTMENT, "Investment"),
        (DEBT_MANAGEMENT, "Debt Management"),
        (EMERGENCY_FUND, "Emergency Fund"),
    ]

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="budget_recommendations"
    )
    recommendation_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    title = models.CharField(max_length=255)
    description = models.TextField()
    suggested_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    category = models.CharField(
        max_length=20, choices=CATEGORY_CHOICES, null=True, blank=True
    )
    is_implemented = models.BooleanField(default=False)

    class Meta:
        verbose_name = "Budget Recommendation"
        verbose_name_plural = "Budget Recommendations"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.user.member_no} - {self.title}"

    @property
    def owner(self):
        return self.user
