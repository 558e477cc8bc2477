from decimal import Decimal

from django.db import models
from django.db.models import Sum
from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator

from accounts.abstracts import (
    TimeStampedModel,
    UniversalIdModel,
    ReferenceModel,
    ApprovalStatusModel,
)
from loanproducts.models import LoanProduct
from loans.utils import generate_loan_account_number

User = get_user_model()


class Loan(TimeStampedModel, UniversalIdModel, ReferenceModel, ApprovalStatusModel):
    PURPOSE_CHOICES = [
        ("business", "Business"),
        ("education", "Education"),
        ("personal", "Personal"),
        ("medical", "Medical"),
        ("other", "Other"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="loans")
    product = models.ForeignKey(
        LoanProduct,
        on_delete=models.PROTECT,
        related_name="loans",
        null=True,
        blank=True,
    )
    account_number = models.CharField(
        max_length=20, unique=True, default=generate_loan_account_number
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    purpose = models.CharField(max_length=20, choices=PURPOSE_CHOICES)
    term = models.PositiveIntegerField(
        validators=[MinValueValidator(1)], help_text="Term in months"
    )
    # Copied from the product when the application is filed
    interest_rate = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    description = models.TextField(blank=True, null=True)
    processed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="processed_loans",
    )

    class Meta:
        verbose_name = "Loan"
        verbose_name_plural = "Loans"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="loan_user_created_idx"),
            models.Index(fields=["status"], name="loan_status_idx"),
        ]

    def __str__(self):
        return f"{self.account_number} - {self.amount}"

    @property
    def owner(self):
        return self.user

    @property
    def total_repaid(self):
        total = self.repayments.aggregate(total=Sum("amount"))["total"]
        return total or Decimal("0.00")

    @property
    def outstanding_balance(self):
        """Amount less repayments, floored at zero. Repayments never change status."""
        return max(self.amount - self.total_repaid, Decimal("0.00"))
