from decimal import Decimal

from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator
from datetime import date

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel
from loans.models import Loan

User = get_user_model()


class LoanRepayment(TimeStampedModel, UniversalIdModel, ReferenceModel):
    PAYMENT_METHOD_CHOICES = [
        ("bank", "Bank Transfer"),
        ("mobile", "Mobile Money"),
        ("cash", "Cash"),
    ]

    loan = models.ForeignKey(
        Loan,
        on_delete=models.CASCADE,
        related_name="repayments",
    )
    recorded_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name="recorded_repayments",
        null=True,
        blank=True,
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[
            MinValueValidator(Decimal("0.01"), message="Amount must be greater than 0")
        ],
    )
    payment_method = models.CharField(
        max_length=20, choices=PAYMENT_METHOD_CHOICES, default="cash"
    )
    identity = models.CharField(max_length=100, blank=True, null=True, unique=True)

    class Meta:
        verbose_name = "Loan Repayment"
        verbose_name_plural = "Loan Repayments"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["loan", "created_at"], name="lrep_loan_created_idx"),
        ]

    def __str__(self):
        return f"Repayment {self.identity} for Loan {self.loan.account_number} - Amount: {self.amount}"

    @property
    def owner(self):
        return self.loan.user

    def generate_identity(self):
        prefix = "LR"
        date_str = date.today().strftime("%Y%m%d")
        repayments_today = LoanRepayment.objects.filter(
            identity__startswith=f"{prefix}{date_str}"
        ).count()
        return f"{prefix}{date_str}{repayments_today + 1:04d}"

    def save(self, *args, **kwargs):
        # Repayments are a record only: loan status and savings are untouched
        if not self._state.adding:
            raise ValueError("Loan repayments cannot be modified once recorded.")
        if not self.identity:
            self.identity = self.generate_identity()
        super().save(*args, **kwargs)
