from decimal import Decimal

from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator
from datetime import date

from accounts.abstracts import (
    TimeStampedModel,
    UniversalIdModel,
    ReferenceModel,
    ApprovalStatusModel,
)
from savings.models import SavingsAccount

User = get_user_model()


class SavingsWithdrawal(
    TimeStampedModel, UniversalIdModel, ReferenceModel, ApprovalStatusModel
):
    PAYMENT_METHODS = [
        ("bank", "Bank Transfer"),
        ("mobile", "Mobile Money"),
        ("cash", "Cash Withdrawal"),
    ]

    savings_account = models.ForeignKey(
        SavingsAccount,
        on_delete=models.CASCADE,
        related_name="withdrawals",
    )
    withdrawn_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name="savings_withdrawals",
        null=True,
        blank=True,
    )
    processed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name="processed_withdrawals",
        null=True,
        blank=True,
    )
    amount = models.DecimalField(
        decimal_places=2,
        max_digits=12,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    method = models.CharField(choices=PAYMENT_METHODS, max_length=20, default="bank")
    reason = models.TextField(blank=True, null=True)
    identity = models.CharField(blank=True, max_length=100, null=True, unique=True)

    class Meta:
        verbose_name = "Savings Withdrawal"
        verbose_name_plural = "Savings Withdrawals"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["savings_account", "created_at"], name="swdr_account_created_idx"
            ),
            models.Index(fields=["status"], name="swdr_status_idx"),
        ]

    def __str__(self):
        return f"Withdrawal of {self.amount} from {self.savings_account}"

    @property
    def owner(self):
        return self.savings_account.user

    def generate_identity(self):
        prefix = "WDR"
        date_str = date.today().strftime("%Y%m%d")
        withdrawals_today = SavingsWithdrawal.objects.filter(
            identity__startswith=f"{prefix}{date_str}"
        ).count()
        return f"{prefix}{date_str}{withdrawals_today + 1:04d}"

    def save(self, *args, **kwargs):
        # Balance changes only through the approval views
        if not self.identity:
            self.identity = self.generate_identity()
        super().save(*args, **kwargs)
