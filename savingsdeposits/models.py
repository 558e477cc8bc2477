import logging
from decimal import Decimal

from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator
from django.db import transaction
from datetime import date

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel
from savings.models import SavingsAccount

logger = logging.getLogger(__name__)

User = get_user_model()


class SavingsDeposit(TimeStampedModel, UniversalIdModel, ReferenceModel):
    PAYMENT_METHOD_CHOICES = [
        ("bank", "Bank Transfer"),
        ("mobile", "Mobile Money"),
        ("cash", "Cash Deposit"),
    ]

    savings_account = models.ForeignKey(
        SavingsAccount,
        on_delete=models.CASCADE,
        related_name="deposits",
    )
    deposited_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name="savings_deposits",
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
    method = models.CharField(
        max_length=20, choices=PAYMENT_METHOD_CHOICES, default="bank"
    )
    notes = models.TextField(blank=True, null=True)
    identity = models.CharField(max_length=100, blank=True, null=True, unique=True)

    class Meta:
        verbose_name = "Savings Deposit"
        verbose_name_plural = "Savings Deposits"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["savings_account", "created_at"], name="sdep_account_created_idx"
            ),
            models.Index(
                fields=["deposited_by", "created_at"], name="sdep_depositor_created_idx"
            ),
        ]

    def __str__(self):
        return f"Deposit {self.reference} - {self.amount} to {self.savings_account}"

    @property
    def owner(self):
        return self.savings_account.user

    def generate_identity(self):
        prefix = "DEP"
        date_str = date.today().strftime("%Y%m%d")
        deposits_today = SavingsDeposit.objects.filter(
            identity__startswith=f"{prefix}{date_str}"
        ).count()
        return f"{prefix}{date_str}{deposits_today + 1:04d}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Deposits are immutable once recorded.")

        # The deposit row and the balance bump commit together or not at all
        with transaction.atomic():
            account = SavingsAccount.objects.select_for_update().get(
                pk=self.savings_account_id
            )
            if not self.identity:
                self.identity = self.generate_identity()
            balance_before = account.balance
            account.balance = balance_before + self.amount
            account.save(update_fields=["balance", "updated_at"])
            self.savings_account = account
            super().save(*args, **kwargs)

        logger.info(
            f"Deposit {self.identity}: {account.account_number} "
            f"{balance_before} + {self.amount} = {account.balance}"
        )
