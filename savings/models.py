from decimal import Decimal

from django.db import models
from django.contrib.auth import get_user_model
from django.utils import timezone
from dateutil.relativedelta import relativedelta

from accounts.abstracts import TimeStampedModel, UniversalIdModel, ReferenceModel
from savingsproducts.models import SavingsProduct
from savings.utils import generate_account_number

User = get_user_model()


class SavingsAccount(TimeStampedModel, UniversalIdModel, ReferenceModel):
    user = models.OneToOneField(
        User, on_delete=models.CASCADE, related_name="savings_account"
    )
    product = models.ForeignKey(
        SavingsProduct,
        on_delete=models.PROTECT,
        related_name="savings_accounts",
        null=True,
        blank=True,
    )
    account_number = models.CharField(
        max_length=20, unique=True, default=generate_account_number
    )
    # Mutated only by deposits and approved withdrawals
    balance = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    maturity_date = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Savings Account"
        verbose_name_plural = "Savings Accounts"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.account_number} - {self.user.get_full_name()}"

    @property
    def owner(self):
        return self.user

    def compute_maturity_date(self, start=None):
        if not self.product or not self.product.term_months:
            return None
        start = start or timezone.now()
        return start + relativedelta(months=self.product.term_months)

    def save(self, *args, **kwargs):
        if self.product_id and not self.maturity_date:
            self.maturity_date = self.compute_maturity_date()
        super().save(*args, **kwargs)
