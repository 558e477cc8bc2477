from decimal import Decimal

from rest_framework import serializers
from rest_framework.exceptions import PermissionDenied

from accounts.permissions import can_access
from savingsdeposits.models import SavingsDeposit
from savings.models import SavingsAccount


class SavingsDepositSerializer(serializers.ModelSerializer):
    savings_account = serializers.SlugRelatedField(
        slug_field="account_number", queryset=SavingsAccount.objects.all()
    )
    deposited_by = serializers.CharField(
        source="deposited_by.member_no", read_only=True, allow_null=True
    )
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )

    class Meta:
        model = SavingsDeposit
        fields = [
            "savings_account",
            "deposited_by",
            "amount",
            "method",
            "notes",
            "identity",
            "created_at",
            "updated_at",
            "reference",
        ]
        read_only_fields = ["identity"]

    def validate_savings_account(self, savings_account):
        request = self.context["request"]
        if not can_access(request.user, savings_account.user):
            raise PermissionDenied("You can only deposit into your own savings account.")
        if not savings_account.is_active:
            raise serializers.ValidationError("This savings account is not active.")
        return savings_account
