from decimal import Decimal

from rest_framework import serializers
from rest_framework.exceptions import PermissionDenied

from accounts.permissions import can_access, is_system_admin
from savingswithdrawals.models import SavingsWithdrawal
from savings.models import SavingsAccount


class SavingsWithdrawalSerializer(serializers.ModelSerializer):
    savings_account = serializers.SlugRelatedField(
        slug_field="account_number", queryset=SavingsAccount.objects.all()
    )
    withdrawn_by = serializers.CharField(
        source="withdrawn_by.member_no", read_only=True, allow_null=True
    )
    processed_by = serializers.CharField(
        source="processed_by.member_no", read_only=True, allow_null=True
    )
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    savings_account_detail = serializers.SerializerMethodField()

    class Meta:
        model = SavingsWithdrawal
        fields = (
            "savings_account",
            "withdrawn_by",
            "amount",
            "method",
            "reason",
            "status",
            "processed_by",
            "processed_at",
            "identity",
            "created_at",
            "updated_at",
            "reference",
            "savings_account_detail",
        )
        read_only_fields = ("status", "processed_at", "identity")

    def validate_savings_account(self, savings_account):
        request = self.context["request"]
        if not can_access(request.user, savings_account.user):
            raise PermissionDenied(
                "You can only withdraw from your own savings account."
            )
        if not savings_account.is_active:
            raise serializers.ValidationError("This savings account is not active.")
        return savings_account

    def validate(self, attrs):
        savings_account = attrs["savings_account"]
        withdrawal_amount = attrs["amount"]
        # Admin-filed requests skip this check; approval re-checks for everyone
        if not is_system_admin(self.context["request"].user):
            if withdrawal_amount > savings_account.balance:
                raise serializers.ValidationError({"amount": "Insufficient balance."})
        return super().validate(attrs)

    def get_savings_account_detail(self, obj):
        return {
            "account_number": obj.savings_account.account_number,
            "balance": f"{obj.savings_account.balance:.2f}",
            "member": obj.savings_account.user.member_no,
            "member_name": obj.savings_account.user.name,
        }
