from rest_framework import serializers

from savings.models import SavingsAccount
from savingsproducts.models import SavingsProduct
from savingsdeposits.serializers import SavingsDepositSerializer
from savingswithdrawals.serializers import SavingsWithdrawalSerializer


class SavingsAccountSerializer(serializers.ModelSerializer):
    member = serializers.CharField(source="user.member_no", read_only=True)
    member_name = serializers.CharField(source="user.name", read_only=True)
    product = serializers.SlugRelatedField(
        queryset=SavingsProduct.objects.filter(is_active=True),
        slug_field="name",
        required=False,
        allow_null=True,
    )
    deposits = SavingsDepositSerializer(many=True, read_only=True)
    withdrawals = SavingsWithdrawalSerializer(many=True, read_only=True)

    class Meta:
        model = SavingsAccount
        fields = [
            "member",
            "member_name",
            "product",
            "account_number",
            "balance",
            "maturity_date",
            "is_active",
            "reference",
            "created_at",
            "updated_at",
            "deposits",
            "withdrawals",
        ]
        read_only_fields = ["account_number", "balance", "maturity_date"]


class MinimalSavingsAccountSerializer(serializers.ModelSerializer):
    product = serializers.CharField(
        source="product.name", read_only=True, allow_null=True
    )

    class Meta:
        model = SavingsAccount
        fields = [
            "account_number",
            "product",
            "balance",
            "maturity_date",
            "is_active",
            "reference",
        ]
