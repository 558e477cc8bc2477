from decimal import Decimal

from rest_framework import serializers
from rest_framework.exceptions import PermissionDenied
from django.contrib.auth import get_user_model

from accounts.permissions import can_access
from loans.models import Loan
from loans.utils import check_loan_eligibility
from loanproducts.models import LoanProduct
from loanrepayments.serializers import LoanRepaymentSerializer

User = get_user_model()


class LoanSerializer(serializers.ModelSerializer):
    product = serializers.SlugRelatedField(
        slug_field="name",
        queryset=LoanProduct.objects.all(),
        required=False,
        allow_null=True,
    )
    member = serializers.CharField(source="user.member_no", read_only=True)
    member_name = serializers.CharField(source="user.name", read_only=True)
    # Admins may apply on behalf of another member
    member_no = serializers.CharField(write_only=True, required=False)
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    term = serializers.IntegerField(min_value=1)
    processed_by = serializers.CharField(
        source="processed_by.member_no", read_only=True, allow_null=True
    )
    total_repaid = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )
    outstanding_balance = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )
    repayments = LoanRepaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Loan
        fields = [
            "member",
            "member_name",
            "member_no",
            "product",
            "account_number",
            "amount",
            "purpose",
            "term",
            "interest_rate",
            "description",
            "status",
            "processed_by",
            "processed_at",
            "total_repaid",
            "outstanding_balance",
            "reference",
            "created_at",
            "updated_at",
            "repayments",
        ]
        read_only_fields = [
            "account_number",
            "interest_rate",
            "status",
            "processed_at",
        ]

    def validate_member_no(self, member_no):
        try:
            member = User.objects.get(member_no=member_no)
        except User.DoesNotExist:
            raise serializers.ValidationError(
                "User with this member number does not exist."
            )
        if not can_access(self.context["request"].user, member):
            raise PermissionDenied("You can only apply for loans for yourself.")
        return member

    def validate(self, attrs):
        member = attrs.get("member_no") or self.context["request"].user
        check_loan_eligibility(
            member, attrs.get("product"), attrs["amount"], attrs["term"]
        )
        attrs["member"] = member
        return attrs

    def create(self, validated_data):
        validated_data.pop("member_no", None)
        validated_data["user"] = validated_data.pop("member")
        product = validated_data.get("product")
        validated_data["interest_rate"] = product.interest_rate if product else None
        return super().create(validated_data)


class MinimalLoanSerializer(serializers.ModelSerializer):
    product = serializers.CharField(
        source="product.name", read_only=True, allow_null=True
    )
    outstanding_balance = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = Loan
        fields = (
            "account_number",
            "product",
            "amount",
            "purpose",
            "term",
            "status",
            "outstanding_balance",
            "reference",
        )
