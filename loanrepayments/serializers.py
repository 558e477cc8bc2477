from decimal import Decimal

from rest_framework import serializers

from loanrepayments.models import LoanRepayment
from loans.models import Loan


class LoanRepaymentSerializer(serializers.ModelSerializer):
    loan = serializers.SlugRelatedField(
        slug_field="account_number", queryset=Loan.objects.all()
    )
    recorded_by = serializers.CharField(
        source="recorded_by.member_no", read_only=True, allow_null=True
    )
    member = serializers.CharField(source="loan.user.member_no", read_only=True)
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )

    class Meta:
        model = LoanRepayment
        fields = [
            "loan",
            "member",
            "recorded_by",
            "amount",
            "payment_method",
            "identity",
            "created_at",
            "updated_at",
            "reference",
        ]
        read_only_fields = ["identity"]

    def validate_loan(self, loan):
        if loan.status != Loan.APPROVED:
            raise serializers.ValidationError(
                "Repayments can only be recorded against approved loans."
            )
        return loan
