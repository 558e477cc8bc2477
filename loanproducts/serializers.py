from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from loanproducts.models import LoanProduct


class LoanProductSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        required=True,
        validators=[UniqueValidator(queryset=LoanProduct.objects.all())],
    )
    max_term = serializers.IntegerField(min_value=1)

    class Meta:
        model = LoanProduct
        fields = (
            "name",
            "loan_type",
            "interest_rate",
            "max_amount",
            "max_term",
            "min_savings_percentage",
            "description",
            "is_active",
            "created_at",
            "updated_at",
            "reference",
        )
