from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from savingsproducts.models import SavingsProduct


class SavingsProductSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        required=True,
        validators=[UniqueValidator(queryset=SavingsProduct.objects.all())],
    )

    class Meta:
        model = SavingsProduct
        fields = (
            "name",
            "product_type",
            "interest_rate",
            "min_balance",
            "term_months",
            "description",
            "is_active",
            "created_at",
            "updated_at",
            "reference",
        )
