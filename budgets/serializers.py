from decimal import Decimal

from rest_framework import serializers

from budgets.models import BudgetCategory, BudgetRecommendation


class BudgetCategorySerializer(serializers.ModelSerializer):
    member = serializers.CharField(source="user.member_no", read_only=True)
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00")
    )

    class Meta:
        model = BudgetCategory
        fields = (
            "member",
            "category",
            "amount",
            "notes",
            "reference",
            "created_at",
            "updated_at",
        )


class BudgetRecommendationSerializer(serializers.ModelSerializer):
    member = serializers.CharField(source="user.member_no", read_only=True)

    class Meta:
        model = BudgetRecommendation
        fields = (
            "member",
            "recommendation_type",
            "title",
            "description",
            "suggested_amount",
            "category",
            "is_implemented",
            "reference",
            "created_at",
        )
        # Only the implemented flag is member-editable
        read_only_fields = (
            "recommendation_type",
            "title",
            "description",
            "suggested_amount",
            "category",
        )


class GenerateRecommendationsSerializer(serializers.Serializer):
    member = serializers.CharField(required=False, help_text="Member number")
