from rest_framework import serializers


class TransactionSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.CharField()
    date = serializers.DateTimeField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
    reference = serializers.CharField(allow_null=True)


class SACCOSummarySerializer(serializers.Serializer):
    total_savings = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_loans = serializers.DecimalField(max_digits=14, decimal_places=2)
    active_members = serializers.IntegerField()
    loan_recovery_rate = serializers.DecimalField(max_digits=7, decimal_places=2)
    monthly_growth = serializers.DecimalField(max_digits=14, decimal_places=2)
    growth_rate = serializers.DecimalField(max_digits=9, decimal_places=2)


class MonthlySavingsSerializer(serializers.Serializer):
    month = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class LoanDistributionSerializer(serializers.Serializer):
    purpose = serializers.CharField()
    count = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
