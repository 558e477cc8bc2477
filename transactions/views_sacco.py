from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.utils import timezone
from dateutil.relativedelta import relativedelta
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from accounts.permissions import IsSystemAdmin
from accounts.utils import to_decimal
from loans.models import Loan
from loanrepayments.models import LoanRepayment
from savings.models import SavingsAccount
from savingsdeposits.models import SavingsDeposit
from savingswithdrawals.models import SavingsWithdrawal
from transactions.serializers import (
    SACCOSummarySerializer,
    MonthlySavingsSerializer,
    LoanDistributionSerializer,
)

User = get_user_model()

ZERO = Decimal("0.00")
SAVINGS_GROWTH_MONTHS = 6


def total(queryset, field="amount"):
    return queryset.aggregate(total=Sum(field))["total"] or ZERO


def percentage(part, whole):
    if not whole:
        return ZERO
    return to_decimal(part / whole * 100)


def net_savings_flow(start=None, end=None):
    """
    Deposits less approved withdrawals within [start, end).
    Withdrawals count from the moment they were approved.
    """
    deposits = SavingsDeposit.objects.all()
    withdrawals = SavingsWithdrawal.objects.filter(status=SavingsWithdrawal.APPROVED)
    if start is not None:
        deposits = deposits.filter(created_at__gte=start)
        withdrawals = withdrawals.filter(processed_at__gte=start)
    if end is not None:
        deposits = deposits.filter(created_at__lt=end)
        withdrawals = withdrawals.filter(processed_at__lt=end)
    return total(deposits) - total(withdrawals)


def start_of_month(moment=None):
    moment = moment or timezone.now()
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class SACCOSummaryView(APIView):
    """
    Consolidated financial overview of the entire SACCO.
    """

    permission_classes = (IsSystemAdmin,)

    def get(self, request):
        total_savings = total(SavingsAccount.objects.all(), "balance")
        approved_loans = Loan.objects.filter(status=Loan.APPROVED)
        total_loans = total(approved_loans)
        total_repaid = total(
            LoanRepayment.objects.filter(loan__status=Loan.APPROVED)
        )
        monthly_growth = net_savings_flow(start=start_of_month())

        data = {
            "total_savings": total_savings,
            "total_loans": total_loans,
            "active_members": User.objects.filter(role=User.MEMBER).count(),
            "loan_recovery_rate": percentage(total_repaid, total_loans),
            "monthly_growth": monthly_growth,
            "growth_rate": percentage(monthly_growth, total_savings),
        }
        return Response(SACCOSummarySerializer(data).data, status=status.HTTP_200_OK)


class SavingsGrowthView(APIView):
    """
    Total savings held at the end of each of the last six months.
    """

    permission_classes = (IsSystemAdmin,)

    def get(self, request):
        current_month = start_of_month()
        data = []
        for months_back in range(SAVINGS_GROWTH_MONTHS - 1, -1, -1):
            month = current_month - relativedelta(months=months_back)
            month_end = month + relativedelta(months=1)
            data.append(
                {
                    "month": month.strftime("%b %Y"),
                    "amount": net_savings_flow(end=month_end),
                }
            )
        return Response(
            MonthlySavingsSerializer(data, many=True).data, status=status.HTTP_200_OK
        )


class LoanDistributionView(APIView):
    """
    Approved loans grouped by purpose.
    """

    permission_classes = (IsSystemAdmin,)

    def get(self, request):
        groups = (
            Loan.objects.filter(status=Loan.APPROVED)
            .values("purpose")
            .annotate(count=Count("id"), amount=Sum("amount"))
            .order_by("purpose")
        )
        data = [
            {
                "purpose": group["purpose"].capitalize(),
                "count": group["count"],
                "amount": group["amount"] or ZERO,
            }
            for group in groups
        ]
        return Response(
            LoanDistributionSerializer(data, many=True).data, status=status.HTTP_200_OK
        )
