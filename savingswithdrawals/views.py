import logging
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from savingswithdrawals.models import SavingsWithdrawal
from savings.models import SavingsAccount
from accounts.permissions import IsSystemAdmin, IsOwnerOrSystemAdmin, is_system_admin
from savingswithdrawals.serializers import SavingsWithdrawalSerializer
from savingswithdrawals.utils import (
    send_withdrawal_request_email,
    send_withdrawal_status_email,
)

logger = logging.getLogger(__name__)


class SavingsWithdrawalListCreateView(generics.ListCreateAPIView):
    queryset = SavingsWithdrawal.objects.all()
    serializer_class = SavingsWithdrawalSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related(
            "savings_account", "savings_account__user", "withdrawn_by", "processed_by"
        )
        if is_system_admin(self.request.user):
            return queryset
        return queryset.filter(savings_account__user=self.request.user)

    def perform_create(self, serializer):
        withdrawal = serializer.save(withdrawn_by=self.request.user)
        logger.info(
            f"Withdrawal {withdrawal.identity} of {withdrawal.amount} requested "
            f"on {withdrawal.savings_account.account_number} by {self.request.user.member_no}"
        )
        owner = withdrawal.savings_account.user
        if owner.email:
            send_withdrawal_request_email(owner, withdrawal)


class PendingSavingsWithdrawalListView(generics.ListAPIView):
    queryset = SavingsWithdrawal.objects.filter(status=SavingsWithdrawal.PENDING)
    serializer_class = SavingsWithdrawalSerializer
    permission_classes = [
        IsSystemAdmin,
    ]

    def get_queryset(self):
        return self.queryset.select_related(
            "savings_account", "savings_account__user", "withdrawn_by"
        )


class SavingsWithdrawalDetailView(generics.RetrieveAPIView):
    queryset = SavingsWithdrawal.objects.all()
    serializer_class = SavingsWithdrawalSerializer
    lookup_field = "reference"
    permission_classes = [
        IsOwnerOrSystemAdmin,
    ]


# SACCO Admin approves or rejects savings withdrawals


class SavingsWithdrawalProcessView(generics.GenericAPIView):
    """
    Moves a PENDING withdrawal to a terminal status.
    Subclasses implement ``process``; returning a message aborts with 400.
    """

    queryset = SavingsWithdrawal.objects.all()
    serializer_class = SavingsWithdrawalSerializer
    permission_classes = [
        IsSystemAdmin,
    ]
    lookup_field = "reference"
    success_message = None

    def process(self, withdrawal, account):
        raise NotImplementedError

    def post(self, request, reference):
        with transaction.atomic():
            withdrawal = get_object_or_404(
                self.queryset.select_for_update(), reference=reference
            )
            if not withdrawal.is_pending:
                return Response(
                    {"detail": "Withdrawal already processed."},
                    status=status.HTTP_400_BAD_REQUEST,
                )

            account = SavingsAccount.objects.select_for_update().get(
                pk=withdrawal.savings_account_id
            )
            error = self.process(withdrawal, account)
            if error:
                return Response({"detail": error}, status=status.HTTP_400_BAD_REQUEST)

            withdrawal.processed_by = request.user
            withdrawal.processed_at = timezone.now()
            withdrawal.save(
                update_fields=["status", "processed_by", "processed_at", "updated_at"]
            )

        logger.info(
            f"Withdrawal {withdrawal.identity} {withdrawal.status} by {request.user.member_no}"
        )
        owner = account.user
        if owner.email:
            send_withdrawal_status_email(owner, withdrawal)

        serializer = self.get_serializer(withdrawal)
        return Response(
            {"detail": self.success_message, "withdrawal": serializer.data},
            status=status.HTTP_200_OK,
        )


class SavingsWithdrawalApproveView(SavingsWithdrawalProcessView):
    success_message = "Withdrawal approved."

    def process(self, withdrawal, account):
        # Balance may have moved since the request was filed
        if withdrawal.amount > account.balance:
            logger.warning(
                f"Withdrawal {withdrawal.identity} of {withdrawal.amount} exceeds "
                f"balance {account.balance} on {account.account_number}"
            )
            return "Insufficient balance."

        account.balance -= withdrawal.amount
        account.save(update_fields=["balance", "updated_at"])
        withdrawal.status = SavingsWithdrawal.APPROVED
        return None


class SavingsWithdrawalRejectView(SavingsWithdrawalProcessView):
    success_message = "Withdrawal rejected."

    def process(self, withdrawal, account):
        withdrawal.status = SavingsWithdrawal.REJECTED
        return None
