import logging
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import can_access
from savings.models import SavingsAccount
from transactions.serializers import TransactionSerializer
from transactions.utils import get_member_transactions

logger = logging.getLogger(__name__)

User = get_user_model()

RECENT_TRANSACTIONS_LIMIT = 5


class RecentTransactionsView(generics.GenericAPIView):
    """
    The caller's latest transactions across savings and loans.
    """

    serializer_class = TransactionSerializer
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        if not SavingsAccount.objects.filter(user=request.user).exists():
            return Response(
                {"detail": "Savings account not found."},
                status=status.HTTP_404_NOT_FOUND,
            )

        transactions = get_member_transactions(
            request.user, limit=RECENT_TRANSACTIONS_LIMIT
        )
        serializer = self.get_serializer(transactions, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class MemberTransactionsView(generics.GenericAPIView):
    serializer_class = TransactionSerializer
    permission_classes = (IsAuthenticated,)

    def get(self, request, reference):
        member = get_object_or_404(User, reference=reference)
        if not can_access(request.user, member):
            raise PermissionDenied("You can only view your own transactions.")

        if not SavingsAccount.objects.filter(user=member).exists():
            return Response(
                {"detail": "Savings account not found."},
                status=status.HTTP_404_NOT_FOUND,
            )

        transactions = get_member_transactions(member)
        serializer = self.get_serializer(transactions, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)
