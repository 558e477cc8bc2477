import logging
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsOwnerOrSystemAdmin, is_system_admin
from savingsdeposits.models import SavingsDeposit
from savingsdeposits.serializers import SavingsDepositSerializer
from savingsdeposits.utils import send_deposit_made_email

logger = logging.getLogger(__name__)


class SavingsDepositListCreateView(generics.ListCreateAPIView):
    queryset = SavingsDeposit.objects.all()
    serializer_class = SavingsDepositSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related(
            "savings_account", "savings_account__user", "deposited_by"
        )
        if is_system_admin(self.request.user):
            return queryset
        return queryset.filter(savings_account__user=self.request.user)

    def perform_create(self, serializer):
        deposit = serializer.save(deposited_by=self.request.user)
        # Send email to the account owner if they have an email address
        account_owner = deposit.savings_account.user
        if account_owner.email:
            send_deposit_made_email(account_owner, deposit)


class SavingsDepositView(generics.RetrieveAPIView):
    queryset = SavingsDeposit.objects.all()
    serializer_class = SavingsDepositSerializer
    permission_classes = [
        IsOwnerOrSystemAdmin,
    ]
    lookup_field = "reference"
