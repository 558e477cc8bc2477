import logging
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsOwnerOrSystemAdmin, can_access, is_system_admin
from savings.models import SavingsAccount
from savings.serializers import SavingsAccountSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class SavingsAccountListView(generics.ListAPIView):
    queryset = SavingsAccount.objects.all()
    serializer_class = SavingsAccountSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related("user", "product").prefetch_related(
            "deposits", "withdrawals"
        )
        if is_system_admin(self.request.user):
            return queryset
        return queryset.filter(user=self.request.user)


class SavingsAccountDetailView(generics.RetrieveUpdateAPIView):
    """
    Owners read their account; only admins may link a product or deactivate it.
    """

    queryset = SavingsAccount.objects.all()
    serializer_class = SavingsAccountSerializer
    permission_classes = [
        IsOwnerOrSystemAdmin,
    ]
    lookup_field = "account_number"
    http_method_names = ["get", "patch", "head", "options"]

    def perform_update(self, serializer):
        if not is_system_admin(self.request.user):
            raise PermissionDenied("Only administrators can update savings accounts.")

        previous_product_id = serializer.instance.product_id
        account = serializer.save()
        if account.product_id != previous_product_id:
            account.maturity_date = account.compute_maturity_date()
            account.save(update_fields=["maturity_date", "updated_at"])
            logger.info(
                f"SavingsAccount {account.account_number} linked to "
                f"{account.product.name if account.product else 'no product'}"
            )


class MemberSavingsAccountView(generics.RetrieveAPIView):
    """
    A member's savings account, looked up by the member's reference.
    """

    serializer_class = SavingsAccountSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_object(self):
        member = get_object_or_404(User, reference=self.kwargs["reference"])
        if not can_access(self.request.user, member):
            raise PermissionDenied("You can only view your own savings account.")
        return get_object_or_404(SavingsAccount, user=member)
