import logging
from rest_framework import generics

from accounts.permissions import IsSystemAdminOrReadOnly, is_system_admin
from loanrepayments.models import LoanRepayment
from loanrepayments.serializers import LoanRepaymentSerializer

logger = logging.getLogger(__name__)


class LoanRepaymentListCreateView(generics.ListCreateAPIView):
    """
    Admins record repayments; members list those made on their own loans.
    """

    queryset = LoanRepayment.objects.all()
    serializer_class = LoanRepaymentSerializer
    permission_classes = [
        IsSystemAdminOrReadOnly,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related("loan", "loan__user", "recorded_by")
        if is_system_admin(self.request.user):
            return queryset
        return queryset.filter(loan__user=self.request.user)

    def perform_create(self, serializer):
        repayment = serializer.save(recorded_by=self.request.user)
        logger.info(
            f"Repayment {repayment.identity} of {repayment.amount} recorded on "
            f"loan {repayment.loan.account_number} by {self.request.user.member_no}"
        )


class LoanRepaymentDetailView(generics.RetrieveAPIView):
    queryset = LoanRepayment.objects.all()
    serializer_class = LoanRepaymentSerializer
    permission_classes = [
        IsSystemAdminOrReadOnly,
    ]
    lookup_field = "reference"

    def get_queryset(self):
        if is_system_admin(self.request.user):
            return self.queryset
        return self.queryset.filter(loan__user=self.request.user)
