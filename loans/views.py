import logging
from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import (
    IsSystemAdmin,
    IsOwnerOrSystemAdmin,
    can_access,
    is_system_admin,
)
from loans.models import Loan
from loans.serializers import LoanSerializer
from loans.utils import send_loan_application_email, send_loan_status_email

logger = logging.getLogger(__name__)

User = get_user_model()


class LoanListCreateView(generics.ListCreateAPIView):
    """
    POST applies for a loan; members see their own loans, admins see all.
    """

    queryset = Loan.objects.all()
    serializer_class = LoanSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        queryset = self.queryset.select_related(
            "user", "product", "processed_by"
        ).prefetch_related("repayments")
        if is_system_admin(self.request.user):
            return queryset
        return queryset.filter(user=self.request.user)

    def perform_create(self, serializer):
        loan = serializer.save()
        logger.info(
            f"Loan {loan.account_number} of {loan.amount} applied for by "
            f"{loan.user.member_no} ({loan.product.name if loan.product else 'no product'})"
        )
        if loan.user.email:
            send_loan_application_email(loan.user, loan)


class PendingLoanListView(generics.ListAPIView):
    queryset = Loan.objects.filter(status=Loan.PENDING)
    serializer_class = LoanSerializer
    permission_classes = [
        IsSystemAdmin,
    ]

    def get_queryset(self):
        return self.queryset.select_related("user", "product")


class MemberLoanListView(generics.ListAPIView):
    serializer_class = LoanSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        member = get_object_or_404(User, reference=self.kwargs["reference"])
        if not can_access(self.request.user, member):
            raise PermissionDenied("You can only view your own loans.")
        return (
            Loan.objects.filter(user=member)
            .select_related("user", "product", "processed_by")
            .prefetch_related("repayments")
        )


class LoanDetailView(generics.RetrieveAPIView):
    queryset = Loan.objects.all()
    serializer_class = LoanSerializer
    permission_classes = [
        IsOwnerOrSystemAdmin,
    ]
    lookup_field = "reference"


# SACCO Admin approves or rejects loan applications


class LoanProcessView(generics.GenericAPIView):
    queryset = Loan.objects.all()
    serializer_class = LoanSerializer
    permission_classes = [
        IsSystemAdmin,
    ]
    lookup_field = "reference"
    target_status = None
    success_message = None

    def post(self, request, reference):
        with transaction.atomic():
            loan = get_object_or_404(self.queryset.select_for_update(), reference=reference)
            if not loan.is_pending:
                return Response(
                    {"detail": "Loan already processed."},
                    status=status.HTTP_400_BAD_REQUEST,
                )

            loan.status = self.target_status
            loan.processed_by = request.user
            loan.processed_at = timezone.now()
            loan.save(
                update_fields=["status", "processed_by", "processed_at", "updated_at"]
            )

        logger.info(
            f"Loan {loan.account_number} {loan.status} by {request.user.member_no}"
        )
        if loan.user.email:
            send_loan_status_email(loan.user, loan)

        serializer = self.get_serializer(loan)
        return Response(
            {"detail": self.success_message, "loan": serializer.data},
            status=status.HTTP_200_OK,
        )


class LoanApproveView(LoanProcessView):
    target_status = Loan.APPROVED
    success_message = "Loan approved."


class LoanRejectView(LoanProcessView):
    target_status = Loan.REJECTED
    success_message = "Loan rejected."
