from django.urls import path

from loans.views import (
    LoanListCreateView,
    PendingLoanListView,
    MemberLoanListView,
    LoanDetailView,
    LoanApproveView,
    LoanRejectView,
)

app_name = "loans"

urlpatterns = [
    path("", LoanListCreateView.as_view(), name="loan-list-create"),
    path("pending/", PendingLoanListView.as_view(), name="loan-pending"),
    path(
        "member/<str:reference>/",
        MemberLoanListView.as_view(),
        name="member-loans",
    ),
    path("<str:reference>/", LoanDetailView.as_view(), name="loan-detail"),
    path("<str:reference>/approve/", LoanApproveView.as_view(), name="loan-approve"),
    path("<str:reference>/reject/", LoanRejectView.as_view(), name="loan-reject"),
]
