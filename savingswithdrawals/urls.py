from django.urls import path

from savingswithdrawals.views import (
    SavingsWithdrawalListCreateView,
    PendingSavingsWithdrawalListView,
    SavingsWithdrawalDetailView,
    SavingsWithdrawalApproveView,
    SavingsWithdrawalRejectView,
)

app_name = "savingswithdrawals"

urlpatterns = [
    path("", SavingsWithdrawalListCreateView.as_view(), name="withdrawal-list-create"),
    path(
        "pending/",
        PendingSavingsWithdrawalListView.as_view(),
        name="withdrawal-pending",
    ),
    path(
        "<str:reference>/",
        SavingsWithdrawalDetailView.as_view(),
        name="withdrawal-detail",
    ),
    path(
        "<str:reference>/approve/",
        SavingsWithdrawalApproveView.as_view(),
        name="withdrawal-approve",
    ),
    path(
        "<str:reference>/reject/",
        SavingsWithdrawalRejectView.as_view(),
        name="withdrawal-reject",
    ),
]
