from django.urls import path

from transactions.views import RecentTransactionsView, MemberTransactionsView
from transactions.views_sacco import (
    SACCOSummaryView,
    SavingsGrowthView,
    LoanDistributionView,
)

app_name = "transactions"

urlpatterns = [
    path("recent/", RecentTransactionsView.as_view(), name="recent-transactions"),
    path(
        "member/<str:reference>/",
        MemberTransactionsView.as_view(),
        name="member-transactions",
    ),
    # SACCO wide reports
    path("reports/summary/", SACCOSummaryView.as_view(), name="reports-summary"),
    path(
        "reports/savings-growth/",
        SavingsGrowthView.as_view(),
        name="reports-savings-growth",
    ),
    path(
        "reports/loan-distribution/",
        LoanDistributionView.as_view(),
        name="reports-loan-distribution",
    ),
]
