from django.urls import path

from savings.views import (
    SavingsAccountListView,
    SavingsAccountDetailView,
    MemberSavingsAccountView,
)

app_name = "savings"

urlpatterns = [
    path("", SavingsAccountListView.as_view(), name="savings-account-list"),
    path(
        "member/<str:reference>/",
        MemberSavingsAccountView.as_view(),
        name="member-savings-account",
    ),
    path(
        "<str:account_number>/",
        SavingsAccountDetailView.as_view(),
        name="savings-account-detail",
    ),
]
