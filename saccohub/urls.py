from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/auth/", include("accounts.urls")),
    path("api/v1/savingsproducts/", include("savingsproducts.urls")),
    path("api/v1/loanproducts/", include("loanproducts.urls")),
    path("api/v1/savings/", include("savings.urls")),
    path("api/v1/savingsdeposits/", include("savingsdeposits.urls")),
    path("api/v1/savingswithdrawals/", include("savingswithdrawals.urls")),
    path("api/v1/loans/", include("loans.urls")),
    path("api/v1/loanrepayments/", include("loanrepayments.urls")),
    path("api/v1/budgets/", include("budgets.urls")),
    path("api/v1/transactions/", include("transactions.urls")),
]
