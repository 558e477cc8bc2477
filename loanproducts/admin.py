from django.contrib import admin

from loanproducts.models import LoanProduct


class LoanProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "loan_type",
        "interest_rate",
        "max_amount",
        "max_term",
        "min_savings_percentage",
        "is_active",
    )
    search_fields = ("name", "description")
    list_filter = ("loan_type", "is_active", "created_at", "updated_at")
    ordering = ("name",)


admin.site.register(LoanProduct, LoanProductAdmin)
