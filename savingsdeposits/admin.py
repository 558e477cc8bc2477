from django.contrib import admin

from savingsdeposits.models import SavingsDeposit


class SavingsDepositAdmin(admin.ModelAdmin):
    list_display = (
        "identity",
        "savings_account",
        "deposited_by",
        "amount",
        "method",
        "created_at",
    )
    list_filter = ("method", "created_at")
    search_fields = (
        "identity",
        "savings_account__account_number",
        "deposited_by__member_no",
    )
    readonly_fields = ("created_at", "updated_at", "identity", "reference")
    ordering = ("-created_at",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


admin.site.register(SavingsDeposit, SavingsDepositAdmin)
