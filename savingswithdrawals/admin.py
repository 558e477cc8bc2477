from django.contrib import admin

from savingswithdrawals.models import SavingsWithdrawal


class SavingsWithdrawalAdmin(admin.ModelAdmin):
    list_display = (
        "identity",
        "withdrawn_by",
        "amount",
        "savings_account",
        "created_at",
        "status",
    )
    search_fields = ("identity", "withdrawn_by__member_no", "savings_account__account_number")
    list_filter = ("created_at", "status")
    readonly_fields = ("status", "processed_by", "processed_at", "identity", "reference")
    ordering = ["-created_at"]

    def get_readonly_fields(self, request, obj=None):
        if obj:
            return self.readonly_fields + ("savings_account", "amount")
        return self.readonly_fields

    def has_delete_permission(self, request, obj=None):
        return False


admin.site.register(SavingsWithdrawal, SavingsWithdrawalAdmin)
