from django.contrib import admin

from loanrepayments.models import LoanRepayment


class LoanRepaymentAdmin(admin.ModelAdmin):
    list_display = ("identity", "loan", "amount", "payment_method", "created_at")
    search_fields = ("identity", "loan__account_number", "loan__user__member_no")
    list_filter = ("payment_method", "created_at")
    readonly_fields = ("identity", "reference")
    ordering = ("-created_at",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


admin.site.register(LoanRepayment, LoanRepaymentAdmin)
