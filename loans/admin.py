from django.contrib import admin

from loans.models import Loan


class LoanAdmin(admin.ModelAdmin):
    list_display = (
        "account_number",
        "user",
        "product",
        "amount",
        "purpose",
        "term",
        "status",
    )
    search_fields = ("account_number", "user__member_no", "user__email")
    list_filter = ("status", "purpose", "created_at", "updated_at")
    readonly_fields = ("interest_rate", "processed_by", "processed_at", "reference")
    ordering = ("-created_at",)

    def get_readonly_fields(self, request, obj=None):
        # Terms are fixed at application; status moves only through approve/reject
        if obj:
            return self.readonly_fields + ("user", "product", "amount", "term", "status")
        return self.readonly_fields


admin.site.register(Loan, LoanAdmin)
