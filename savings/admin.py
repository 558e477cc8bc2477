from django.contrib import admin

from savings.models import SavingsAccount


class SavingsAccountAdmin(admin.ModelAdmin):
    list_display = ("account_number", "user", "product", "balance", "is_active")
    search_fields = ("account_number", "user__member_no", "user__email")
    list_filter = ("product", "is_active", "created_at", "updated_at")
    readonly_fields = ("balance", "reference", "created_at", "updated_at")
    ordering = ("-created_at",)


admin.site.register(SavingsAccount, SavingsAccountAdmin)
