from django.contrib import admin

from savingsproducts.models import SavingsProduct


class SavingsProductAdmin(admin.ModelAdmin):
    list_display = ("name", "product_type", "interest_rate", "min_balance", "is_active")
    search_fields = ("name", "description")
    list_filter = ("product_type", "is_active", "created_at")
    ordering = ("name",)


admin.site.register(SavingsProduct, SavingsProductAdmin)
