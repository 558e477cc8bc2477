from django.contrib import admin

from budgets.models import BudgetCategory, BudgetRecommendation


class BudgetCategoryAdmin(admin.ModelAdmin):
    list_display = ("user", "category", "amount", "created_at")
    search_fields = ("user__member_no", "user__email")
    list_filter = ("category",)


class BudgetRecommendationAdmin(admin.ModelAdmin):
    list_display = ("user", "title", "recommendation_type", "is_implemented", "created_at")
    search_fields = ("user__member_no", "title")
    list_filter = ("recommendation_type", "is_implemented")


admin.site.register(BudgetCategory, BudgetCategoryAdmin)
admin.site.register(BudgetRecommendation, BudgetRecommendationAdmin)
