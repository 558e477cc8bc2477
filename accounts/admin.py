from django.contrib import admin

from accounts.models import User


class UserAdmin(admin.ModelAdmin):
    list_display = ("member_no", "name", "email", "role", "is_active", "created_at")
    search_fields = ("member_no", "name", "email")
    list_filter = ("role", "is_active", "is_staff", "created_at")
    readonly_fields = ("member_no", "reference", "password", "last_login")
    exclude = ("groups", "user_permissions")
    ordering = ("name",)


admin.site.register(User, UserAdmin)
