from django.apps import AppConfig


class SavingsproductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "savingsproducts"
