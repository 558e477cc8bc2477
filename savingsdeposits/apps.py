from django.apps import AppConfig


class SavingsdepositsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "savingsdeposits"
