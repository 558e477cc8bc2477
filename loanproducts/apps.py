from django.apps import AppConfig


class LoanproductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "loanproducts"
