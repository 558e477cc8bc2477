from django.urls import path

from savingsproducts.views import SavingsProductListCreateView, SavingsProductDetailView

app_name = "savingsproducts"

urlpatterns = [
    path("", SavingsProductListCreateView.as_view(), name="list-create"),
    path("<str:reference>/", SavingsProductDetailView.as_view(), name="detail"),
]
