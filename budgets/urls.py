from django.urls import path

from budgets.views import (
    BudgetCategoryListCreateView,
    BudgetCategoryDetailView,
    BudgetRecommendationListView,
    MemberBudgetRecommendationListView,
    GenerateBudgetRecommendationsView,
    BudgetRecommendationDetailView,
)

app_name = "budgets"

urlpatterns = [
    path(
        "categories/",
        BudgetCategoryListCreateView.as_view(),
        name="budget-category-list-create",
    ),
    path(
        "categories/<str:reference>/",
        BudgetCategoryDetailView.as_view(),
        name="budget-category-detail",
    ),
    path(
        "recommendations/",
        BudgetRecommendationListView.as_view(),
        name="budget-recommendation-list",
    ),
    path(
        "recommendations/generate/",
        GenerateBudgetRecommendationsView.as_view(),
        name="budget-recommendation-generate",
    ),
    path(
        "recommendations/member/<str:reference>/",
        MemberBudgetRecommendationListView.as_view(),
        name="budget-recommendation-member-list",
    ),
    path(
        "recommendations/<str:reference>/",
        BudgetRecommendationDetailView.as_view(),
        name="budget-recommendation-detail",
    ),
]
