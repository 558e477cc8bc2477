from django.urls import path

from accounts.views import (
    TokenView,
    LogoutView,
    MemberCreateView,
    MeView,
    MemberListView,
    MemberDetailView,
)

app_name = "accounts"

urlpatterns = [
    path("token/", TokenView.as_view(), name="token"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("signup/member/", MemberCreateView.as_view(), name="member"),
    path("me/", MeView.as_view(), name="me"),
    # System admin activities
    path("", MemberListView.as_view(), name="members"),
    path("member/<str:reference>/", MemberDetailView.as_view(), name="member-detail"),
]
