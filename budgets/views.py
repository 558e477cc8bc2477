import logging
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsOwnerOrSystemAdmin, can_access
from budgets.models import BudgetCategory, BudgetRecommendation
from budgets.serializers import (
    BudgetCategorySerializer,
    BudgetRecommendationSerializer,
    GenerateRecommendationsSerializer,
)
from budgets.utils import generate_budget_recommendations

logger = logging.getLogger(__name__)

User = get_user_model()


class BudgetCategoryListCreateView(generics.ListCreateAPIView):
    queryset = BudgetCategory.objects.all()
    serializer_class = BudgetCategorySerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        return self.queryset.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)


class BudgetCategoryDetailView(generics.RetrieveUpdateDestroyAPIView):
    queryset = BudgetCategory.objects.all()
    serializer_class = BudgetCategorySerializer
    permission_classes = [
        IsOwnerOrSystemAdmin,
    ]
    lookup_field = "reference"
    http_method_names = ["get", "patch", "delete", "head", "options"]


class BudgetRecommendationListView(generics.ListAPIView):
    queryset = BudgetRecommendation.objects.all()
    serializer_class = BudgetRecommendationSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        return self.queryset.filter(user=self.request.user)


class MemberBudgetRecommendationListView(generics.ListAPIView):
    serializer_class = BudgetRecommendationSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def get_queryset(self):
        member = get_object_or_404(User, reference=self.kwargs["reference"])
        if not can_access(self.request.user, member):
            raise PermissionDenied("You can only view your own recommendations.")
        return BudgetRecommendation.objects.filter(user=member)


class GenerateBudgetRecommendationsView(generics.GenericAPIView):
    """
    Runs the recommendation rules for the caller, or for `member` when an admin asks.
    """

    serializer_class = GenerateRecommendationsSerializer
    permission_classes = [
        IsAuthenticated,
    ]

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member_no = serializer.validated_data.get("member")
        if member_no:
            member = User.objects.filter(member_no=member_no).first()
            if member is None:
                return Response(
                    {"member": ["User with this member number does not exist."]},
                    status=status.HTTP_400_BAD_REQUEST,
                )
        else:
            member = request.user

        if not can_access(request.user, member):
            raise PermissionDenied(
                "You can only generate recommendations for yourself."
            )

        recommendations = generate_budget_recommendations(member)
        return Response(
            BudgetRecommendationSerializer(recommendations, many=True).data,
            status=status.HTTP_201_CREATED,
        )


class BudgetRecommendationDetailView(generics.RetrieveUpdateDestroyAPIView):
    queryset = BudgetRecommendation.objects.all()
    serializer_class = BudgetRecommendationSerializer
    permission_classes = [
        IsOwnerOrSystemAdmin,
    ]
    lookup_field = "reference"
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def perform_update(self, serializer):
        recommendation = serializer.save()
        if recommendation.is_implemented:
            logger.info(
                f"Recommendation '{recommendation.title}' marked implemented "
                f"for {recommendation.user.member_no}"
            )
