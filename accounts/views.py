import logging
from rest_framework import generics, status
from rest_framework.views import APIView
from rest_framework.response import Response
from django.contrib.auth import get_user_model, authenticate
from django.db import transaction
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.authtoken.models import Token

from accounts.serializers import (
    BaseUserSerializer,
    MemberSerializer,
    AdminMemberSerializer,
    UserLoginSerializer,
)
from accounts.permissions import IsSystemAdmin, IsOwnerOrSystemAdmin, is_system_admin
from accounts.tools import create_member_accounts

logger = logging.getLogger(__name__)

User = get_user_model()


def get_user_details(user, token):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "member_no": user.member_no,
        "reference": user.reference,
        "role": user.role,
        "is_system_admin": user.is_system_admin,
        "is_active": user.is_active,
        "is_staff": user.is_staff,
        "is_superuser": user.is_superuser,
        "last_login": user.last_login,
        "token": token.key,
    }


"""
Authentication
"""


class TokenView(APIView):
    permission_classes = (AllowAny,)
    serializer_class = UserLoginSerializer

    def post(self, request, format=None):
        serializer = self.serializer_class(data=request.data)

        if serializer.is_valid():
            email = serializer.validated_data["email"].lower()
            password = serializer.validated_data["password"]

            user = authenticate(request, email=email, password=password)

            if user:
                token, created = Token.objects.get_or_create(user=user)
                logger.info(f"{user.member_no} logged in")
                return Response(
                    get_user_details(user, token), status=status.HTTP_200_OK
                )
            else:
                return Response(
                    {"detail": ("Unable to log in with provided credentials.")},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class LogoutView(APIView):
    permission_classes = (IsAuthenticated,)

    def post(self, request, format=None):
        Token.objects.filter(user=request.user).delete()
        logger.info(f"{request.user.member_no} logged out")
        return Response({"detail": "Logged out."}, status=status.HTTP_200_OK)


"""
Create and Detail Views
"""


class MemberCreateView(generics.CreateAPIView):
    """
    Self registration: the member gets a savings account and a token straight away.
    """

    permission_classes = (AllowAny,)
    serializer_class = MemberSerializer
    queryset = User.objects.all()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            user = serializer.save()
            create_member_accounts(user)
            token, created = Token.objects.get_or_create(user=user)

        logger.info(f"Member {user.member_no} registered")
        return Response(
            get_user_details(user, token), status=status.HTTP_201_CREATED
        )


class MeView(generics.RetrieveUpdateAPIView):
    permission_classes = (IsAuthenticated,)
    serializer_class = BaseUserSerializer
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return self.request.user


"""
System admin views
- View list of members
- Update roles, deactivate or remove members
"""


class MemberListView(generics.ListAPIView):
    """
    Fetch the list of members with their savings and loans
    """

    permission_classes = (IsSystemAdmin,)
    serializer_class = BaseUserSerializer
    queryset = User.objects.all()

    def get_queryset(self):
        return (
            super()
            .get_queryset()
            .select_related("savings_account", "savings_account__product")
            .prefetch_related("loans", "loans__product", "loans__repayments")
        )


class MemberDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    View, update and delete a member.
    Members may view and edit their own profile; role changes and removal are for admins.
    """

    permission_classes = (IsOwnerOrSystemAdmin,)
    queryset = User.objects.all()
    lookup_field = "reference"
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def get_serializer_class(self):
        if is_system_admin(self.request.user):
            return AdminMemberSerializer
        return BaseUserSerializer

    def perform_update(self, serializer):
        previous_role = serializer.instance.role
        user = serializer.save()
        if user.role != previous_role:
            logger.info(
                f"{user.member_no} role changed from {previous_role} to {user.role} "
                f"by {self.request.user.member_no}"
            )

    def destroy(self, request, *args, **kwargs):
        if not is_system_admin(request.user):
            return Response(
                {"detail": "Only administrators can remove members."},
                status=status.HTTP_403_FORBIDDEN,
            )
        instance = self.get_object()
        logger.info(f"Member {instance.member_no} removed by {request.user.member_no}")
        self.perform_destroy(instance)
        return Response(status=status.HTTP_204_NO_CONTENT)
