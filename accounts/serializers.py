from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from accounts.utils import send_registration_confirmation_email
from savings.serializers import MinimalSavingsAccountSerializer
from loans.serializers import MinimalLoanSerializer

User = get_user_model()


class BaseUserSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(
        validators=[UniqueValidator(queryset=User.objects.all(), lookup="iexact")],
    )
    password = serializers.CharField(
        max_length=128,
        min_length=6,
        write_only=True,
        validators=[validate_password],
    )
    savings_account = MinimalSavingsAccountSerializer(read_only=True)
    loans = MinimalLoanSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "name",
            "email",
            "password",
            "member_no",
            "role",
            "is_system_admin",
            "is_active",
            "created_at",
            "updated_at",
            "reference",
            "savings_account",
            "loans",
        )
        read_only_fields = ("member_no", "role", "is_active")

    def validate_email(self, email):
        return email.lower()

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save()
        return user


class MemberSerializer(BaseUserSerializer):
    def create(self, validated_data):
        user = User.objects.create_user(**validated_data)
        send_registration_confirmation_email(user)

        return user


class AdminMemberSerializer(BaseUserSerializer):
    """
    Used by admins: role and active flag become writable.
    """

    password = serializers.CharField(
        max_length=128, min_length=6, write_only=True, required=False
    )

    class Meta(BaseUserSerializer.Meta):
        read_only_fields = ("member_no",)


"""
Normal login
"""


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)
