from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.permissions import can_access
from accounts.tools import create_member_accounts
from savings.models import SavingsAccount

User = get_user_model()


class MemberRegistrationTests(APITestCase):
    url = "/api/v1/auth/signup/member/"

    def test_registration_opens_savings_account_and_returns_token(self):
        data = {
            "name": "Jane Wanjiru",
            "email": "Jane@Example.com",
            "password": "Str0ngPass!",
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        user = User.objects.get(email="jane@example.com")
        self.assertEqual(user.role, User.MEMBER)
        self.assertTrue(user.check_password("Str0ngPass!"))
        self.assertTrue(SavingsAccount.objects.filter(user=user).exists())
        self.assertEqual(response.data["token"], Token.objects.get(user=user).key)
        self.assertEqual(response.data["member_no"], user.member_no)

    def test_duplicate_email_is_rejected(self):
        User.objects.create_user(
            email="jane@example.com", password="Str0ngPass!", name="Jane"
        )
        data = {"name": "Jane", "email": "JANE@example.com", "password": "Str0ngPass!"}
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)
        self.assertEqual(User.objects.count(), 1)

    def test_short_password_is_rejected(self):
        data = {"name": "Jane", "email": "jane@example.com", "password": "abc"}
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data)


class AuthenticationTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )

    def test_login_with_email_and_password(self):
        response = self.client.post(
            "/api/v1/auth/token/",
            {"email": "John@example.com", "password": "password123"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["token"], Token.objects.get(user=self.user).key)
        self.assertEqual(response.data["role"], User.MEMBER)

    def test_login_with_wrong_password(self):
        response = self.client.post(
            "/api/v1/auth/token/",
            {"email": "john@example.com", "password": "wrong-password"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_logout_deletes_token(self):
        token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")
        response = self.client.post("/api/v1/auth/logout/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Token.objects.filter(user=self.user).exists())

    def test_me_requires_authentication(self):
        response = self.client.get("/api/v1/auth/me/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_returns_own_profile(self):
        create_member_accounts(self.user)
        self.client.force_authenticate(user=self.user)
        response = self.client.get("/api/v1/auth/me/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "john@example.com")
        self.assertEqual(response.data["savings_account"]["balance"], "0.00")


class MemberAdministrationTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@sacco.com", password="admin123", name="Admin", role=User.ADMIN
        )
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.other = User.objects.create_user(
            email="mary@example.com", password="password123", name="Mary Atieno"
        )
        create_member_accounts(self.member)

    def detail_url(self, user):
        return f"/api/v1/auth/member/{user.reference}/"

    def test_admin_lists_members(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/v1/auth/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)

    def test_member_cannot_list_members(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get("/api/v1/auth/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_cannot_view_another_member(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.detail_url(self.other))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_cannot_change_own_role(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.patch(self.detail_url(self.member), {"role": "ADMIN"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.member.refresh_from_db()
        self.assertEqual(self.member.role, User.MEMBER)

    def test_admin_changes_role(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(self.detail_url(self.member), {"role": "ADMIN"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.member.refresh_from_db()
        self.assertTrue(self.member.is_system_admin)

    def test_member_cannot_delete_members(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.delete(self.detail_url(self.member))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(User.objects.filter(pk=self.member.pk).exists())

    def test_admin_delete_cascades_to_savings(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(self.detail_url(self.member))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.member.pk).exists())
        self.assertFalse(SavingsAccount.objects.filter(user_id=self.member.pk).exists())


class CanAccessTests(APITestCase):
    def test_owner_and_admin_allowed(self):
        admin = User.objects.create_user(
            email="admin@sacco.com", password="admin123", name="Admin", role=User.ADMIN
        )
        member = User.objects.create_user(
            email="john@example.com", password="password123", name="John"
        )
        other = User.objects.create_user(
            email="mary@example.com", password="password123", name="Mary"
        )
        self.assertTrue(can_access(member, member))
        self.assertTrue(can_access(admin, member))
        self.assertFalse(can_access(other, member))
