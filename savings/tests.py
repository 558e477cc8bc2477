from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.tools import create_member_accounts
from savings.models import SavingsAccount
from savingsproducts.models import SavingsProduct

User = get_user_model()


class SavingsAccountTests(APITestCase):
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
        self.account = create_member_accounts(self.member)
        self.other_account = create_member_accounts(self.other)
        self.fixed = SavingsProduct.objects.create(
            name="Fixed Deposit",
            product_type="FIXED_DEPOSIT",
            interest_rate=Decimal("7.25"),
            min_balance=Decimal("5000.00"),
            term_months=12,
            description="Fixed term",
        )

    def test_one_account_per_member(self):
        again = create_member_accounts(self.member)
        self.assertEqual(again.pk, self.account.pk)
        self.assertEqual(SavingsAccount.objects.filter(user=self.member).count(), 1)

    def test_member_lists_only_own_account(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get("/api/v1/savings/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["account_number"], self.account.account_number)
        self.assertEqual(response.data[0]["balance"], "0.00")

    def test_member_cannot_view_another_account(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(f"/api/v1/savings/{self.other_account.account_number}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_savings_by_reference(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f"/api/v1/savings/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["member"], self.member.member_no)

        self.client.force_authenticate(user=self.other)
        response = self.client.get(f"/api/v1/savings/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_links_product_and_sets_maturity(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"/api/v1/savings/{self.account.account_number}/",
            {"product": "Fixed Deposit"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.account.refresh_from_db()
        self.assertEqual(self.account.product, self.fixed)
        self.assertIsNotNone(self.account.maturity_date)
        months = (self.account.maturity_date.year - self.account.created_at.year) * 12 + (
            self.account.maturity_date.month - self.account.created_at.month
        )
        self.assertEqual(months, 12)

    def test_member_cannot_link_product(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.patch(
            f"/api/v1/savings/{self.account.account_number}/",
            {"product": "Fixed Deposit"},
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.account.refresh_from_db()
        self.assertIsNone(self.account.product)

    def test_balance_is_read_only(self):
        self.client.force_authenticate(user=self.admin)
        self.client.patch(
            f"/api/v1/savings/{self.account.account_number}/", {"balance": "9999.00"}
        )
        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("0.00"))
