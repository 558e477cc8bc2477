from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from savingsproducts.models import SavingsProduct

User = get_user_model()


class SavingsProductTests(APITestCase):
    url = "/api/v1/savingsproducts/"

    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@sacco.com", password="admin123", name="Admin", role=User.ADMIN
        )
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.regular = SavingsProduct.objects.create(
            name="Regular Savings",
            product_type="REGULAR",
            interest_rate=Decimal("3.50"),
            min_balance=Decimal("500.00"),
            description="Standard savings account",
        )
        self.holiday = SavingsProduct.objects.create(
            name="Holiday Savings",
            product_type="HOLIDAY",
            interest_rate=Decimal("4.00"),
            description="Retired product",
            is_active=False,
        )

    def test_admin_creates_product(self):
        self.client.force_authenticate(user=self.admin)
        data = {
            "name": "Fixed Deposit",
            "product_type": "FIXED_DEPOSIT",
            "interest_rate": "7.25",
            "min_balance": "5000.00",
            "term_months": 12,
            "description": "Higher interest rate for a fixed term commitment",
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["interest_rate"], "7.25")
        self.assertTrue(SavingsProduct.objects.filter(name="Fixed Deposit").exists())

    def test_member_cannot_create_product(self):
        self.client.force_authenticate(user=self.member)
        data = {
            "name": "Fixed Deposit",
            "product_type": "FIXED_DEPOSIT",
            "interest_rate": "7.25",
            "description": "Fixed term",
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_sees_only_active_products(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["name"] for p in response.data], ["Regular Savings"])

    def test_admin_sees_all_products(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.url)
        self.assertEqual(len(response.data), 2)

    def test_duplicate_name_rejected(self):
        self.client.force_authenticate(user=self.admin)
        data = {
            "name": "Regular Savings",
            "product_type": "REGULAR",
            "interest_rate": "3.00",
            "description": "Duplicate",
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", response.data)

    def test_admin_deactivates_product(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(
            f"{self.url}{self.regular.reference}/", {"is_active": False}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.regular.refresh_from_db()
        self.assertFalse(self.regular.is_active)
