from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from loanproducts.models import LoanProduct

User = get_user_model()


class LoanProductTests(APITestCase):
    url = "/api/v1/loanproducts/"

    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@sacco.com", password="admin123", name="Admin", role=User.ADMIN
        )
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.product = LoanProduct.objects.create(
            name="Emergency Loan",
            loan_type="EMERGENCY",
            interest_rate=Decimal("9.75"),
            max_amount=Decimal("15000.00"),
            max_term=24,
            min_savings_percentage=Decimal("5.00"),
            description="Quick access to funds for urgent needs",
        )

    def test_admin_creates_product(self):
        self.client.force_authenticate(user=self.admin)
        data = {
            "name": "Education Loan",
            "loan_type": "EDUCATION",
            "interest_rate": "8.50",
            "max_amount": "50000.00",
            "max_term": 72,
            "min_savings_percentage": "5.00",
            "description": "Invest in your future",
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["max_amount"], "50000.00")

    def test_percentage_above_hundred_rejected(self):
        self.client.force_authenticate(user=self.admin)
        data = {
            "name": "Odd Loan",
            "loan_type": "PERSONAL",
            "interest_rate": "8.50",
            "max_amount": "50000.00",
            "max_term": 12,
            "min_savings_percentage": "120.00",
            "description": "Invalid",
        }
        response = self.client.post(self.url, data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("min_savings_percentage", response.data)

    def test_member_reads_but_cannot_update(self):
        self.client.force_authenticate(user=self.member)
        detail_url = f"{self.url}{self.product.reference}/"
        self.assertEqual(self.client.get(detail_url).status_code, status.HTTP_200_OK)
        response = self.client.patch(detail_url, {"max_term": 48})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.product.refresh_from_db()
        self.assertEqual(self.product.max_term, 24)
