from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.tools import create_member_accounts
from loanrepayments.models import LoanRepayment
from loans.models import Loan

User = get_user_model()


class LoanRepaymentTests(APITestCase):
    url = "/api/v1/loanrepayments/"

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
        self.loan = Loan.objects.create(
            user=self.member,
            amount=Decimal("1200.00"),
            purpose="business",
            term=12,
            status=Loan.APPROVED,
        )
        self.pending_loan = Loan.objects.create(
            user=self.member, amount=Decimal("500.00"), purpose="education", term=6
        )

    def record(self, loan, amount):
        return self.client.post(
            self.url,
            {"loan": loan.account_number, "amount": amount, "payment_method": "mobile"},
        )

    def test_admin_records_repayment(self):
        self.client.force_authenticate(user=self.admin)
        response = self.record(self.loan, "150.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["recorded_by"], self.admin.member_no)
        self.assertTrue(response.data["identity"].startswith("LR"))

        self.loan.refresh_from_db()
        self.assertEqual(self.loan.status, Loan.APPROVED)
        self.assertEqual(self.loan.outstanding_balance, Decimal("1050.00"))
        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("0.00"))

    def test_overpayment_floors_outstanding_at_zero(self):
        LoanRepayment.objects.create(loan=self.loan, amount=Decimal("1500.00"))
        self.assertEqual(self.loan.total_repaid, Decimal("1500.00"))
        self.assertEqual(self.loan.outstanding_balance, Decimal("0.00"))

    def test_repayment_requires_approved_loan(self):
        self.client.force_authenticate(user=self.admin)
        response = self.record(self.pending_loan, "50.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("loan", response.data)
        self.assertFalse(LoanRepayment.objects.exists())

    def test_member_cannot_record_repayment(self):
        self.client.force_authenticate(user=self.member)
        response = self.record(self.loan, "50.00")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_members_see_only_their_repayments(self):
        other_loan = Loan.objects.create(
            user=self.other,
            amount=Decimal("300.00"),
            purpose="medical",
            term=3,
            status=Loan.APPROVED,
        )
        LoanRepayment.objects.create(loan=self.loan, amount=Decimal("100.00"))
        other_repayment = LoanRepayment.objects.create(
            loan=other_loan, amount=Decimal("30.00")
        )

        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.url)
        self.assertEqual([r["amount"] for r in response.data], ["100.00"])

        response = self.client.get(f"{self.url}{other_repayment.reference}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_repayments_are_immutable(self):
        repayment = LoanRepayment.objects.create(loan=self.loan, amount=Decimal("100.00"))
        repayment.amount = Decimal("1.00")
        with self.assertRaises(ValueError):
            repayment.save()


class LoanRepaymentAdminTests(APITestCase):
    def test_repayments_cannot_be_deleted(self):
        superuser = User.objects.create_superuser(
            email="root@sacco.com", password="root1234", name="Root"
        )
        member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        loan = Loan.objects.create(
            user=member,
            amount=Decimal("1200.00"),
            purpose="business",
            term=12,
            status=Loan.APPROVED,
        )
        repayment = LoanRepayment.objects.create(loan=loan, amount=Decimal("150.00"))
        self.client.force_login(superuser)
        response = self.client.post(
            f"/admin/loanrepayments/loanrepayment/{repayment.pk}/delete/",
            {"post": "yes"},
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(LoanRepayment.objects.filter(pk=repayment.pk).exists())
