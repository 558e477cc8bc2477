from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.tools import create_member_accounts
from loanrepayments.models import LoanRepayment
from loans.models import Loan
from savingsdeposits.models import SavingsDeposit
from savingswithdrawals.models import SavingsWithdrawal

User = get_user_model()


def backdate(instance, **delta):
    moment = timezone.now() - timedelta(**delta)
    type(instance).objects.filter(pk=instance.pk).update(created_at=moment)
    return moment


class TransactionFeedTests(APITestCase):
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
        create_member_accounts(self.other)

        self.deposit = SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("500.00")
        )
        self.withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("200.00")
        )
        loan = Loan.objects.create(
            user=self.member,
            amount=Decimal("1200.00"),
            purpose="business",
            term=12,
            status=Loan.APPROVED,
        )
        self.repayment = LoanRepayment.objects.create(loan=loan, amount=Decimal("150.00"))

        backdate(self.deposit, days=3)
        backdate(self.withdrawal, days=2)
        backdate(self.repayment, days=1)

    def test_member_feed_is_merged_newest_first(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(f"/api/v1/transactions/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(t["type"], t["amount"], t["status"]) for t in response.data],
            [
                ("loan_repayment", "150.00", "completed"),
                ("withdrawal", "200.00", "pending"),
                ("deposit", "500.00", "completed"),
            ],
        )
        self.assertEqual(response.data[2]["id"], f"dep-{self.deposit.reference}")
        self.assertEqual(response.data[2]["reference"], self.deposit.identity)

    def test_recent_is_limited_to_five(self):
        for _ in range(5):
            SavingsDeposit.objects.create(
                savings_account=self.account, amount=Decimal("10.00")
            )
        self.client.force_authenticate(user=self.member)
        response = self.client.get("/api/v1/transactions/recent/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 5)
        self.assertTrue(all(t["amount"] == "10.00" for t in response.data))

    def test_member_cannot_read_another_feed(self):
        self.client.force_authenticate(user=self.other)
        response = self.client.get(f"/api/v1/transactions/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_reads_any_feed(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f"/api/v1/transactions/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)

    def test_feed_without_savings_account(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/v1/transactions/recent/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ReportTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@sacco.com", password="admin123", name="Admin", role=User.ADMIN
        )
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.account = create_member_accounts(self.member)
        SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("2000.00")
        )
        withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("500.00")
        )
        self.client.force_authenticate(user=self.admin)
        self.client.post(f"/api/v1/savingswithdrawals/{withdrawal.reference}/approve/")

        business = Loan.objects.create(
            user=self.member,
            amount=Decimal("1000.00"),
            purpose="business",
            term=12,
            status=Loan.APPROVED,
        )
        Loan.objects.create(
            user=self.member,
            amount=Decimal("600.00"),
            purpose="business",
            term=6,
            status=Loan.APPROVED,
        )
        Loan.objects.create(
            user=self.member,
            amount=Decimal("400.00"),
            purpose="education",
            term=6,
            status=Loan.APPROVED,
        )
        Loan.objects.create(
            user=self.member, amount=Decimal("900.00"), purpose="medical", term=6
        )
        LoanRepayment.objects.create(loan=business, amount=Decimal("500.00"))

    def test_summary(self):
        response = self.client.get("/api/v1/transactions/reports/summary/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_savings"], "1500.00")
        self.assertEqual(response.data["total_loans"], "2000.00")
        self.assertEqual(response.data["active_members"], 1)
        self.assertEqual(response.data["loan_recovery_rate"], "25.00")
        self.assertEqual(response.data["monthly_growth"], "1500.00")
        self.assertEqual(response.data["growth_rate"], "100.00")

    def test_savings_growth_covers_six_months(self):
        response = self.client.get("/api/v1/transactions/reports/savings-growth/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 6)
        self.assertEqual(response.data[-1]["month"], timezone.now().strftime("%b %Y"))
        self.assertEqual(response.data[-1]["amount"], "1500.00")

    def test_loan_distribution(self):
        response = self.client.get("/api/v1/transactions/reports/loan-distribution/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(g["purpose"], g["count"], g["amount"]) for g in response.data],
            [("Business", 2, "1600.00"), ("Education", 1, "400.00")],
        )

    def test_reports_are_admin_only(self):
        self.client.force_authenticate(user=self.member)
        for report in ("summary", "savings-growth", "loan-distribution"):
            response = self.client.get(f"/api/v1/transactions/reports/{report}/")
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
