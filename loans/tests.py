from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status
from rest_framework.exceptions import ValidationError

from accounts.tools import create_member_accounts
from loanproducts.models import LoanProduct
from loanrepayments.models import LoanRepayment
from loans.models import Loan
from loans.utils import check_loan_eligibility
from savingsdeposits.models import SavingsDeposit

User = get_user_model()


class LoanApplicationTests(APITestCase):
    url = "/api/v1/loans/"

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
        SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("100.00")
        )
        self.personal = LoanProduct.objects.create(
            name="Personal Loan",
            loan_type="PERSONAL",
            interest_rate=Decimal("12.50"),
            max_amount=Decimal("25000.00"),
            max_term=36,
            min_savings_percentage=Decimal("10.00"),
            description="Flexible loan for personal use",
        )

    def apply(self, **overrides):
        data = {
            "product": "Personal Loan",
            "amount": "1000.00",
            "purpose": "personal",
            "term": 12,
            "description": "Household items",
        }
        data.update(overrides)
        data = {key: value for key, value in data.items() if value is not None}
        return self.client.post(self.url, data)

    def test_application_without_product(self):
        self.client.force_authenticate(user=self.member)
        response = self.apply(product=None, amount="50000.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], Loan.PENDING)
        self.assertIsNone(response.data["interest_rate"])
        self.assertEqual(response.data["member"], self.member.member_no)

    def test_application_snapshots_interest_rate(self):
        self.client.force_authenticate(user=self.member)
        response = self.apply()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        loan = Loan.objects.get()
        self.assertEqual(loan.interest_rate, Decimal("12.50"))

        self.personal.interest_rate = Decimal("15.00")
        self.personal.save()
        loan.refresh_from_db()
        self.assertEqual(loan.interest_rate, Decimal("12.50"))

    def test_savings_threshold_boundary(self):
        self.client.force_authenticate(user=self.member)
        # 10% of 1000.00 is exactly the 100.00 held in savings
        self.assertEqual(self.apply(amount="1000.00").status_code, status.HTTP_201_CREATED)

        response = self.apply(amount="1000.01")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("amount", response.data)
        self.assertEqual(Loan.objects.count(), 1)

    def test_amount_above_product_maximum(self):
        self.personal.min_savings_percentage = None
        self.personal.save()
        self.client.force_authenticate(user=self.member)
        self.assertEqual(
            self.apply(amount="25000.00").status_code, status.HTTP_201_CREATED
        )
        response = self.apply(amount="25000.01")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("amount", response.data)

    def test_term_above_product_maximum(self):
        self.client.force_authenticate(user=self.member)
        self.assertEqual(self.apply(term=36).status_code, status.HTTP_201_CREATED)
        response = self.apply(term=37)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("term", response.data)

    def test_inactive_product_rejected(self):
        self.personal.is_active = False
        self.personal.save()
        self.client.force_authenticate(user=self.member)
        response = self.apply()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("product", response.data)
        self.assertFalse(Loan.objects.exists())

    def test_invalid_amount_and_term(self):
        self.client.force_authenticate(user=self.member)
        response = self.apply(amount="0.00", term=0)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("amount", response.data)
        self.assertIn("term", response.data)

    def test_member_cannot_apply_for_another_member(self):
        self.client.force_authenticate(user=self.other)
        response = self.apply(member_no=self.member.member_no)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Loan.objects.exists())

    def test_admin_applies_on_behalf_of_member(self):
        self.client.force_authenticate(user=self.admin)
        response = self.apply(member_no=self.member.member_no)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Loan.objects.get().user, self.member)

    def test_eligibility_without_savings_account(self):
        # No savings account counts as a zero balance
        with self.assertRaises(ValidationError):
            check_loan_eligibility(self.other, self.personal, Decimal("10.00"), 1)
        check_loan_eligibility(self.other, None, Decimal("10.00"), 1)


class LoanApprovalTests(APITestCase):
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
            user=self.member, amount=Decimal("1200.00"), purpose="business", term=12
        )

    def test_admin_approves_loan_without_touching_savings(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(f"/api/v1/loans/{self.loan.reference}/approve/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.loan.refresh_from_db()
        self.assertEqual(self.loan.status, Loan.APPROVED)
        self.assertEqual(self.loan.processed_by, self.admin)
        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("0.00"))

    def test_processed_loan_cannot_change(self):
        self.client.force_authenticate(user=self.admin)
        self.client.post(f"/api/v1/loans/{self.loan.reference}/reject/")
        for action in ("approve", "reject"):
            response = self.client.post(f"/api/v1/loans/{self.loan.reference}/{action}/")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["detail"], "Loan already processed.")
        self.loan.refresh_from_db()
        self.assertEqual(self.loan.status, Loan.REJECTED)

    def test_member_cannot_approve(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.post(f"/api/v1/loans/{self.loan.reference}/approve/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_loan_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post("/api/v1/loans/DOESNOTEXIST/approve/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_pending_list_and_member_loans(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/v1/loans/pending/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        self.client.force_authenticate(user=self.member)
        response = self.client.get(f"/api/v1/loans/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["account_number"], self.loan.account_number)

        self.client.force_authenticate(user=self.other)
        response = self.client.get(f"/api/v1/loans/member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_outstanding_balance_reflects_repayments(self):
        self.loan.status = Loan.APPROVED
        self.loan.save()
        LoanRepayment.objects.create(loan=self.loan, amount=Decimal("150.00"))

        self.client.force_authenticate(user=self.member)
        response = self.client.get(f"/api/v1/loans/{self.loan.reference}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_repaid"], "150.00")
        self.assertEqual(response.data["outstanding_balance"], "1050.00")
        self.assertEqual(response.data["status"], Loan.APPROVED)


class LoanAdminTests(APITestCase):
    def setUp(self):
        self.superuser = User.objects.create_superuser(
            email="root@sacco.com", password="root1234", name="Root"
        )
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.loan = Loan.objects.create(
            user=self.member,
            amount=Decimal("1200.00"),
            purpose="business",
            term=12,
            status=Loan.APPROVED,
        )
        self.client.force_login(self.superuser)

    def test_change_form_cannot_reopen_or_resize_loan(self):
        self.client.post(
            f"/admin/loans/loan/{self.loan.pk}/change/",
            {
                "account_number": self.loan.account_number,
                "purpose": "business",
                "description": "",
                "status": Loan.PENDING,
                "amount": "9999.00",
                "term": 60,
            },
        )
        self.loan.refresh_from_db()
        self.assertEqual(self.loan.status, Loan.APPROVED)
        self.assertEqual(self.loan.amount, Decimal("1200.00"))
        self.assertEqual(self.loan.term, 12)
