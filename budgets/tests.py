from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.tools import create_member_accounts
from budgets.models import BudgetCategory, BudgetRecommendation
from budgets.utils import build_recommendations, get_outstanding_loans
from loanrepayments.models import LoanRepayment
from loans.models import Loan
from savingsdeposits.models import SavingsDeposit

User = get_user_model()

EMERGENCY = "Build Your Emergency Fund"
DEBT = "Accelerate Your Loan Repayment"
HOUSING = "Set Your Housing Budget"


class BuildRecommendationsTests(SimpleTestCase):
    def titles(self, recommendations):
        return [r["title"] for r in recommendations]

    def test_all_three_rules_fire(self):
        recommendations = build_recommendations(
            Decimal("500.00"),
            Decimal("1200.00"),
            False,
            target=Decimal("1000.00"),
            currency="KES",
        )
        self.assertEqual(self.titles(recommendations), [EMERGENCY, DEBT, HOUSING])
        self.assertEqual(recommendations[0]["suggested_amount"], Decimal("1000.00"))
        self.assertEqual(recommendations[0]["category"], "SAVINGS")
        self.assertIn("KES 1200.00", recommendations[1]["description"])
        self.assertEqual(recommendations[2]["category"], "HOUSING")

    def test_balance_at_target_is_enough(self):
        recommendations = build_recommendations(
            Decimal("1000.00"), Decimal("0.00"), True, target=Decimal("1000.00")
        )
        self.assertEqual(recommendations, [])

    def test_missing_savings_account_counts_as_short(self):
        recommendations = build_recommendations(
            None, Decimal("0.00"), True, target=Decimal("1000.00")
        )
        self.assertEqual(self.titles(recommendations), [EMERGENCY])


class BudgetRecommendationApiTests(APITestCase):
    url = "/api/v1/budgets/recommendations/"

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
            savings_account=self.account, amount=Decimal("500.00")
        )
        Loan.objects.create(
            user=self.member,
            amount=Decimal("1200.00"),
            purpose="business",
            term=12,
            status=Loan.APPROVED,
        )

    def test_generates_exactly_three(self):
        BudgetCategory.objects.create(
            user=self.member, category="FOOD", amount=Decimal("350.00")
        )
        self.client.force_authenticate(user=self.member)
        response = self.client.post(f"{self.url}generate/")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual([r["title"] for r in response.data], [EMERGENCY, DEBT, HOUSING])
        self.assertEqual(
            [r["recommendation_type"] for r in response.data],
            [
                BudgetRecommendation.SAVING,
                BudgetRecommendation.DEBT_MANAGEMENT,
                BudgetRecommendation.SPENDING,
            ],
        )
        self.assertEqual(BudgetRecommendation.objects.filter(user=self.member).count(), 3)

    def test_no_rules_fire_for_healthy_member(self):
        SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("500.00")
        )
        Loan.objects.filter(user=self.member).update(status=Loan.REJECTED)
        BudgetCategory.objects.create(
            user=self.member, category="HOUSING", amount=Decimal("800.00")
        )
        self.client.force_authenticate(user=self.member)
        response = self.client.post(f"{self.url}generate/")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data, [])

    def test_repaid_loan_still_counts_towards_debt(self):
        SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("1500.00")
        )
        LoanRepayment.objects.create(
            loan=Loan.objects.get(user=self.member), amount=Decimal("1200.00")
        )
        BudgetCategory.objects.create(
            user=self.member, category="HOUSING", amount=Decimal("800.00")
        )
        self.client.force_authenticate(user=self.member)
        response = self.client.post(f"{self.url}generate/")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual([r["title"] for r in response.data], [DEBT])
        self.assertIn("1200.00", response.data[0]["description"])

    def test_outstanding_ignores_pending_loans(self):
        Loan.objects.create(
            user=self.member, amount=Decimal("900.00"), purpose="other", term=3
        )
        self.assertEqual(get_outstanding_loans(self.member), Decimal("1200.00"))

    def test_repeated_generation_accumulates(self):
        self.client.force_authenticate(user=self.member)
        self.client.post(f"{self.url}generate/")
        self.client.post(f"{self.url}generate/")
        self.assertEqual(BudgetRecommendation.objects.filter(user=self.member).count(), 6)

    def test_admin_generates_for_member(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            f"{self.url}generate/", {"member": self.member.member_no}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(BudgetRecommendation.objects.filter(user=self.member).count(), 3)

    def test_admin_lists_member_recommendations(self):
        self.client.force_authenticate(user=self.admin)
        self.client.post(f"{self.url}generate/", {"member": self.member.member_no})
        response = self.client.get(f"{self.url}member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        self.assertTrue(all(r["member"] == self.member.member_no for r in response.data))

    def test_member_cannot_list_another_members_recommendations(self):
        self.client.force_authenticate(user=self.other)
        response = self.client.get(f"{self.url}member/{self.member.reference}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_cannot_generate_for_another(self):
        self.client.force_authenticate(user=self.other)
        response = self.client.post(
            f"{self.url}generate/", {"member": self.member.member_no}
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(BudgetRecommendation.objects.exists())

    def test_unknown_member_rejected(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(f"{self.url}generate/", {"member": "MBR00000000"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_mark_implemented_and_delete(self):
        recommendation = BudgetRecommendation.objects.create(
            user=self.member,
            recommendation_type=BudgetRecommendation.SAVING,
            title="Increase Your Emergency Fund",
            description="Save 3-6 months of expenses.",
            suggested_amount=Decimal("5000.00"),
            category="SAVINGS",
        )
        detail_url = f"{self.url}{recommendation.reference}/"

        self.client.force_authenticate(user=self.other)
        response = self.client.patch(detail_url, {"is_implemented": True})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.member)
        response = self.client.patch(
            detail_url, {"is_implemented": True, "title": "Changed"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        recommendation.refresh_from_db()
        self.assertTrue(recommendation.is_implemented)
        self.assertEqual(recommendation.title, "Increase Your Emergency Fund")

        response = self.client.delete(detail_url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(BudgetRecommendation.objects.exists())


class BudgetCategoryApiTests(APITestCase):
    url = "/api/v1/budgets/categories/"

    def setUp(self):
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.other = User.objects.create_user(
            email="mary@example.com", password="password123", name="Mary Atieno"
        )

    def test_member_manages_own_categories(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.post(
            self.url, {"category": "HOUSING", "amount": "800.00", "notes": "Rent"}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        reference = response.data["reference"]

        response = self.client.patch(f"{self.url}{reference}/", {"amount": "850.00"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["amount"], "850.00")

        response = self.client.delete(f"{self.url}{reference}/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(BudgetCategory.objects.exists())

    def test_invalid_category_rejected(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.post(self.url, {"category": "GAMBLING", "amount": "10.00"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("category", response.data)

    def test_categories_are_private(self):
        category = BudgetCategory.objects.create(
            user=self.other, category="FOOD", amount=Decimal("200.00")
        )
        self.client.force_authenticate(user=self.member)
        self.assertEqual(self.client.get(self.url).data, [])
        response = self.client.patch(f"{self.url}{category.reference}/", {"amount": "1.00"})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
