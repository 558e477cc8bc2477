from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.tools import create_member_accounts
from savingsdeposits.models import SavingsDeposit

User = get_user_model()


class SavingsDepositTests(APITestCase):
    url = "/api/v1/savingsdeposits/"

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

    def deposit(self, account, amount, method="mobile"):
        return self.client.post(
            self.url,
            {
                "savings_account": account.account_number,
                "amount": amount,
                "method": method,
                "notes": "Salary",
            },
        )

    def test_deposit_increases_balance_by_amount(self):
        self.client.force_authenticate(user=self.member)
        response = self.deposit(self.account, "500.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["amount"], "500.00")
        self.assertTrue(response.data["identity"].startswith("DEP"))

        response = self.deposit(self.account, "1950.25")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("2450.25"))
        self.assertEqual(SavingsDeposit.objects.filter(savings_account=self.account).count(), 2)

    def test_zero_and_negative_amounts_rejected(self):
        self.client.force_authenticate(user=self.member)
        for amount in ("0.00", "-10.00"):
            response = self.deposit(self.account, amount)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("amount", response.data)

        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("0.00"))
        self.assertFalse(SavingsDeposit.objects.exists())

    def test_member_cannot_deposit_into_another_account(self):
        self.client.force_authenticate(user=self.member)
        response = self.deposit(self.other_account, "100.00")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.other_account.refresh_from_db()
        self.assertEqual(self.other_account.balance, Decimal("0.00"))
        self.assertFalse(SavingsDeposit.objects.exists())

    def test_admin_deposits_for_member(self):
        self.client.force_authenticate(user=self.admin)
        response = self.deposit(self.account, "750.00", method="cash")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["deposited_by"], self.admin.member_no)
        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("750.00"))

    def test_unknown_account_number_rejected(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.post(
            self.url,
            {"savings_account": "SV000000000000", "amount": "100.00", "method": "bank"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("savings_account", response.data)

    def test_inactive_account_rejected(self):
        self.account.is_active = False
        self.account.save()
        self.client.force_authenticate(user=self.member)
        response = self.deposit(self.account, "100.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_member_lists_only_own_deposits(self):
        SavingsDeposit.objects.create(savings_account=self.account, amount=Decimal("10.00"))
        SavingsDeposit.objects.create(
            savings_account=self.other_account, amount=Decimal("20.00")
        )
        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([d["amount"] for d in response.data], ["10.00"])

    def test_deposits_are_immutable(self):
        deposit = SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("100.00")
        )
        deposit.amount = Decimal("1000.00")
        with self.assertRaises(ValueError):
            deposit.save()
        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("100.00"))


class SavingsDepositAdminTests(APITestCase):
    def test_deposits_cannot_be_deleted(self):
        superuser = User.objects.create_superuser(
            email="root@sacco.com", password="root1234", name="Root"
        )
        member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        deposit = SavingsDeposit.objects.create(
            savings_account=create_member_accounts(member), amount=Decimal("250.00")
        )
        self.client.force_login(superuser)
        response = self.client.post(
            f"/admin/savingsdeposits/savingsdeposit/{deposit.pk}/delete/",
            {"post": "yes"},
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(SavingsDeposit.objects.filter(pk=deposit.pk).exists())
