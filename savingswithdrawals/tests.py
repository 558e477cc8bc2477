from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from accounts.tools import create_member_accounts
from savings.models import SavingsAccount
from savingsdeposits.models import SavingsDeposit
from savingswithdrawals.models import SavingsWithdrawal

User = get_user_model()


class SavingsWithdrawalTests(APITestCase):
    url = "/api/v1/savingswithdrawals/"

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
        SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("1000.00")
        )

    def request_withdrawal(self, amount, account=None):
        account = account or self.account
        return self.client.post(
            self.url,
            {
                "savings_account": account.account_number,
                "amount": amount,
                "method": "mobile",
                "reason": "School fees",
            },
        )

    def approve(self, withdrawal):
        return self.client.post(f"{self.url}{withdrawal.reference}/approve/")

    def reject(self, withdrawal):
        return self.client.post(f"{self.url}{withdrawal.reference}/reject/")

    def balance(self):
        self.account.refresh_from_db()
        return self.account.balance

    def test_member_over_balance_request_rejected_without_record(self):
        self.client.force_authenticate(user=self.member)
        response = self.request_withdrawal("1500.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("amount", response.data)
        self.assertFalse(SavingsWithdrawal.objects.exists())
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_request_is_pending_and_leaves_balance(self):
        self.client.force_authenticate(user=self.member)
        response = self.request_withdrawal("400.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], SavingsWithdrawal.PENDING)
        self.assertEqual(response.data["withdrawn_by"], self.member.member_no)
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_member_cannot_withdraw_from_another_account(self):
        SavingsDeposit.objects.create(
            savings_account=self.other_account, amount=Decimal("500.00")
        )
        self.client.force_authenticate(user=self.member)
        response = self.request_withdrawal("100.00", account=self.other_account)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(SavingsWithdrawal.objects.exists())

    def test_inactive_account_rejected(self):
        SavingsAccount.objects.filter(pk=self.account.pk).update(is_active=False)
        self.client.force_authenticate(user=self.member)
        response = self.request_withdrawal("100.00")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("savings_account", response.data)
        self.assertFalse(SavingsWithdrawal.objects.exists())

    def test_approval_decrements_balance(self):
        withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, withdrawn_by=self.member, amount=Decimal("400.00")
        )
        self.client.force_authenticate(user=self.admin)
        response = self.approve(withdrawal)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["withdrawal"]["status"], SavingsWithdrawal.APPROVED)

        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, SavingsWithdrawal.APPROVED)
        self.assertEqual(withdrawal.processed_by, self.admin)
        self.assertIsNotNone(withdrawal.processed_at)
        self.assertEqual(self.balance(), Decimal("600.00"))

    def test_approved_withdrawal_cannot_be_processed_again(self):
        withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("400.00")
        )
        self.client.force_authenticate(user=self.admin)
        self.approve(withdrawal)

        for action in (self.approve, self.reject):
            response = action(withdrawal)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["detail"], "Withdrawal already processed.")

        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, SavingsWithdrawal.APPROVED)
        self.assertEqual(self.balance(), Decimal("600.00"))

    def test_rejection_leaves_balance(self):
        withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("400.00")
        )
        self.client.force_authenticate(user=self.admin)
        response = self.reject(withdrawal)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, SavingsWithdrawal.REJECTED)
        self.assertEqual(self.balance(), Decimal("1000.00"))

        response = self.approve(withdrawal)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, SavingsWithdrawal.REJECTED)
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_admin_over_balance_request_stays_pending_on_approval(self):
        self.client.force_authenticate(user=self.admin)
        response = self.request_withdrawal("1500.00")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], SavingsWithdrawal.PENDING)

        withdrawal = SavingsWithdrawal.objects.get()
        response = self.approve(withdrawal)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Insufficient balance.")

        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, SavingsWithdrawal.PENDING)
        self.assertIsNone(withdrawal.processed_at)
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_approval_rechecks_balance_against_later_withdrawals(self):
        first = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("700.00")
        )
        second = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("700.00")
        )
        self.client.force_authenticate(user=self.admin)
        self.assertEqual(self.approve(first).status_code, status.HTTP_200_OK)
        self.assertEqual(self.approve(second).status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.balance(), Decimal("300.00"))

    def test_member_cannot_approve(self):
        withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("100.00")
        )
        self.client.force_authenticate(user=self.member)
        response = self.approve(withdrawal)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, SavingsWithdrawal.PENDING)

    def test_unknown_withdrawal_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(f"{self.url}DOESNOTEXIST/approve/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_pending_list_is_admin_only(self):
        SavingsWithdrawal.objects.create(savings_account=self.account, amount=Decimal("100.00"))
        approved = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("50.00")
        )
        approved.status = SavingsWithdrawal.APPROVED
        approved.save()

        self.client.force_authenticate(user=self.member)
        self.assertEqual(
            self.client.get(f"{self.url}pending/").status_code, status.HTTP_403_FORBIDDEN
        )

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f"{self.url}pending/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([w["amount"] for w in response.data], ["100.00"])


class SavingsWithdrawalAdminTests(APITestCase):
    def setUp(self):
        self.superuser = User.objects.create_superuser(
            email="root@sacco.com", password="root1234", name="Root"
        )
        self.member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.account = create_member_accounts(self.member)
        SavingsDeposit.objects.create(
            savings_account=self.account, amount=Decimal("1000.00")
        )
        self.withdrawal = SavingsWithdrawal.objects.create(
            savings_account=self.account, amount=Decimal("400.00")
        )
        self.client.force_authenticate(user=self.superuser)
        self.client.post(f"/api/v1/savingswithdrawals/{self.withdrawal.reference}/approve/")
        self.client.force_authenticate(user=None)
        self.client.force_login(self.superuser)

    def test_approved_withdrawal_amount_is_locked(self):
        self.client.post(
            f"/admin/savingswithdrawals/savingswithdrawal/{self.withdrawal.pk}/change/",
            {"amount": "10.00", "method": "bank", "reason": ""},
        )
        self.withdrawal.refresh_from_db()
        self.assertEqual(self.withdrawal.status, SavingsWithdrawal.APPROVED)
        self.assertEqual(self.withdrawal.amount, Decimal("400.00"))
        self.account.refresh_from_db()
        self.assertEqual(self.account.balance, Decimal("600.00"))

    def test_withdrawals_cannot_be_deleted(self):
        response = self.client.post(
            f"/admin/savingswithdrawals/savingswithdrawal/{self.withdrawal.pk}/delete/",
            {"post": "yes"},
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(SavingsWithdrawal.objects.filter(pk=self.withdrawal.pk).exists())
