import logging

from savings.models import SavingsAccount


logger = logging.getLogger(__name__)


def create_member_accounts(user):
    """
    Opens the member's savings account. Every member has exactly one.
    """
    account, created = SavingsAccount.objects.get_or_create(user=user)
    if created:
        logger.info(f"Created SavingsAccount {account.account_number} for {user.member_no}")
    return account
