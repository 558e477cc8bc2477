from accounts.utils import to_decimal
from savingsdeposits.models import SavingsDeposit
from savingswithdrawals.models import SavingsWithdrawal
from loanrepayments.models import LoanRepayment


def get_member_transactions(member, limit=None):
    """
    Deposits, withdrawals and loan repayments of a member merged into one
    feed, newest first.
    """
    transactions = []

    for deposit in SavingsDeposit.objects.filter(savings_account__user=member):
        transactions.append(
            {
                "id": f"dep-{deposit.reference}",
                "type": "deposit",
                "date": deposit.created_at,
                "amount": to_decimal(deposit.amount),
                "status": "completed",
                "reference": deposit.identity,
            }
        )

    for withdrawal in SavingsWithdrawal.objects.filter(savings_account__user=member):
        transactions.append(
            {
                "id": f"wdr-{withdrawal.reference}",
                "type": "withdrawal",
                "date": withdrawal.created_at,
                "amount": to_decimal(withdrawal.amount),
                "status": withdrawal.status.lower(),
                "reference": withdrawal.identity,
            }
        )

    for repayment in LoanRepayment.objects.filter(loan__user=member):
        transactions.append(
            {
                "id": f"rep-{repayment.reference}",
                "type": "loan_repayment",
                "date": repayment.created_at,
                "amount": to_decimal(repayment.amount),
                "status": "completed",
                "reference": repayment.identity,
            }
        )

    transactions.sort(key=lambda item: item["date"], reverse=True)
    if limit is not None:
        return transactions[:limit]
    return transactions
