import string
import secrets
import logging
from decimal import Decimal
from datetime import datetime

from rest_framework import serializers

from accounts.utils import send_notification_email
from savings.models import SavingsAccount

logger = logging.getLogger(__name__)


def generate_loan_account_number():
    """Generate a random 10-digit loan account number."""
    year = datetime.now().year % 100
    random_number = "".join(secrets.choice(string.digits) for _ in range(8))
    return f"LN{year}{random_number}"


def get_savings_balance(member):
    # The member instance may carry a stale cached account
    balance = (
        SavingsAccount.objects.filter(user=member)
        .values_list("balance", flat=True)
        .first()
    )
    return balance if balance is not None else Decimal("0.00")


def required_savings(amount, percentage):
    # Unrounded, the comparison against the balance must be exact
    return Decimal(amount) * Decimal(percentage) / Decimal("100")


def check_loan_eligibility(member, product, amount, term):
    """
    Apply the product's limits to an application.
    Raises a ValidationError naming the failing field; without a product
    there is nothing to check.
    """
    if product is None:
        return

    if not product.is_active:
        raise serializers.ValidationError(
            {"product": f"The loan product '{product.name}' is not available."}
        )

    if amount > product.max_amount:
        raise serializers.ValidationError(
            {
                "amount": f"Amount exceeds the maximum of {product.max_amount:.2f} "
                f"for {product.name}."
            }
        )

    if term > product.max_term:
        raise serializers.ValidationError(
            {
                "term": f"Term exceeds the maximum of {product.max_term} months "
                f"for {product.name}."
            }
        )

    if product.min_savings_percentage is not None:
        needed = required_savings(amount, product.min_savings_percentage)
        balance = get_savings_balance(member)
        if balance < needed:
            logger.info(
                f"Loan application by {member.member_no} ineligible: "
                f"savings {balance} below required {needed}"
            )
            raise serializers.ValidationError(
                {
                    "amount": f"You need at least {needed:.2f} in savings "
                    f"({product.min_savings_percentage}% of the amount) to qualify."
                }
            )


def send_loan_application_email(user, loan):
    return send_notification_email(
        user.email,
        "Loan Application Received",
        "loan_application.html",
        {"user": user, "loan": loan},
    )


def send_loan_status_email(user, loan):
    return send_notification_email(
        user.email,
        "Loan Application Status",
        "loan_status.html",
        {"user": user, "loan": loan},
    )
