import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Sum

from accounts.utils import format_amount
from budgets.models import BudgetCategory, BudgetRecommendation
from loans.models import Loan
from savings.models import SavingsAccount

logger = logging.getLogger(__name__)


def build_recommendations(
    savings_balance, outstanding_loans, has_housing_budget, target=None, currency=None
):
    """
    Rule set behind the budget recommendations. Pure: takes the member's figures
    and returns the recommendations to store, in rule order.

    savings_balance is None when the member has no savings account.
    """
    target = target if target is not None else settings.EMERGENCY_FUND_TARGET
    currency = currency or settings.SACCO_CURRENCY
    recommendations = []

    if savings_balance is None or savings_balance < target:
        recommendations.append(
            {
                "recommendation_type": BudgetRecommendation.SAVING,
                "title": "Build Your Emergency Fund",
                "description": (
                    f"Aim to keep at least {currency} {format_amount(target)} in savings "
                    "to cover unexpected expenses. Set aside a fixed amount every "
                    "month until you reach it."
                ),
                "suggested_amount": target,
                "category": "SAVINGS",
            }
        )

    if outstanding_loans > 0:
        recommendations.append(
            {
                "recommendation_type": BudgetRecommendation.DEBT_MANAGEMENT,
                "title": "Accelerate Your Loan Repayment",
                "description": (
                    f"You have {currency} {format_amount(outstanding_loans)} in "
                    "outstanding loans. Consider allocating an additional 5-10% of "
                    "your monthly income towards loan repayment to save on interest."
                ),
                "suggested_amount": None,
                "category": "DEBT",
            }
        )

    if not has_housing_budget:
        recommendations.append(
            {
                "recommendation_type": BudgetRecommendation.SPENDING,
                "title": "Set Your Housing Budget",
                "description": (
                    "Housing costs should ideally be less than 30% of your income. "
                    "Track your rent/mortgage, utilities, and maintenance in this "
                    "category."
                ),
                "suggested_amount": None,
                "category": "HOUSING",
            }
        )

    return recommendations


def get_outstanding_loans(member):
    # Repayments are a reporting record and do not reduce this total
    total = Loan.objects.filter(user=member, status=Loan.APPROVED).aggregate(
        total=Sum("amount")
    )["total"]
    return total or Decimal("0.00")


def generate_budget_recommendations(member):
    """
    Evaluate the rules against the member's current state and store one
    recommendation per rule that fires. Earlier recommendations are kept.
    """
    savings_balance = (
        SavingsAccount.objects.filter(user=member)
        .values_list("balance", flat=True)
        .first()
    )
    has_housing_budget = BudgetCategory.objects.filter(
        user=member, category="HOUSING"
    ).exists()

    rules = build_recommendations(
        savings_balance, get_outstanding_loans(member), has_housing_budget
    )

    with transaction.atomic():
        created = [
            BudgetRecommendation.objects.create(user=member, **rule) for rule in rules
        ]

    logger.info(
        f"Generated {len(created)} budget recommendations for {member.member_no}"
    )
    return created
