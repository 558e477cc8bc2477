from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from accounts.tools import create_member_accounts
from budgets.models import BudgetCategory, BudgetRecommendation
from loanproducts.models import LoanProduct
from loanrepayments.models import LoanRepayment
from loans.models import Loan
from savingsdeposits.models import SavingsDeposit
from savingsproducts.models import SavingsProduct
from savingswithdrawals.models import SavingsWithdrawal

User = get_user_model()

ADMIN_EMAIL = "admin@sacco.com"

SAVINGS_PRODUCTS = [
    {
        "name": "Regular Savings",
        "product_type": "REGULAR",
        "interest_rate": Decimal("3.50"),
        "min_balance": Decimal("500.00"),
        "description": "Standard savings account with competitive interest rates",
    },
    {
        "name": "Fixed Deposit",
        "product_type": "FIXED_DEPOSIT",
        "interest_rate": Decimal("7.25"),
        "min_balance": Decimal("5000.00"),
        "term_months": 12,
        "description": "Higher interest rate for a fixed term commitment",
    },
    {
        "name": "Education Savings",
        "product_type": "EDUCATION",
        "interest_rate": Decimal("5.00"),
        "min_balance": Decimal("1000.00"),
        "description": "Save for your children's education with special benefits",
    },
    {
        "name": "Emergency Fund",
        "product_type": "EMERGENCY",
        "interest_rate": Decimal("3.75"),
        "min_balance": Decimal("1000.00"),
        "description": "Quick access savings for unexpected expenses",
    },
]

LOAN_PRODUCTS = [
    {
        "name": "Personal Loan",
        "loan_type": "PERSONAL",
        "interest_rate": Decimal("12.50"),
        "max_amount": Decimal("25000.00"),
        "max_term": 36,
        "min_savings_percentage": Decimal("10.00"),
        "description": "Flexible loan for personal use",
    },
    {
        "name": "Business Development Loan",
        "loan_type": "BUSINESS",
        "interest_rate": Decimal("10.75"),
        "max_amount": Decimal("100000.00"),
        "max_term": 60,
        "min_savings_percentage": Decimal("15.00"),
        "description": "Grow your business with affordable financing",
    },
    {
        "name": "Education Loan",
        "loan_type": "EDUCATION",
        "interest_rate": Decimal("8.50"),
        "max_amount": Decimal("50000.00"),
        "max_term": 72,
        "min_savings_percentage": Decimal("5.00"),
        "description": "Invest in your future with our education financing options",
    },
    {
        "name": "Emergency Loan",
        "loan_type": "EMERGENCY",
        "interest_rate": Decimal("9.75"),
        "max_amount": Decimal("15000.00"),
        "max_term": 24,
        "min_savings_percentage": Decimal("5.00"),
        "description": "Quick access to funds for urgent needs",
    },
]

BUDGET_CATEGORIES = [
    ("HOUSING", Decimal("800.00"), "Rent and utilities"),
    ("FOOD", Decimal("350.00"), "Groceries and eating out"),
    ("TRANSPORTATION", Decimal("150.00"), "Public transport and occasional taxi"),
]


class Command(BaseCommand):
    help = "Load demo members, products and transactions"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Clear existing data before seeding",
        )

    def handle(self, *args, **options):
        force = options["force"]

        if User.objects.filter(email=ADMIN_EMAIL).exists() and not force:
            self.stdout.write("Database already contains data, skipping seed")
            return

        with transaction.atomic():
            if force:
                self.clear()
            self.seed()

        self.stdout.write(self.style.SUCCESS("Initial data seeding complete"))

    def clear(self):
        self.stdout.write("Force option enabled - clearing existing data...")
        # Members cascade to their accounts, loans and budgets
        User.objects.all().delete()
        SavingsProduct.objects.all().delete()
        LoanProduct.objects.all().delete()
        self.stdout.write("All existing data cleared")

    def seed(self):
        admin = User.objects.create_superuser(
            email=ADMIN_EMAIL, password="admin123", name="Admin User"
        )
        create_member_accounts(admin)
        self.stdout.write(f"Created admin user: {admin.name}")

        member = User.objects.create_user(
            email="john@example.com", password="password123", name="John Doe"
        )
        self.stdout.write(f"Created member: {member.name}")

        savings_products = {
            data["name"]: SavingsProduct.objects.create(**data)
            for data in SAVINGS_PRODUCTS
        }
        self.stdout.write(self.style.SUCCESS("Created savings products"))

        loan_products = {
            data["name"]: LoanProduct.objects.create(**data) for data in LOAN_PRODUCTS
        }
        self.stdout.write(self.style.SUCCESS("Created loan products"))

        savings_account = create_member_accounts(member)
        savings_account.product = savings_products["Regular Savings"]
        savings_account.save()

        # Deposits carry the balance to 2450.00
        SavingsDeposit.objects.create(
            savings_account=savings_account,
            deposited_by=admin,
            amount=Decimal("500.00"),
            method="bank",
            notes="Initial deposit",
        )
        SavingsDeposit.objects.create(
            savings_account=savings_account,
            deposited_by=admin,
            amount=Decimal("1950.00"),
            method="bank",
            notes="Salary deposit",
        )
        SavingsWithdrawal.objects.create(
            savings_account=savings_account,
            withdrawn_by=member,
            amount=Decimal("200.00"),
            method="bank",
            reason="Emergency expenses",
        )
        self.stdout.write(self.style.SUCCESS("Created savings transactions"))

        business_loan = loan_products["Business Development Loan"]
        approved_loan = Loan.objects.create(
            user=member,
            product=business_loan,
            amount=Decimal("1200.00"),
            purpose="business",
            term=12,
            interest_rate=business_loan.interest_rate,
            description="Need funds to expand my small business",
            status=Loan.APPROVED,
            processed_by=admin,
            processed_at=timezone.now(),
        )
        LoanRepayment.objects.create(
            loan=approved_loan, recorded_by=admin, amount=Decimal("150.00")
        )

        education_loan = loan_products["Education Loan"]
        Loan.objects.create(
            user=member,
            product=education_loan,
            amount=Decimal("500.00"),
            purpose="education",
            term=6,
            interest_rate=education_loan.interest_rate,
            description="For a short course in web development",
        )
        self.stdout.write(self.style.SUCCESS("Created loans"))

        for category, amount, notes in BUDGET_CATEGORIES:
            BudgetCategory.objects.create(
                user=member, category=category, amount=amount, notes=notes
            )
        BudgetRecommendation.objects.create(
            user=member,
            recommendation_type=BudgetRecommendation.SAVING,
            title="Increase Your Emergency Fund",
            description=(
                "We recommend saving at least 3-6 months of expenses in your "
                "emergency fund."
            ),
            suggested_amount=Decimal("5000.00"),
            category="SAVINGS",
        )
        self.stdout.write(self.style.SUCCESS("Created budget data"))
