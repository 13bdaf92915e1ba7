"""
Shared pytest fixtures for budgetkeeper tests.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from budgetkeeper.db import (
    BudgetRepository,
    CacheRepository,
    DocumentStore,
    PaymentRepository,
)
from budgetkeeper.models import Account, Budget, Expense, Income


class TickingClock:
    """Clock that moves one minute forward on every call."""

    def __init__(self, start=datetime(2024, 3, 15, 9, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(minutes=1)
        return self.now


@pytest.fixture
def store(tmp_path):
    """Fresh store file for every test."""
    return DocumentStore(str(tmp_path / "data" / "budget.db"))


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def budget_repo(store, clock):
    return BudgetRepository(store, clock=clock)


@pytest.fixture
def payment_repo(store):
    return PaymentRepository(store)


@pytest.fixture
def cache_repo(store):
    return CacheRepository(store, today=lambda: date(2024, 3, 15))


@pytest.fixture
def sample_budget():
    """Budget with a few expenses, incomes and accounts."""
    return Budget(
        annual_salary=Decimal("60000"),
        created_date=datetime(2024, 1, 1, 8, 0),
        expenses=[
            Expense("Rent", "Landlord", "Checking", Decimal("1500.00"), 1),
            Expense("Phone", "Carrier", "Visa", Decimal("50.00"), 12),
            Expense("Streaming", "Studio", "Visa", Decimal("30.00"), 20),
        ],
        incomes=[
            Income("Acme", "salary", Decimal("3000.00")),
            Income("Side gig", "freelance", Decimal("500.00")),
        ],
        bank_accounts=[Account("Checking", "First Bank")],
        credit_cards=[Account("Visa", "Card Co")],
        online_services=[Account("PayPal", "PayPal")],
    )
