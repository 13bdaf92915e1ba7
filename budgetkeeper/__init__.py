"""
budgetkeeper - Personal budget and payment tracking

Persistence and aggregate computation for budgets, recurring expenses and
incomes, and payment records split across payees.
"""

from .db import (
    BudgetRepository,
    CacheRepository,
    DocumentStore,
    PaymentRepository,
    StorageError,
    WriteResult,
)
from .models import AppState, Budget, PaymentItem
from .services import summarize

__version__ = "0.1.0"

__all__ = [
    "AppState",
    "Budget",
    "BudgetRepository",
    "CacheRepository",
    "DocumentStore",
    "PaymentItem",
    "PaymentRepository",
    "StorageError",
    "WriteResult",
    "summarize",
]
