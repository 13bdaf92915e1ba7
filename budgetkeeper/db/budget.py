"""
Budget repository.

Stores each Budget aggregate as one document in the Budget collection.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from budgetkeeper.config import BUDGET_COLLECTION
from budgetkeeper.models import Budget

from .base import DocumentStore
from .repository import DocumentRepository, WriteResult

logger = logging.getLogger(__name__)


class BudgetRepository:
    """Repository for Budget aggregates."""

    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the repository.

        Args:
            store: Document store holding the Budget collection
            clock: Source of the current time for last-saved stamps
        """
        self.documents = DocumentRepository(store, Budget)
        self.clock = clock

    def get_all(self) -> list[Budget]:
        """Get every budget, oldest first."""
        budgets = self.documents.list(BUDGET_COLLECTION)
        return sorted(budgets, key=lambda b: b.created_date)

    def get_latest(self) -> Optional[Budget]:
        """
        Get the most recently saved budget.

        Budgets that were never saved rank below saved ones; ties fall back
        to the creation date.
        """
        budgets = self.documents.list(BUDGET_COLLECTION)
        if not budgets:
            return None
        return max(
            budgets,
            key=lambda b: (
                b.last_saved_date is not None,
                b.last_saved_date or datetime.min,
                b.created_date,
            ),
        )

    def get_by_id(self, budget_id: str) -> Optional[Budget]:
        return self.documents.get_by_id(budget_id, BUDGET_COLLECTION)

    def save(self, budget: Budget) -> WriteResult:
        """
        Stamp the last-saved time and write the whole budget.

        Returns:
            The upsert result; success is True whenever the write went through,
            whether the budget was new or replaced
        """
        budget.last_saved_date = self.clock()
        result = self.documents.upsert(budget, BUDGET_COLLECTION)
        logger.info(f"Saved budget {budget.id} (new={result.inserted})")
        return result

    def create(self, annual_salary: Decimal = Decimal("0")) -> Budget:
        """Create and save a budget with empty collections."""
        budget = Budget(annual_salary=annual_salary, created_date=self.clock())
        self.save(budget)
        return budget

    def delete(self, budget_id: str) -> WriteResult:
        return self.documents.delete(budget_id, BUDGET_COLLECTION)
