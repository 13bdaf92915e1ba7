"""
Payment repository.

Payment items live in their own collection and point at their budget by id.
The reference is not enforced: items whose budget is gone still load, and a
budget id with no items simply yields an empty list.
"""

import logging
from datetime import date, datetime
from typing import Optional

from budgetkeeper.config import PAYMENT_COLLECTION
from budgetkeeper.models import PaymentItem

from .base import DocumentStore
from .repository import DocumentRepository, WriteResult

logger = logging.getLogger(__name__)


def _newest_first(items: list[PaymentItem]) -> list[PaymentItem]:
    """Sort by creation date descending, undated items last."""
    return sorted(
        items,
        key=lambda p: (p.created_date is not None, p.created_date or datetime.min),
        reverse=True,
    )


class PaymentRepository:
    """Repository for PaymentItem records."""

    def __init__(self, store: DocumentStore):
        self.documents = DocumentRepository(store, PaymentItem)

    def _for_budget(self, budget_id: str) -> list[PaymentItem]:
        if not budget_id:
            return []
        return self.documents.find(PAYMENT_COLLECTION, budget_id=budget_id)

    def get_all_for_budget(self, budget_id: str) -> list[PaymentItem]:
        """Get all payment items of a budget, newest first."""
        return _newest_first(self._for_budget(budget_id))

    def get_by_id(self, payment_id: str) -> Optional[PaymentItem]:
        return self.documents.get_by_id(payment_id, PAYMENT_COLLECTION)

    def get_by_month_year(
        self, budget_id: str, month: int, year: int
    ) -> list[PaymentItem]:
        """
        Get a budget's payment items created in the given month.

        Args:
            budget_id: Owning budget id
            month: Month number (1-12)
            year: Four digit year

        Returns:
            Matching items, newest first. Items without a creation date are
            never included.

        Raises:
            ValueError: If month is outside 1-12
        """
        if month < 1 or month > 12:
            raise ValueError(f"month must be between 1 and 12, got {month}")

        items = [
            item
            for item in self._for_budget(budget_id)
            if item.created_date is not None
            and item.created_date.month == month
            and item.created_date.year == year
        ]
        logger.debug(
            f"Found {len(items)} payments for budget {budget_id} in {month}/{year}"
        )
        return _newest_first(items)

    def get_by_date(self, budget_id: str, on_date: date) -> list[PaymentItem]:
        """Get a budget's payment items created on a given day."""
        if isinstance(on_date, datetime):
            on_date = on_date.date()
        items = [
            item
            for item in self._for_budget(budget_id)
            if item.created_date is not None and item.created_date.date() == on_date
        ]
        return _newest_first(items)

    def get_distinct_years(self) -> set[int]:
        """Get every year that has at least one payment, across all budgets."""
        return {
            item.created_date.year
            for item in self.documents.list(PAYMENT_COLLECTION)
            if item.created_date is not None
        }

    def insert(self, item: PaymentItem) -> WriteResult:
        """Insert a payment item with payee amounts rounded to cents."""
        for payee in item.payees:
            payee.round_to_cents()
        return self.documents.insert(item, PAYMENT_COLLECTION)

    def update(self, item: PaymentItem) -> WriteResult:
        """Replace a payment item with payee amounts rounded to cents."""
        for payee in item.payees:
            payee.round_to_cents()
        return self.documents.update(item, PAYMENT_COLLECTION)

    def delete(self, payment_id: str) -> WriteResult:
        return self.documents.delete(payment_id, PAYMENT_COLLECTION)

    def delete_for_budget(self, budget_id: str) -> int:
        """
        Delete every payment item of a budget.

        Returns:
            Number of items deleted
        """
        deleted = 0
        for item in self._for_budget(budget_id):
            if self.documents.delete(item.id, PAYMENT_COLLECTION).success:
                deleted += 1
        logger.info(f"Deleted {deleted} payments for budget {budget_id}")
        return deleted
