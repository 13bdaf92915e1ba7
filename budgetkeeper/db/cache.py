"""
Cache repository for the persisted application state.

The AppState collection holds exactly one document, stored under the fixed
APP_STATE_ID key so it is read and written through the same primitives as
every other document.
"""

import logging
from datetime import date
from typing import Callable

from budgetkeeper.config import APP_STATE_COLLECTION, APP_STATE_ID
from budgetkeeper.models import AppState

from .base import DocumentStore
from .repository import DocumentRepository, WriteResult

logger = logging.getLogger(__name__)


class CacheRepository:
    """Repository for the AppState singleton."""

    def __init__(
        self,
        store: DocumentStore,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the repository.

        Args:
            store: Document store holding the AppState collection
            today: Source of the current date for defaults and resets
        """
        self.documents = DocumentRepository(store, AppState)
        self.today = today

    def get(self) -> AppState:
        """Get the app state, creating and saving the default on first use."""
        state = self.documents.get_by_id(APP_STATE_ID, APP_STATE_COLLECTION)
        if state is not None:
            return state

        state = AppState.for_date(self.today())
        self.documents.upsert(state, APP_STATE_COLLECTION)
        logger.info(
            f"Created default app state for "
            f"{state.selected_month}/{state.selected_year}"
        )
        return state

    def save(self, state: AppState) -> WriteResult:
        """Overwrite the singleton with the given state."""
        state.id = APP_STATE_ID
        return self.documents.upsert(state, APP_STATE_COLLECTION)

    def reset(self) -> WriteResult:
        """Point the month/year selection back at today."""
        state = self.get()
        today = self.today()
        state.selected_month = today.month
        state.selected_year = today.year
        return self.save(state)
