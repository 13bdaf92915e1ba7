"""
Database module for budgetkeeper.

This module provides the persistence layer: an embedded document store and
the repositories built on it.

Structure:
- base.py: Document store with per-operation connection management
- repository.py: Generic CRUD over any document type
- budget.py: Budget aggregates
- payments.py: Payment items linked to budgets
- cache.py: Persisted app state singleton
"""

from .base import Collection, DocumentStore, StorageError
from .budget import BudgetRepository
from .cache import CacheRepository
from .payments import PaymentRepository
from .repository import DocumentRepository, WriteResult

__all__ = [
    # Store
    "Collection",
    "DocumentStore",
    "StorageError",
    # Repositories
    "BudgetRepository",
    "CacheRepository",
    "DocumentRepository",
    "PaymentRepository",
    "WriteResult",
]
