"""
Generic document repository.

CRUD primitives shared by every domain repository. The repository is
parameterized by a document class exposing an ``id`` attribute, a
``to_dict()`` method and a ``from_dict()`` classmethod; the collection name
is supplied per call.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Generic, Optional, Protocol, TypeVar

from budgetkeeper.config import ERROR_MESSAGES

from .base import DocumentStore

logger = logging.getLogger(__name__)


class Document(Protocol):
    id: Optional[str]

    def to_dict(self) -> dict: ...

    @classmethod
    def from_dict(cls, data: dict): ...


T = TypeVar("T", bound=Document)


@dataclass
class WriteResult:
    """
    Outcome of a write.

    ``success`` reports whether the write happened. ``inserted`` is only set
    by upserts and says whether a new document was created; an upsert that
    replaced a document is still a success.
    """

    success: bool
    message: Optional[str] = None
    id: Optional[str] = None
    inserted: Optional[bool] = None

    def __bool__(self) -> bool:
        return self.success


class DocumentRepository(Generic[T]):
    """Collection-agnostic CRUD over documents of one type."""

    def __init__(self, store: DocumentStore, document_type: type[T]):
        """
        Initialize the repository.

        Args:
            store: Document store the collections live in
            document_type: Class used to rebuild documents on read
        """
        self.store = store
        self.document_type = document_type

    def _load(self, data: dict) -> T:
        return self.document_type.from_dict(data)

    def list(self, collection_name: str) -> list[T]:
        """Get every document in the collection."""
        with self.store.collection(collection_name) as collection:
            rows = collection.all()
        logger.debug(f"Loaded {len(rows)} documents from {collection_name}")
        return [self._load(row) for row in rows]

    def find(self, collection_name: str, **equals) -> list[T]:
        """Get the documents whose top-level fields equal the given values."""
        with self.store.collection(collection_name) as collection:
            rows = collection.find(**equals)
        return [self._load(row) for row in rows]

    def get_by_id(self, doc_id: str, collection_name: str) -> Optional[T]:
        """
        Get a document by id.

        Returns:
            The document, or None if no document has that id
        """
        if not doc_id:
            return None
        with self.store.collection(collection_name) as collection:
            row = collection.find_by_id(doc_id)
        if row is None:
            logger.debug(f"No document {doc_id} in {collection_name}")
            return None
        return self._load(row)

    def insert(self, doc: T, collection_name: str) -> WriteResult:
        """
        Insert a new document, assigning an id when it has none.

        Returns:
            WriteResult with the inserted id, or success=False when the id
            is already taken
        """
        if not doc.id:
            doc.id = str(uuid.uuid4())

        with self.store.collection(collection_name) as collection:
            inserted = collection.insert(doc.id, doc.to_dict())

        if not inserted:
            logger.warning(f"Rejected duplicate id {doc.id} in {collection_name}")
            return WriteResult(
                success=False,
                message=ERROR_MESSAGES["duplicate_id"].format(
                    id=doc.id, collection=collection_name
                ),
                id=doc.id,
            )
        logger.info(f"Inserted {doc.id} into {collection_name}")
        return WriteResult(success=True, id=doc.id, inserted=True)

    def update(self, doc: T, collection_name: str) -> WriteResult:
        """Replace an existing document. success=False if it does not exist."""
        if not doc.id:
            return WriteResult(success=False)

        with self.store.collection(collection_name) as collection:
            updated = collection.update(doc.id, doc.to_dict())

        if updated:
            logger.info(f"Updated {doc.id} in {collection_name}")
        else:
            logger.debug(f"No document {doc.id} to update in {collection_name}")
        return WriteResult(success=updated, id=doc.id)

    def delete(self, doc_id: str, collection_name: str) -> WriteResult:
        """Delete a document by id. success=False if it does not exist."""
        if not doc_id:
            return WriteResult(success=False)

        with self.store.collection(collection_name) as collection:
            deleted = collection.delete(doc_id)

        if deleted:
            logger.info(f"Deleted {doc_id} from {collection_name}")
        else:
            logger.debug(f"No document {doc_id} to delete in {collection_name}")
        return WriteResult(success=deleted, id=doc_id)

    def upsert(self, doc: T, collection_name: str) -> WriteResult:
        """
        Insert or replace a document by id.

        Any write that does not raise is a success; ``inserted`` tells an
        insert apart from a replacement.
        """
        if not doc.id:
            doc.id = str(uuid.uuid4())

        with self.store.collection(collection_name) as collection:
            inserted = collection.upsert(doc.id, doc.to_dict())

        logger.info(
            f"{'Inserted' if inserted else 'Replaced'} {doc.id} in {collection_name}"
        )
        return WriteResult(success=True, id=doc.id, inserted=inserted)
