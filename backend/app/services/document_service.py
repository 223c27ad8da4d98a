"""
RideRelay Backend: Document Service (Collection CRUD)
=======================================================

What:  The five collection operations every resource shares: list, get,
       create, merge-update and delete.
How:   One `DocumentService` per collection, parameterized by its ORM model.
       Each method issues exactly one single-document statement on the
       session it is given; the request's session dependency commits.
Who:   Subclassed by ServiceCatalogService and BookingService; called by
       the route handlers.

Error Handling Strategy:
    - Unparseable identifiers   → InvalidIdentifierError (400)
    - Missing document on get   → NotFoundError (404)
    - Missing document on update/delete → zero counts, not an error
    - Any SQLAlchemyError       → DatabaseError (500, generic message)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, InvalidIdentifierError, NotFoundError
from app.models.document import DocumentMixin
from app.schemas.document import DeleteAck, InsertAck, UpdateAck

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

# Keys the store owns; never accepted from a request body
RESERVED_KEYS = ("_id",)


def strip_reserved(body: Document) -> Document:
    return {k: v for k, v in body.items() if k not in RESERVED_KEYS}


def merge_document(existing: Document, patch: Document) -> Document:
    """
    Top-level merge: keys in `patch` overwrite or extend, nothing is removed.

    >>> merge_document({"a": 1, "b": 2}, {"b": 3, "c": 4})
    {'a': 1, 'b': 3, 'c': 4}
    """
    return {**existing, **patch}


class DocumentService:
    """
    CRUD over one schema-less collection.

    Stateless: sessions are passed per call, so one instance serves every
    request concurrently.
    """

    def __init__(self, model: Type[DocumentMixin], resource: str):
        self.model = model
        self.resource = resource

    def parse_id(self, raw_id: str) -> uuid.UUID:
        """Convert a path parameter into the store's identifier type."""
        try:
            return uuid.UUID(str(raw_id))
        except (ValueError, TypeError):
            raise InvalidIdentifierError(self.resource, str(raw_id))

    @asynccontextmanager
    async def _store_call(self, operation: str, **context: Any) -> AsyncIterator[None]:
        """Wrap driver errors in DatabaseError; the original is logged, not returned."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                "Database error during %s %s: %s",
                operation,
                self.resource,
                str(e),
                exc_info=True,
            )
            raise DatabaseError(
                message=f"Could not {operation} {self.resource}. Please try again.",
                context={"error_type": type(e).__name__, **context},
            )

    async def list_documents(
        self,
        db: AsyncSession,
        filters: Optional[Dict[str, str]] = None,
    ) -> List[Document]:
        """
        All documents in natural (insertion) order, optionally narrowed by
        exact-match string filters on top-level fields.
        """
        query = select(self.model)
        for field, value in (filters or {}).items():
            query = query.where(self.model.data[field].as_string() == value)
        query = query.order_by(self.model.created_at)

        async with self._store_call("list", filters=filters or {}):
            result = await db.execute(query)
            records = list(result.scalars().all())

        return [record.to_document() for record in records]

    async def get_document(self, db: AsyncSession, raw_id: str) -> Document:
        doc_id = self.parse_id(raw_id)

        async with self._store_call("retrieve", resource_id=raw_id):
            result = await db.execute(select(self.model).where(self.model.id == doc_id))
            record = result.scalar_one_or_none()

        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        return record.to_document()

    async def create_document(self, db: AsyncSession, body: Document) -> InsertAck:
        """Insert `body` verbatim under a freshly generated identifier."""
        record = self.model(id=uuid.uuid4(), data=strip_reserved(body))

        async with self._store_call("create"):
            db.add(record)
            await db.flush()

        logger.info("Created %s %s", self.resource, record.id)
        return InsertAck(inserted_id=str(record.id))

    async def update_document(
        self,
        db: AsyncSession,
        raw_id: str,
        patch: Document,
    ) -> UpdateAck:
        """
        Merge `patch` into the stored document.

        The row is read FOR UPDATE (a no-op on SQLite) so the read and the
        write form one atomic single-document operation.
        """
        doc_id = self.parse_id(raw_id)
        patch = strip_reserved(patch)

        async with self._store_call("update", resource_id=raw_id):
            result = await db.execute(
                select(self.model).where(self.model.id == doc_id).with_for_update()
            )
            record = result.scalar_one_or_none()
            if record is None:
                logger.info("Update matched no %s with id %s", self.resource, raw_id)
                return UpdateAck(matched_count=0, modified_count=0)

            current = dict(record.data or {})
            merged = merge_document(current, patch)
            if merged == current:
                return UpdateAck(matched_count=1, modified_count=0)

            # Reassign (not mutate) so the ORM sees the change
            record.data = merged
            await db.flush()

        logger.info("Updated %s %s (fields=%s)", self.resource, raw_id, sorted(patch))
        return UpdateAck(matched_count=1, modified_count=1)

    async def delete_document(self, db: AsyncSession, raw_id: str) -> DeleteAck:
        doc_id = self.parse_id(raw_id)

        async with self._store_call("delete", resource_id=raw_id):
            result = await db.execute(delete(self.model).where(self.model.id == doc_id))

        deleted = result.rowcount or 0
        logger.info("Deleted %d %s document(s) for id %s", deleted, self.resource, raw_id)
        return DeleteAck(deleted_count=deleted)
