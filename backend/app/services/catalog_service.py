"""
RideRelay Backend: Service Catalog
====================================

What:  The `services` collection plus the price sort used by GET /services.
How:   Fetches in natural order, then sorts in Python. Documents are small
       and the listing is unpaginated, so the whole collection is already in
       memory; sorting here keeps the query identical across SQL dialects.

Sort convention:
    sortBy=price&sortOrder=asc   → cheapest first (default order)
    sortBy=price&sortOrder=desc  → most expensive first
    Documents without a numeric price always come last. Equal prices keep
    their natural order.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ValidationError
from app.models.document import ServiceRecord
from app.services.document_service import Document, DocumentService

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"price"}
SORT_ORDERS = {"asc", "desc"}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def sort_by_price(documents: List[Document], order: str = "asc") -> List[Document]:
    priced = [doc for doc in documents if _is_number(doc.get("price"))]
    unpriced = [doc for doc in documents if not _is_number(doc.get("price"))]
    priced.sort(key=lambda doc: doc["price"], reverse=(order == "desc"))
    return priced + unpriced


class ServiceCatalogService(DocumentService):
    """CRUD for ride services, with sortable listing."""

    def __init__(self):
        super().__init__(ServiceRecord, "service")

    async def list_services(
        self,
        db: AsyncSession,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[Document]:
        """
        All services; sorted by price when `sort_by == "price"`.

        Raises:
            ValidationError: unknown sortBy, or sortOrder other than asc/desc
        """
        documents = await self.list_documents(db)
        if sort_by is None:
            return documents

        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                message=f"Cannot sort services by '{sort_by}'. Sortable fields: price",
                field="sortBy",
                context={"allowed": sorted(SORTABLE_FIELDS)},
            )

        order = (sort_order or "asc").lower()
        if order not in SORT_ORDERS:
            raise ValidationError(
                message=f"Invalid sortOrder '{sort_order}'. Use 'asc' or 'desc'",
                field="sortOrder",
                context={"allowed": sorted(SORT_ORDERS)},
            )

        logger.debug("Sorting %d services by price %s", len(documents), order)
        return sort_by_price(documents, order)


service_catalog = ServiceCatalogService()
