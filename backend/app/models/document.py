"""
RideRelay Backend: Document ORM Models
========================================

What:  One table per collection (`services`, `bookings`), each row holding a
       schema-less JSON document.
How:   A shared mixin declares the three columns; the concrete classes only
       name their table. The document body lives in `data` (JSONB on
       PostgreSQL, JSON elsewhere). The identifier is a UUID assigned on
       insert and never written again.

Query patterns:
    - List:        SELECT ... ORDER BY created_at       (natural order)
    - Get/Update:  SELECT ... WHERE id = :uuid          (primary key)
    - Bookings by owner: WHERE data->>'email' = :email
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DocumentJSON = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentMixin:
    """Columns shared by every collection table."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    data: Mapped[Dict[str, Any]] = mapped_column(
        DocumentJSON,
        nullable=False,
        default=dict,
    )

    # Insertion time; the collection's natural return order
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def to_document(self) -> Dict[str, Any]:
        """Stored body plus the identifier under `_id`."""
        return {"_id": str(self.id), **(self.data or {})}

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, fields={sorted((self.data or {}).keys())})>"


class ServiceRecord(DocumentMixin, Base):
    """A ride service offered by the operator (price, name, anything else)."""

    __tablename__ = "services"
    __table_args__ = (
        Index("idx_services_created_at", "created_at"),
    )


class BookingRecord(DocumentMixin, Base):
    """A customer's booking; `data['email']` identifies its owner."""

    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_created_at", "created_at"),
    )
