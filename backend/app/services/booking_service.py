"""
RideRelay Backend: Booking Service
====================================

What:  The `bookings` collection. Listing is always scoped to one owner's
       email; the route has already checked that email against the token.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.document import BookingRecord
from app.services.document_service import Document, DocumentService


class BookingService(DocumentService):

    def __init__(self):
        super().__init__(BookingRecord, "booking")

    async def list_for_owner(self, db: AsyncSession, email: str) -> List[Document]:
        """Bookings whose `email` field equals `email`, in natural order."""
        return await self.list_documents(db, filters={"email": email})


booking_service = BookingService()
