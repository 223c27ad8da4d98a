from app.models.document import BookingRecord, DocumentMixin, ServiceRecord

__all__ = ["BookingRecord", "DocumentMixin", "ServiceRecord"]
