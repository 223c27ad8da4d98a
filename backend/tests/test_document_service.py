"""
RideRelay Backend: Document Service Tests
===========================================

What:  Collection CRUD against a real (SQLite) database, plus store-fault
       handling against a mock session.

What we test:
    ✅ Two identical creates produce two documents with distinct ids
    ✅ Update merges top-level fields and never removes any
    ✅ Update reports matched/modified counts, zero for missing ids
    ✅ Delete reports deleted counts; deleted documents are not found
    ✅ Malformed ids raise InvalidIdentifierError
    ✅ Driver errors are wrapped in DatabaseError
"""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, InvalidIdentifierError, NotFoundError
from app.services.booking_service import BookingService
from app.services.catalog_service import ServiceCatalogService
from app.services.document_service import merge_document


class TestMergeDocument:

    def test_merge_overwrites_and_extends(self):
        assert merge_document({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}

    def test_merge_with_empty_patch_is_identity(self):
        assert merge_document({"a": 1}, {}) == {"a": 1}


class TestCreateAndGet:

    def setup_method(self):
        self.service = ServiceCatalogService()

    @pytest.mark.asyncio
    async def test_create_then_get_returns_body_with_id(self, db_session):
        ack = await self.service.create_document(db_session, {"name": "Airport Transfer", "price": 40})
        await db_session.commit()

        doc = await self.service.get_document(db_session, ack.inserted_id)

        assert ack.acknowledged is True
        assert doc == {"_id": ack.inserted_id, "name": "Airport Transfer", "price": 40}

    @pytest.mark.asyncio
    async def test_identical_creates_get_distinct_ids(self, db_session):
        body = {"name": "City Ride", "price": 12}
        first = await self.service.create_document(db_session, dict(body))
        second = await self.service.create_document(db_session, dict(body))
        await db_session.commit()

        assert first.inserted_id != second.inserted_id
        assert len(await self.service.list_documents(db_session)) == 2

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, db_session):
        ack = await self.service.create_document(db_session, {"_id": "mine", "name": "X"})
        await db_session.commit()

        doc = await self.service.get_document(db_session, ack.inserted_id)
        assert doc["_id"] == ack.inserted_id
        uuid.UUID(doc["_id"])

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_document(db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["not-a-uuid", "123", ""])
    async def test_get_malformed_id_raises_invalid_identifier(self, db_session, raw_id):
        with pytest.raises(InvalidIdentifierError):
            await self.service.get_document(db_session, raw_id)

    @pytest.mark.asyncio
    async def test_list_keeps_insertion_order(self, db_session):
        ids = []
        for name in ("first", "second", "third"):
            ack = await self.service.create_document(db_session, {"name": name})
            ids.append(ack.inserted_id)
        await db_session.commit()

        docs = await self.service.list_documents(db_session)
        assert [d["_id"] for d in docs] == ids


class TestUpdate:

    def setup_method(self):
        self.service = ServiceCatalogService()

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, db_session):
        ack = await self.service.create_document(db_session, {"a": 1, "b": 2})
        await db_session.commit()

        result = await self.service.update_document(db_session, ack.inserted_id, {"b": 3, "c": 4})
        await db_session.commit()

        assert result.matched_count == 1
        assert result.modified_count == 1
        doc = await self.service.get_document(db_session, ack.inserted_id)
        assert doc == {"_id": ack.inserted_id, "a": 1, "b": 3, "c": 4}

    @pytest.mark.asyncio
    async def test_update_with_same_values_modifies_nothing(self, db_session):
        ack = await self.service.create_document(db_session, {"a": 1})
        await db_session.commit()

        result = await self.service.update_document(db_session, ack.inserted_id, {"a": 1})

        assert result.matched_count == 1
        assert result.modified_count == 0

    @pytest.mark.asyncio
    async def test_update_missing_document_matches_nothing(self, db_session):
        result = await self.service.update_document(db_session, str(uuid.uuid4()), {"a": 1})

        assert result.matched_count == 0
        assert result.modified_count == 0

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, db_session):
        ack = await self.service.create_document(db_session, {"a": 1})
        await db_session.commit()

        await self.service.update_document(db_session, ack.inserted_id, {"_id": "other"})
        await db_session.commit()

        doc = await self.service.get_document(db_session, ack.inserted_id)
        assert doc["_id"] == ack.inserted_id

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, db_session):
        with pytest.raises(InvalidIdentifierError):
            await self.service.update_document(db_session, "xyz", {"a": 1})


class TestDelete:

    def setup_method(self):
        self.service = BookingService()

    @pytest.mark.asyncio
    async def test_delete_then_get_and_delete_again(self, db_session):
        ack = await self.service.create_document(db_session, {"email": "a@example.com"})
        await db_session.commit()

        first = await self.service.delete_document(db_session, ack.inserted_id)
        await db_session.commit()
        second = await self.service.delete_document(db_session, ack.inserted_id)

        assert first.deleted_count == 1
        assert second.deleted_count == 0
        with pytest.raises(NotFoundError):
            await self.service.get_document(db_session, ack.inserted_id)

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, db_session):
        with pytest.raises(InvalidIdentifierError):
            await self.service.delete_document(db_session, "nope")


class TestBookingOwnerListing:

    def setup_method(self):
        self.service = BookingService()

    @pytest.mark.asyncio
    async def test_list_for_owner_filters_by_email(self, db_session):
        mine = await self.service.create_document(db_session, {"email": "a@example.com", "seat": 1})
        await self.service.create_document(db_session, {"email": "b@example.com", "seat": 2})
        mine_too = await self.service.create_document(db_session, {"email": "a@example.com", "seat": 3})
        await db_session.commit()

        docs = await self.service.list_for_owner(db_session, "a@example.com")

        assert [d["_id"] for d in docs] == [mine.inserted_id, mine_too.inserted_id]
        assert all(d["email"] == "a@example.com" for d in docs)


class TestStoreFaults:

    def setup_method(self):
        self.service = ServiceCatalogService()

    @pytest.mark.asyncio
    async def test_list_wraps_driver_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_documents(mock_db_session)
        assert exc_info.value.context["error_type"] == "OperationalError"
        assert "down" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_wraps_flush_error(self, mock_db_session):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

        with pytest.raises(DatabaseError):
            await self.service.create_document(mock_db_session, {"name": "x"})

    @pytest.mark.asyncio
    async def test_invalid_id_checked_before_store_call(self, mock_db_session):
        with pytest.raises(InvalidIdentifierError):
            await self.service.delete_document(mock_db_session, "bad-id")
        mock_db_session.execute.assert_not_awaited()
