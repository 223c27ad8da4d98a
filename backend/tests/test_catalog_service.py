"""
RideRelay Backend: Service Catalog Sorting Tests
==================================================

What we test:
    ✅ asc is non-decreasing, desc is non-increasing
    ✅ Unpriced documents go last in both directions
    ✅ Equal prices keep natural order
    ✅ No sortBy leaves natural order alone
    ✅ Unknown sortBy / sortOrder raise ValidationError
"""

import pytest

from app.exceptions import ValidationError
from app.services.catalog_service import ServiceCatalogService, sort_by_price

DOCS = [
    {"_id": "1", "price": 30},
    {"_id": "2", "price": 10},
    {"_id": "3"},
    {"_id": "4", "price": 20.5},
    {"_id": "5", "price": 10},
]


class TestSortByPrice:

    def test_ascending(self):
        result = sort_by_price(DOCS, "asc")
        prices = [d["price"] for d in result if "price" in d]
        assert prices == sorted(prices)
        assert [d["_id"] for d in result] == ["2", "5", "4", "1", "3"]

    def test_descending(self):
        result = sort_by_price(DOCS, "desc")
        prices = [d["price"] for d in result if "price" in d]
        assert prices == sorted(prices, reverse=True)
        assert [d["_id"] for d in result] == ["1", "4", "2", "5", "3"]

    def test_non_numeric_prices_sort_last(self):
        docs = [{"_id": "a", "price": "cheap"}, {"_id": "b", "price": 5}, {"_id": "c", "price": True}]
        assert [d["_id"] for d in sort_by_price(docs, "asc")] == ["b", "a", "c"]

    def test_input_not_mutated(self):
        original = [dict(d) for d in DOCS]
        sort_by_price(DOCS, "desc")
        assert DOCS == original


class TestListServices:

    def setup_method(self):
        self.service = ServiceCatalogService()

    async def _seed(self, db_session, prices):
        ids = []
        for price in prices:
            body = {"name": f"ride-{price}"}
            if price is not None:
                body["price"] = price
            ids.append((await self.service.create_document(db_session, body)).inserted_id)
        await db_session.commit()
        return ids

    @pytest.mark.asyncio
    async def test_no_sort_keeps_natural_order(self, db_session):
        ids = await self._seed(db_session, [50, 10, 30])

        docs = await self.service.list_services(db_session)
        assert [d["_id"] for d in docs] == ids

    @pytest.mark.asyncio
    async def test_sort_order_defaults_to_ascending(self, db_session):
        await self._seed(db_session, [50, 10, 30])

        docs = await self.service.list_services(db_session, sort_by="price")
        assert [d["price"] for d in docs] == [10, 30, 50]

    @pytest.mark.asyncio
    async def test_sort_descending(self, db_session):
        await self._seed(db_session, [50, None, 10, 30])

        docs = await self.service.list_services(db_session, sort_by="price", sort_order="desc")
        assert [d.get("price") for d in docs] == [50, 30, 10, None]

    @pytest.mark.asyncio
    async def test_unknown_sort_field_rejected(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.list_services(db_session, sort_by="name")
        assert exc_info.value.field == "sortBy"

    @pytest.mark.asyncio
    async def test_unknown_sort_order_rejected(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.list_services(db_session, sort_by="price", sort_order="sideways")
        assert exc_info.value.field == "sortOrder"
