"""Tests for the in-memory record store."""

import pytest

from sheetgraph.graphql.formulas import relationship_formula
from sheetgraph.store.base import DuplicateRecordError, RecordNotFoundError, RecordStoreError
from sheetgraph.store.implementations.memory import InMemoryStore


class TestInMemoryStore:
    """Test record operations and ledger evaluation."""

    @pytest.fixture
    def store(self):
        return InMemoryStore()

    @pytest.mark.asyncio
    async def test_create_and_find(self, store):
        created = await store.create_record("Person", {"id": "taras", "firstName": "Taras"})

        assert created == {"id": "taras", "firstName": "Taras"}
        assert await store.find_record("Person", "taras") == created

    @pytest.mark.asyncio
    async def test_create_allocates_missing_id(self, store):
        created = await store.create_record("Person", {"firstName": "Taras"})

        assert created["id"]
        assert await store.find_record("Person", created["id"]) == created

    @pytest.mark.asyncio
    async def test_create_duplicate(self, store):
        await store.create_record("Person", {"id": "taras"})

        with pytest.raises(DuplicateRecordError):
            await store.create_record("Person", {"id": "taras"})

    @pytest.mark.asyncio
    async def test_find_missing(self, store):
        with pytest.raises(RecordNotFoundError) as exc_info:
            await store.find_record("Person", "nobody")

        assert exc_info.value.type_name == "Person"
        assert exc_info.value.record_id == "nobody"

    @pytest.mark.asyncio
    async def test_find_records_keeps_order_and_duplicates(self, store):
        for record_id in ("a", "b", "c"):
            await store.create_record("Product", {"id": record_id})

        result = await store.find_records("Product", ["c", "a", "c"])

        assert [record["id"] for record in result] == ["c", "a", "c"]
        assert await store.find_records("Product", []) == []

    @pytest.mark.asyncio
    async def test_types_are_separate(self, store):
        await store.create_record("Person", {"id": "1"})

        assert await store.find_all("Product") == []
        assert len(await store.find_all("Person")) == 1

    @pytest.mark.asyncio
    async def test_formulas_are_evaluated_on_read(self, store):
        await store.create_record(
            "Person",
            {"id": "taras", "siblings": relationship_formula("Person", "taras", "Person", "siblings")},
        )
        store.relate("Person", "taras", "siblings", "Person", "lida")
        store.relate("Person", "taras", "siblings", "Person", "ivan")
        store.relate("Person", "lida", "siblings", "Person", "taras")

        record = await store.find_record("Person", "taras")

        assert record["siblings"] == "lida,ivan"
        assert store.tables["Person"]["taras"]["siblings"].startswith("=JOIN(")

    @pytest.mark.asyncio
    async def test_unrelated_formula_evaluates_to_empty(self, store):
        created = await store.create_record(
            "Person", {"id": "taras", "father": relationship_formula("Person", "taras", "Person", "father")}
        )

        assert created["father"] == ""

    @pytest.mark.asyncio
    async def test_unknown_ledger_sheet(self, store):
        formula = relationship_formula("Person", "t", "Person", "father", sheet="OTHER")

        with pytest.raises(RecordStoreError, match="Unknown relationships sheet"):
            await store.create_record("Person", {"id": "t", "father": formula})

    @pytest.mark.asyncio
    async def test_formulas_for_quoted_ids_are_evaluated(self, store):
        await store.create_record(
            "Person",
            {"id": "o'brien", "father": relationship_formula("Person", "o'brien", "Person", "father")},
        )
        store.relate("Person", "o'brien", "father", "Person", "serge")

        record = await store.find_record("Person", "o'brien")

        assert record["father"] == "serge"

    @pytest.mark.asyncio
    async def test_malformed_formula(self, store):
        store.tables["Person"] = {"t": {"id": "t", "father": '=JOIN(",", QUERY(RELATIONSHIPS'}}

        with pytest.raises(RecordStoreError, match="Malformed relationship formula"):
            await store.find_record("Person", "t")

    @pytest.mark.asyncio
    async def test_update_merges(self, store):
        await store.create_record("Person", {"id": "taras", "firstName": "T", "lastName": "M"})

        updated = await store.update_record("Person", {"id": "taras", "firstName": "Taras"})

        assert updated == {"id": "taras", "firstName": "Taras", "lastName": "M"}

    @pytest.mark.asyncio
    async def test_update_requires_id(self, store):
        with pytest.raises(RecordStoreError, match="without an id"):
            await store.update_record("Person", {"firstName": "Taras"})

    @pytest.mark.asyncio
    async def test_delete_removes_ledger_rows(self, store):
        await store.create_record("Person", {"id": "taras"})
        await store.create_record("Person", {"id": "serge"})
        store.relate("Person", "taras", "father", "Person", "serge")
        store.relate("Person", "lida", "siblings", "Person", "ivan")

        await store.delete_record("Person", "serge")

        assert [row.target_id for row in store.relationships] == ["ivan"]
        with pytest.raises(RecordNotFoundError):
            await store.find_record("Person", "serge")

    @pytest.mark.asyncio
    async def test_delete_missing(self, store):
        with pytest.raises(RecordNotFoundError):
            await store.delete_record("Person", "nobody")

    def test_new_id_is_unique(self, store):
        assert len({store.new_id() for _ in range(100)}) == 100
