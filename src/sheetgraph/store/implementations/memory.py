"""In-memory record store for development and tests.

Keeps one table per type plus a relationship ledger. Relationship formulas are
stored verbatim, as a spreadsheet would store them, and evaluated against the
ledger every time a record is read.
"""

import uuid
from typing import Any

from ...graphql.formulas import (
    RelationshipRow,
    is_relationship_formula,
    join_ids,
    looks_like_relationship_formula,
    parse_relationship_formula,
)
from ...logging import get_logger
from ..base import DuplicateRecordError, Record, RecordNotFoundError, RecordStore, RecordStoreError

logger = get_logger(__name__)


class InMemoryStore(RecordStore):
    """Record store backed by dictionaries, with formula evaluation on read."""

    def __init__(self, relationships_sheet: str = "RELATIONSHIPS"):
        self.relationships_sheet = relationships_sheet
        self.tables: dict[str, dict[str, Record]] = {}
        self.relationships: list[RelationshipRow] = []

    def _table(self, type_name: str) -> dict[str, Record]:
        return self.tables.setdefault(type_name, {})

    def _evaluate(self, value: Any) -> Any:
        """Evaluate a relationship formula against the ledger; other values pass through."""
        if not looks_like_relationship_formula(value):
            return value
        if not is_relationship_formula(value):
            raise RecordStoreError(f"Malformed relationship formula: {value}")

        query = parse_relationship_formula(value)

        if query.sheet != self.relationships_sheet:
            raise RecordStoreError(f"Unknown relationships sheet: {query.sheet}")
        return join_ids([row.target_id for row in self.relationships if query.matches(row)])

    def _read(self, record: Record) -> Record:
        return {key: self._evaluate(value) for key, value in record.items()}

    def _get(self, type_name: str, record_id: str) -> Record:
        try:
            return self._table(type_name)[record_id]
        except KeyError:
            raise RecordNotFoundError(type_name, record_id) from None

    async def find_record(self, type_name: str, record_id: str) -> Record:
        return self._read(self._get(type_name, record_id))

    async def find_all(self, type_name: str) -> list[Record]:
        return [self._read(record) for record in self._table(type_name).values()]

    async def find_records(self, type_name: str, ids: list[str]) -> list[Record]:
        return [self._read(self._get(type_name, record_id)) for record_id in ids]

    async def create_record(self, type_name: str, props: Record) -> Record:
        record_id = props.get("id") or self.new_id()
        table = self._table(type_name)
        if record_id in table:
            raise DuplicateRecordError(type_name, record_id)

        table[record_id] = {**props, "id": record_id}
        logger.debug("Stored record", type_name=type_name, record_id=record_id)
        return self._read(table[record_id])

    async def update_record(self, type_name: str, props: Record) -> Record:
        record_id = props.get("id")
        if not record_id:
            raise RecordStoreError(f"Cannot update {type_name} record without an id")

        record = self._get(type_name, record_id)
        record.update(props)
        return self._read(record)

    async def delete_record(self, type_name: str, record_id: str) -> None:
        self._get(type_name, record_id)
        del self._table(type_name)[record_id]
        self.relationships = [
            row
            for row in self.relationships
            if not (row.source_type == type_name and row.source_id == record_id)
            and not (row.target_type == type_name and row.target_id == record_id)
        ]

    def new_id(self) -> str:
        return str(uuid.uuid4())

    def relate(
        self,
        source_type: str,
        source_id: str,
        field_name: str,
        target_type: str,
        target_id: str,
    ) -> RelationshipRow:
        """Append a relationship instance to the ledger."""
        row = RelationshipRow(
            source_type=source_type,
            source_id=source_id,
            target_type=target_type,
            field_name=field_name,
            target_id=target_id,
        )
        self.relationships.append(row)
        return row
