"""Spreadsheet-backed record store.

Each type lives in a sheet of the same name; rows are records keyed by their
``id`` column. Reading and writing cells, evaluating formulas and
authentication are the connector's job; this class only maps the store port
onto connector calls for one spreadsheet.
"""

import uuid
from typing import Any, Protocol

from ...logging import get_logger
from ..base import Record, RecordNotFoundError, RecordStore

logger = get_logger(__name__)


class SheetsConnector(Protocol):
    """Operations a spreadsheet service connector must provide."""

    async def load_record(
        self, spreadsheet_id: str, sheet: str, record_id: str
    ) -> Record | None: ...

    async def load_all(self, spreadsheet_id: str, sheet: str) -> list[Record]: ...

    async def load_records(
        self, spreadsheet_id: str, sheet: str, ids: list[str]
    ) -> list[Record]: ...

    async def append_record(self, spreadsheet_id: str, sheet: str, props: Record) -> Record: ...

    async def update_record(self, spreadsheet_id: str, sheet: str, props: Record) -> Record: ...

    async def delete_record(self, spreadsheet_id: str, sheet: str, record_id: str) -> None: ...


class SpreadsheetStore(RecordStore):
    """Record store for one spreadsheet, one sheet per type."""

    def __init__(
        self,
        connector: SheetsConnector,
        spreadsheet_id: str,
        title: str | None = None,
        url: str | None = None,
        sheets: list[dict[str, Any]] | None = None,
    ):
        self.connector = connector
        self.id = spreadsheet_id
        self.title = title
        self.url = url
        # Sheet metadata keyed by title; one sheet per stored type
        self.sheets: dict[str, dict[str, Any]] = {
            sheet["title"]: dict(sheet) for sheet in sheets or []
        }

    async def find_record(self, type_name: str, record_id: str) -> Record:
        data = await self.connector.load_record(self.id, type_name, record_id)
        if data is None:
            raise RecordNotFoundError(type_name, record_id)
        return dict(data)

    async def find_all(self, type_name: str) -> list[Record]:
        data = await self.connector.load_all(self.id, type_name)
        return [dict(item) for item in data]

    async def find_records(self, type_name: str, ids: list[str]) -> list[Record]:
        if not ids:
            return []
        data = await self.connector.load_records(self.id, type_name, ids)
        return [dict(item) for item in data]

    async def create_record(self, type_name: str, props: Record) -> Record:
        logger.info(
            "Appending record", spreadsheet_id=self.id, sheet=type_name, record_id=props.get("id")
        )
        data = await self.connector.append_record(self.id, type_name, props)
        return dict(data) if data is not None else dict(props)

    async def update_record(self, type_name: str, props: Record) -> Record | None:
        logger.info(
            "Updating record", spreadsheet_id=self.id, sheet=type_name, record_id=props.get("id")
        )
        data = await self.connector.update_record(self.id, type_name, props)
        return dict(data) if data is not None else None

    async def delete_record(self, type_name: str, record_id: str) -> None:
        logger.info("Deleting record", spreadsheet_id=self.id, sheet=type_name, record_id=record_id)
        await self.connector.delete_record(self.id, type_name, record_id)

    def new_id(self) -> str:
        return str(uuid.uuid4())

    def __repr__(self) -> str:
        return f"SpreadsheetStore(id={self.id!r}, title={self.title!r})"


def spreadsheet_store_from_metadata(
    connector: SheetsConnector, metadata: dict[str, Any]
) -> SpreadsheetStore:
    """Build a store from spreadsheet metadata as returned by a sheets API."""
    return SpreadsheetStore(
        connector=connector,
        spreadsheet_id=metadata["id"],
        title=metadata.get("title"),
        url=metadata.get("url"),
        sheets=metadata.get("sheets"),
    )
