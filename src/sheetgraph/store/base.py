"""Record store port and store exceptions."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Any, TypeVar

Record = dict[str, Any]

T = TypeVar("T")


class RecordStoreError(Exception):
    """Base exception for record store operations."""

    pass


class RecordNotFoundError(RecordStoreError):
    """Requested record does not exist."""

    def __init__(self, type_name: str, record_id: str):
        super().__init__(f"{type_name} record not found: {record_id}")
        self.type_name = type_name
        self.record_id = record_id


class DuplicateRecordError(RecordStoreError):
    """A record with the same id already exists."""

    def __init__(self, type_name: str, record_id: str):
        super().__init__(f"{type_name} record already exists: {record_id}")
        self.type_name = type_name
        self.record_id = record_id


class RecordStore(ABC):
    """Abstract base class for all record stores.

    Resolvers accept plain or awaitable return values from every operation
    except ``new_id``, which must return synchronously.
    """

    @abstractmethod
    async def find_record(self, type_name: str, record_id: str) -> Record:
        """Load one record by id.

        Raises:
            RecordNotFoundError: If no record of ``type_name`` has ``record_id``
        """
        pass

    @abstractmethod
    async def find_all(self, type_name: str) -> list[Record]:
        """Load every record of a type."""
        pass

    @abstractmethod
    async def find_records(self, type_name: str, ids: list[str]) -> list[Record]:
        """Load records by id, in the order given (duplicates included)."""
        pass

    @abstractmethod
    async def create_record(self, type_name: str, props: Record) -> Record:
        """Persist a new record and return it as stored."""
        pass

    @abstractmethod
    async def update_record(self, type_name: str, props: Record) -> Record | None:
        """Update the record identified by ``props["id"]``."""
        pass

    @abstractmethod
    async def delete_record(self, type_name: str, record_id: str) -> None:
        """Delete a record by id."""
        pass

    @abstractmethod
    def new_id(self) -> str:
        """Allocate a fresh record id, unique within every type."""
        pass


async def resolve_value(value: T | Awaitable[T]) -> T:
    """Await ``value`` if the store returned an awaitable, else pass it through."""
    if inspect.isawaitable(value):
        return await value
    return value
