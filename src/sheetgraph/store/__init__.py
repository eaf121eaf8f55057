"""
Record store port and implementations.
"""

from .base import (
    DuplicateRecordError,
    Record,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
)
from .factory import create_store, create_store_from_settings
from .implementations import InMemoryStore, SpreadsheetStore

__all__ = [
    "DuplicateRecordError",
    "InMemoryStore",
    "Record",
    "RecordNotFoundError",
    "RecordStore",
    "RecordStoreError",
    "SpreadsheetStore",
    "create_store",
    "create_store_from_settings",
]
