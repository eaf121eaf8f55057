"""Record store implementations."""

from .memory import InMemoryStore
from .spreadsheet import SheetsConnector, SpreadsheetStore

__all__ = ["InMemoryStore", "SheetsConnector", "SpreadsheetStore"]
