"""
sheetgraph
GraphQL resolvers generated from a schema, backed by spreadsheet-style record stores
"""

__version__ = "0.1.0"

from .config import settings
from .graphql import generate_resolvers, make_executable_schema
from .store import InMemoryStore, RecordStore, SpreadsheetStore

__all__ = [
    "InMemoryStore",
    "RecordStore",
    "SpreadsheetStore",
    "__version__",
    "generate_resolvers",
    "make_executable_schema",
    "settings",
]
