"""Factory for creating record stores."""

from typing import Any

from ..logging import get_logger
from .base import RecordStore
from .implementations.memory import InMemoryStore
from .implementations.spreadsheet import SpreadsheetStore

logger = get_logger(__name__)


def create_store(provider_type: str, config: dict[str, Any]) -> RecordStore:
    """Create a record store instance from configuration.

    Args:
        provider_type: Type of store ('memory', 'spreadsheet')
        config: Store configuration dictionary

    Returns:
        RecordStore instance

    Raises:
        ValueError: If provider type is unknown or configuration is invalid
    """

    if provider_type == "memory":
        return _create_memory_store(config)
    elif provider_type == "spreadsheet":
        return _create_spreadsheet_store(config)
    else:
        raise ValueError(f"Unknown store provider type: {provider_type}")


def _create_memory_store(config: dict[str, Any]) -> InMemoryStore:
    """Create in-memory store."""
    return InMemoryStore(relationships_sheet=config.get("relationships_sheet", "RELATIONSHIPS"))


def _create_spreadsheet_store(config: dict[str, Any]) -> SpreadsheetStore:
    """Create spreadsheet store."""
    connector = config.get("connector")
    spreadsheet_id = config.get("spreadsheet_id")

    if connector is None:
        raise ValueError("Spreadsheet store requires 'connector' in configuration")
    if not spreadsheet_id:
        raise ValueError("Spreadsheet store requires 'spreadsheet_id' in configuration")

    return SpreadsheetStore(
        connector=connector,
        spreadsheet_id=spreadsheet_id,
        title=config.get("title"),
        url=config.get("url"),
    )


def create_store_from_settings(connector: Any = None) -> RecordStore:
    """Create the store selected by application settings."""
    from ..config import settings

    store = create_store(
        settings.store_provider,
        {
            "connector": connector,
            "spreadsheet_id": settings.spreadsheet_id,
            "relationships_sheet": settings.relationships_sheet,
        },
    )
    logger.info("Created record store", provider=settings.store_provider)
    return store
