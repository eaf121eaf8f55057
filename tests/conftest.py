"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from graphql import GraphQLResolveInfo

from sheetgraph.store.implementations.memory import InMemoryStore

PERSON_SCHEMA = """
    type Person {
        id: String!
        firstName: String
        lastName: String
        father: Person
        siblings: [Person]
    }

    type Query {
        person(id: String!): Person
        people: [Person]
    }

    input PersonInput {
        id: String
        firstName: String
        lastName: String
    }

    type Mutation {
        createPerson(person: PersonInput): Person
        updatePerson(person: PersonInput): Person
        deletePerson(id: String!): Person
    }
"""


@pytest.fixture
def mock_info() -> MagicMock:
    """Create a mock GraphQL info object with an empty context."""
    info = MagicMock(spec=GraphQLResolveInfo)
    info.context = {}
    return info


@pytest.fixture
def mock_store() -> MagicMock:
    """Create a record store double with async operations and a sync new_id."""
    store = MagicMock()
    store.find_record = AsyncMock()
    store.find_all = AsyncMock()
    store.find_records = AsyncMock()
    store.create_record = AsyncMock(side_effect=lambda type_name, props: dict(props))
    store.update_record = AsyncMock()
    store.delete_record = AsyncMock(return_value=None)
    store.new_id = MagicMock()
    return store


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def person_schema() -> str:
    return PERSON_SCHEMA


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def expected_formula():
    """Expected relationship formula, spelled out literally."""

    def build(source_type: str, source_id: str, target_type: str, field_name: str) -> str:
        return (
            '=JOIN(",", QUERY(RELATIONSHIPS!A:F, '
            f"\"SELECT F WHERE B='{source_type}' AND C='{source_id}' "
            f"AND D='{target_type}' and E='{field_name}'\"))"
        )

    return build


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
