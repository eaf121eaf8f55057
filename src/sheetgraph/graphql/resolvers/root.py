"""
Root query resolvers: find one record by id, or find all records of a type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...logging import get_logger
from ...store.base import Record, RecordStore, resolve_value
from ..classifier import Cardinality, QueryField

if TYPE_CHECKING:
    from graphql import GraphQLResolveInfo

    from .base import Resolver

logger = get_logger(__name__)


def find_one_resolver(store: RecordStore, type_name: str) -> Resolver:
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Record:
        return await resolve_value(store.find_record(type_name, args.get("id")))

    return resolve


def find_all_resolver(store: RecordStore, type_name: str) -> Resolver:
    # Declared field arguments are not consulted; the fetch is always unfiltered.
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> list[Record]:
        return await resolve_value(store.find_all(type_name))

    return resolve


def root_resolver(entry: QueryField, store: RecordStore) -> Resolver:
    if entry.cardinality is Cardinality.MANY:
        return find_all_resolver(store, entry.target_type_name)
    return find_one_resolver(store, entry.target_type_name)


def build_root_resolvers(
    query_fields: tuple[QueryField, ...], store: RecordStore
) -> dict[str, Resolver]:
    """Build one resolver per root query field.

    The store is addressed by the field's target type name, not the field name.
    """
    resolvers = {entry.name: root_resolver(entry, store) for entry in query_fields}
    logger.debug("Built root resolvers", fields=list(resolvers))
    return resolvers
