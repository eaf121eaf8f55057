"""
Relationship field resolvers.

A relationship value on a loaded record is either a single id (to-one) or a
comma-joined id list (to-many), as evaluated by the store from the stored
formula. Some stores return a to-many value as a list of ids instead, which is
read the same way. Records returned by a create mutation carry the nested
records themselves, which are passed through without another fetch.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ...store.base import Record, RecordStore, resolve_value
from ..classifier import Cardinality, FieldClassification, TypeClassification
from ..formulas import join_ids, split_ids

if TYPE_CHECKING:
    from graphql import GraphQLResolveInfo

    from .base import Resolver


def parent_value(parent: Any, field_name: str) -> Any:
    """Read a field from a parent that is either a mapping or an object."""
    if isinstance(parent, Mapping):
        return parent.get(field_name)
    return getattr(parent, field_name, None)


def to_one_resolver(store: RecordStore, field: FieldClassification) -> Resolver:
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Record | None:
        value = parent_value(parent, field.name)
        if isinstance(value, Mapping):
            return dict(value)
        if not value:
            return None
        return await resolve_value(store.find_record(field.target_type_name, value))

    return resolve


def to_many_resolver(store: RecordStore, field: FieldClassification) -> Resolver:
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> list[Record]:
        value = parent_value(parent, field.name)
        if isinstance(value, list | tuple):
            if all(isinstance(item, Mapping) for item in value):
                return [dict(item) for item in value]
            value = join_ids([str(item) for item in value])
        return await resolve_value(store.find_records(field.target_type_name, split_ids(value)))


    return resolve


def composite_resolver(store: RecordStore, field: FieldClassification) -> Resolver:
    if field.cardinality is Cardinality.MANY:
        return to_many_resolver(store, field)
    return to_one_resolver(store, field)


def build_composite_resolvers(
    object_types: dict[str, TypeClassification], store: RecordStore
) -> dict[str, dict[str, Resolver]]:
    """Build resolvers for every relationship field, keyed by type then field name.

    Scalar fields get no resolver; types without relationships get an empty mapping.
    """
    return {
        type_name: {
            field.name: composite_resolver(store, field) for field in classified.relationships
        }
        for type_name, classified in object_types.items()
    }
