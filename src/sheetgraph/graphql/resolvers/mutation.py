"""
Mutation resolvers for the create<Type>, update<Type> and delete<Type> convention.

Create is the only mutation with real work to do. The payload is walked
breadth-first with an explicit queue: every record in the tree gets an id and
has each relationship field of its type replaced by a ledger formula. Records
are then persisted level by level from the deepest level up, so children are
written before the record that contains them. Nested payload objects never
reach the store; they are returned to the caller as the created child records.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ...config import settings
from ...logging import get_logger
from ...store.base import Record, RecordStore, resolve_value
from ..classifier import MutationAction, MutationField, TypeClassification
from ..formulas import relationship_formula

if TYPE_CHECKING:
    from graphql import GraphQLResolveInfo

    from .base import Resolver

logger = get_logger(__name__)


class NestingDepthError(ValueError):
    """Create payload is nested deeper than the configured limit."""

    def __init__(self, type_name: str, depth: int, max_depth: int):
        super().__init__(
            f"Nested {type_name} record at depth {depth} exceeds maximum nesting depth {max_depth}"
        )
        self.type_name = type_name
        self.depth = depth
        self.max_depth = max_depth


@dataclass
class PendingRecord:
    """A record of a create payload, ready to persist once its children are."""

    type_name: str
    props: Record
    depth: int
    children: dict[str, PendingRecord | list[PendingRecord]] = field(default_factory=dict)
    result: Record | None = None

    def assemble(self, stored: Record | None) -> Record:
        """Merge the stored record with the already created children."""
        result = dict(stored) if stored is not None else dict(self.props)
        for field_name, child in self.children.items():
            if isinstance(child, list):
                result[field_name] = [item.result for item in child]
            else:
                result[field_name] = child.result
        return result


def plan_create(
    type_name: str,
    payload: Mapping[str, Any],
    object_types: dict[str, TypeClassification],
    store: RecordStore,
    *,
    max_depth: int,
    relationships_sheet: str,
) -> list[list[PendingRecord]]:
    """Allocate ids and substitute relationship formulas for a create payload.

    Args:
        type_name: Type of the top-level record
        payload: Mutation input, possibly holding nested records
        object_types: Classified object types of the schema
        store: Store used for id allocation
        max_depth: Deepest nesting level accepted below the top-level record
        relationships_sheet: Ledger sheet referenced by generated formulas

    Returns:
        Pending records grouped by nesting depth, top-level record first

    Raises:
        NestingDepthError: If the payload nests deeper than ``max_depth``
    """
    root = PendingRecord(type_name=type_name, props=dict(payload), depth=0)
    levels: list[list[PendingRecord]] = []
    queue = deque([root])

    while queue:
        pending = queue.popleft()
        if len(levels) <= pending.depth:
            levels.append([])
        levels[pending.depth].append(pending)

        if pending.props.get("id") is None:
            pending.props["id"] = store.new_id()
        record_id = pending.props["id"]

        for relationship in object_types[pending.type_name].relationships:
            nested = pending.props.get(relationship.name)
            pending.props[relationship.name] = relationship_formula(
                pending.type_name,
                record_id,
                relationship.target_type_name,
                relationship.name,
                sheet=relationships_sheet,
            )

            if isinstance(nested, Mapping):
                items = [nested]
            elif isinstance(nested, list | tuple):
                items = [item for item in nested if isinstance(item, Mapping)]
            else:
                continue

            if not items:
                continue

            depth = pending.depth + 1
            if depth > max_depth:
                raise NestingDepthError(relationship.target_type_name, depth, max_depth)

            children = [
                PendingRecord(
                    type_name=relationship.target_type_name, props=dict(item), depth=depth
                )
                for item in items
            ]
            queue.extend(children)
            if isinstance(nested, Mapping):
                pending.children[relationship.name] = children[0]
            else:
                pending.children[relationship.name] = children

    return levels


async def persist_levels(levels: list[list[PendingRecord]], store: RecordStore) -> Record:
    """Write pending records deepest level first; siblings are written concurrently.

    All sibling writes of a level finish before the first failure, in level
    order, is raised.
    """

    async def create(pending: PendingRecord) -> Record | None:
        return await resolve_value(store.create_record(pending.type_name, pending.props))

    for level in reversed(levels):
        stored = await asyncio.gather(
            *(create(pending) for pending in level), return_exceptions=True
        )

        for pending, record in zip(level, stored, strict=True):
            if isinstance(record, BaseException):
                logger.error(
                    "Record creation failed",
                    type_name=pending.type_name,
                    record_id=pending.props["id"],
                    error=str(record),
                )
                raise record

        for pending, record in zip(level, stored, strict=True):
            pending.result = pending.assemble(record)
            logger.info(
                "Record created", type_name=pending.type_name, record_id=pending.props["id"]
            )

    return levels[0][0].result


def create_resolver(
    store: RecordStore,
    entry: MutationField,
    object_types: dict[str, TypeClassification],
    *,
    max_depth: int,
    relationships_sheet: str,
) -> Resolver:
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Record:
        payload = args.get(entry.input_argument) or {}
        levels = plan_create(
            entry.type_name,
            payload,
            object_types,
            store,
            max_depth=max_depth,
            relationships_sheet=relationships_sheet,
        )
        return await persist_levels(levels, store)

    return resolve


def update_resolver(store: RecordStore, entry: MutationField) -> Resolver:
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Record | None:
        payload = args.get(entry.input_argument)
        return await resolve_value(store.update_record(entry.type_name, payload))

    return resolve


def delete_resolver(store: RecordStore, entry: MutationField) -> Resolver:
    async def resolve(parent: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        return await resolve_value(store.delete_record(entry.type_name, args.get("id")))

    return resolve


def build_mutation_resolvers(
    mutation_fields: tuple[MutationField, ...],
    object_types: dict[str, TypeClassification],
    store: RecordStore,
    *,
    max_depth: int | None = None,
    relationships_sheet: str | None = None,
) -> dict[str, Resolver]:
    """Build one resolver per classified mutation field.

    Args:
        mutation_fields: Mutation entries following the naming convention
        object_types: Classified object types, used for relationship formulas
        store: Record store every resolver writes to
        max_depth: Nesting limit for create payloads (defaults to settings)
        relationships_sheet: Ledger sheet name (defaults to settings)
    """
    if max_depth is None:
        max_depth = settings.max_nesting_depth
    relationships_sheet = relationships_sheet or settings.relationships_sheet

    resolvers: dict[str, Resolver] = {}
    for entry in mutation_fields:
        if entry.action is MutationAction.CREATE:
            resolvers[entry.name] = create_resolver(
                store,
                entry,
                object_types,
                max_depth=max_depth,
                relationships_sheet=relationships_sheet,
            )
        elif entry.action is MutationAction.UPDATE:
            resolvers[entry.name] = update_resolver(store, entry)
        else:
            resolvers[entry.name] = delete_resolver(store, entry)

    logger.debug("Built mutation resolvers", fields=list(resolvers))
    return resolvers
