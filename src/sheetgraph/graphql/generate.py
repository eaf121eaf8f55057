"""
Resolver map generation: the single entry point from schema + store to resolvers.
"""

from graphql import GraphQLSchema

from ..logging import get_logger
from ..store.base import RecordStore
from .classifier import classify
from .resolvers import (
    ResolverMap,
    build_composite_resolvers,
    build_mutation_resolvers,
    build_root_resolvers,
)

logger = get_logger(__name__)

QUERY = "Query"
MUTATION = "Mutation"


def generate_resolvers(
    schema: GraphQLSchema,
    store: RecordStore,
    *,
    max_depth: int | None = None,
    relationships_sheet: str | None = None,
) -> ResolverMap:
    """Build the resolver map for a schema backed by a record store.

    The schema is classified once; every resolver closes over ``store`` and the
    type name it serves, and holds no other state.

    Args:
        schema: graphql-core schema with a root query type and optional mutation type
        store: Record store implementing the store port
        max_depth: Nesting limit for create payloads (defaults to settings)
        relationships_sheet: Ledger sheet name for formulas (defaults to settings)

    Returns:
        Mapping of type name (including "Query" and "Mutation") to field resolvers

    Raises:
        SchemaClassificationError: If the schema references an unknown type
    """
    classification = classify(schema)

    resolvers: ResolverMap = build_composite_resolvers(classification.object_types, store)
    resolvers[QUERY] = build_root_resolvers(classification.query_fields, store)
    resolvers[MUTATION] = build_mutation_resolvers(
        classification.mutation_fields,
        classification.object_types,
        store,
        max_depth=max_depth,
        relationships_sheet=relationships_sheet,
    )

    logger.info(
        "Resolver map generated",
        types=sorted(classification.object_types),
        queries=len(resolvers[QUERY]),
        mutations=len(resolvers[MUTATION]),
    )
    return resolvers
