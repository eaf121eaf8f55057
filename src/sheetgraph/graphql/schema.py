"""
Schema loading and resolver binding using graphql-core
"""

from graphql import GraphQLSchema, build_schema, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema

from ..logging import get_logger
from ..store.base import RecordStore
from .generate import MUTATION, QUERY, generate_resolvers
from .resolvers import ResolverMap

logger = get_logger(__name__)


class SchemaError(Exception):
    """Raised when a schema is invalid or resolvers cannot be bound to it."""

    pass


def load_schema(type_defs: str) -> GraphQLSchema:
    """Build a graphql-core schema from SDL type definitions."""
    return build_schema(type_defs)


def validate_schema(schema: GraphQLSchema) -> None:
    """Validate a schema at startup.

    Runs structural validation and an introspection query so that broken type
    references fail fast instead of surfacing on the first request.

    Raises:
        SchemaError: If the schema is invalid
    """
    errors = gql_validate_schema(schema)
    if errors:
        error_messages = [str(e) for e in errors]
        logger.error("GraphQL schema validation failed", errors=error_messages)
        raise SchemaError(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

    result = graphql_sync(schema, get_introspection_query())
    if result.errors:
        error_messages = [str(e) for e in result.errors]
        logger.error("GraphQL introspection failed", errors=error_messages)
        raise SchemaError(f"GraphQL introspection failed: {'; '.join(error_messages)}")

    logger.info("GraphQL schema validation successful")


def attach_resolvers(schema: GraphQLSchema, resolvers: ResolverMap) -> GraphQLSchema:
    """Bind a resolver map onto the fields of ``schema`` in place.

    The reserved "Query" and "Mutation" keys address the schema's root types,
    whatever those are named.

    Raises:
        SchemaError: If the map names a type or field the schema does not have
    """
    for type_name, field_resolvers in resolvers.items():
        if type_name == QUERY:
            target = schema.query_type
        elif type_name == MUTATION:
            target = schema.mutation_type
        else:
            target = schema.get_type(type_name)

        if target is None:
            if field_resolvers:
                raise SchemaError(f"Schema has no type '{type_name}'")
            continue

        for field_name, resolver in field_resolvers.items():
            field = target.fields.get(field_name)
            if field is None:
                raise SchemaError(f"Type '{target.name}' has no field '{field_name}'")
            field.resolve = resolver

    return schema


def make_executable_schema(
    type_defs: str | GraphQLSchema,
    store: RecordStore,
    *,
    max_depth: int | None = None,
    relationships_sheet: str | None = None,
) -> GraphQLSchema:
    """Load (if needed), validate and wire a schema to a record store."""
    schema = load_schema(type_defs) if isinstance(type_defs, str) else type_defs
    validate_schema(schema)
    resolvers = generate_resolvers(
        schema, store, max_depth=max_depth, relationships_sheet=relationships_sheet
    )
    return attach_resolvers(schema, resolvers)
