"""
Schema classification.

Walks a graphql-core schema once and produces plain data describing what
resolvers the schema needs: root query entry points, mutation entry points and
the relationship fields of every user-defined object type. Resolver builders
consume this data and never inspect the schema themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from graphql import (
    GraphQLField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    get_named_type,
    get_nullable_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_specified_scalar_type,
)

from ..logging import get_logger

logger = get_logger(__name__)

MUTATION_NAME_PATTERN = re.compile(r"^(?P<action>create|update|delete)(?P<type_name>[A-Z]\w*)$")


class SchemaClassificationError(ValueError):
    """Raised when a schema cannot be classified (e.g. unknown type reference)."""

    pass


class Cardinality(str, Enum):
    ONE = "one"
    MANY = "many"


class MutationAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class FieldClassification:
    """A relationship field of a user-defined object type."""

    name: str
    target_type_name: str
    cardinality: Cardinality
    nullable: bool


@dataclass(frozen=True)
class TypeClassification:
    """Relationship fields of one user-defined object type, in declaration order."""

    name: str
    relationships: tuple[FieldClassification, ...] = ()


@dataclass(frozen=True)
class QueryField:
    """A root query entry point."""

    name: str
    target_type_name: str
    cardinality: Cardinality


@dataclass(frozen=True)
class MutationField:
    """A root mutation entry point following the create/update/delete convention."""

    name: str
    action: MutationAction
    type_name: str
    input_argument: str


@dataclass(frozen=True)
class SchemaClassification:
    query_fields: tuple[QueryField, ...] = ()
    mutation_fields: tuple[MutationField, ...] = ()
    object_types: dict[str, TypeClassification] = field(default_factory=dict)


def _lookup(schema: GraphQLSchema, named_type: GraphQLNamedType, owner: str) -> GraphQLNamedType:
    """Resolve a field's named type against the type map, failing fast when absent."""
    resolved = schema.type_map.get(named_type.name)
    if resolved is None:
        raise SchemaClassificationError(
            f"Field {owner} references unknown type '{named_type.name}'"
        )
    return resolved


def _root_type_names(schema: GraphQLSchema) -> set[str]:
    roots = (schema.query_type, schema.mutation_type, schema.subscription_type)
    return {root.name for root in roots if root is not None}


def is_user_object_type(schema: GraphQLSchema, type_: GraphQLNamedType) -> bool:
    """True for object types declared by the schema author (not built-ins, not roots)."""
    if not is_object_type(type_):
        return False
    if is_introspection_type(type_) or type_.name.startswith("__"):
        return False
    return type_.name not in _root_type_names(schema)


def classify_field(
    schema: GraphQLSchema, type_name: str, field_name: str, field_: GraphQLField
) -> FieldClassification | None:
    """Classify one field, returning None for scalar-valued fields."""
    owner = f"{type_name}.{field_name}"
    nullable = not is_non_null_type(field_.type)
    inner = get_nullable_type(field_.type)
    target = _lookup(schema, get_named_type(field_.type), owner)

    if not is_user_object_type(schema, target):
        return None

    cardinality = Cardinality.MANY if is_list_type(inner) else Cardinality.ONE
    return FieldClassification(
        name=field_name,
        target_type_name=target.name,
        cardinality=cardinality,
        nullable=nullable,
    )


def classify_object_type(schema: GraphQLSchema, type_: GraphQLObjectType) -> TypeClassification:
    relationships = []
    for field_name, field_ in type_.fields.items():
        classified = classify_field(schema, type_.name, field_name, field_)
        if classified is not None:
            relationships.append(classified)
    return TypeClassification(name=type_.name, relationships=tuple(relationships))


def classify_query_fields(schema: GraphQLSchema) -> tuple[QueryField, ...]:
    query_type = schema.query_type
    if query_type is None:
        return ()

    entries = []
    for field_name, field_ in query_type.fields.items():
        target = _lookup(schema, get_named_type(field_.type), f"{query_type.name}.{field_name}")
        if not is_user_object_type(schema, target):
            logger.debug("Skipping root field without a record type", field=field_name)
            continue

        inner = get_nullable_type(field_.type)
        entries.append(
            QueryField(
                name=field_name,
                target_type_name=target.name,
                cardinality=Cardinality.MANY if is_list_type(inner) else Cardinality.ONE,
            )
        )
    return tuple(entries)


def input_argument_name(type_name: str, field_: GraphQLField) -> str:
    """Name of the argument carrying a create/update payload.

    The lower-cased type name, unless the field only declares the
    lower-camel spelling.
    """
    lowered = type_name.lower()
    lower_camel = type_name[:1].lower() + type_name[1:]
    if lowered not in field_.args and lower_camel in field_.args:
        return lower_camel
    return lowered


def classify_mutation_fields(
    schema: GraphQLSchema, object_types: dict[str, TypeClassification]
) -> tuple[MutationField, ...]:
    mutation_type = schema.mutation_type
    if mutation_type is None:
        return ()

    entries = []
    for field_name, field_ in mutation_type.fields.items():
        match = MUTATION_NAME_PATTERN.match(field_name)
        if match is None:
            logger.debug("Skipping mutation without naming convention", field=field_name)
            continue

        type_name = match.group("type_name")
        if type_name not in object_types:
            logger.warning(
                "Skipping mutation for unknown object type",
                field=field_name,
                type_name=type_name,
            )
            continue

        entries.append(
            MutationField(
                name=field_name,
                action=MutationAction(match.group("action")),
                type_name=type_name,
                input_argument=input_argument_name(type_name, field_),
            )
        )
    return tuple(entries)


def classify(schema: GraphQLSchema) -> SchemaClassification:
    """Classify a schema into query entries, mutation entries and object types.

    Args:
        schema: graphql-core schema

    Returns:
        SchemaClassification describing every resolver the schema needs

    Raises:
        SchemaClassificationError: If a field references a type missing from the type map
    """
    object_types: dict[str, TypeClassification] = {}
    for type_name, type_ in schema.type_map.items():
        if is_specified_scalar_type(type_) or not is_user_object_type(schema, type_):
            continue
        object_types[type_name] = classify_object_type(schema, type_)

    classification = SchemaClassification(
        query_fields=classify_query_fields(schema),
        mutation_fields=classify_mutation_fields(schema, object_types),
        object_types=object_types,
    )
    logger.debug(
        "Schema classified",
        object_types=list(object_types),
        query_fields=[entry.name for entry in classification.query_fields],
        mutation_fields=[entry.name for entry in classification.mutation_fields],
    )
    return classification
