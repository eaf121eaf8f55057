"""
GraphQL resolver generation for record stores.
"""

from .classifier import SchemaClassificationError, classify
from .formulas import relationship_formula
from .generate import generate_resolvers
from .resolvers.mutation import NestingDepthError
from .schema import attach_resolvers, load_schema, make_executable_schema

__all__ = [
    "NestingDepthError",
    "SchemaClassificationError",
    "attach_resolvers",
    "classify",
    "generate_resolvers",
    "load_schema",
    "make_executable_schema",
    "relationship_formula",
]
