"""
Resolver builders for root queries, relationship fields and mutations.
"""

from .base import Resolver, ResolverMap
from .composite import build_composite_resolvers
from .mutation import build_mutation_resolvers
from .root import build_root_resolvers

__all__ = [
    "Resolver",
    "ResolverMap",
    "build_composite_resolvers",
    "build_mutation_resolvers",
    "build_root_resolvers",
]
