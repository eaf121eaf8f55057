"""Resolver type aliases."""

from collections.abc import Awaitable, Callable
from typing import Any

Resolver = Callable[..., Awaitable[Any]]
ResolverMap = dict[str, dict[str, Resolver]]
