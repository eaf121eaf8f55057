"""
Middleware for request context and logging
"""

import json
import re
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

OPERATION_PATTERN = re.compile(r"\b(query|mutation)\s+(\w+)")


def operation_name_from_query(query: str) -> str:
    """Derive a loggable operation name from a GraphQL document."""
    if "__schema" in query or "IntrospectionQuery" in query:
        return "__introspection"

    match = OPERATION_PATTERN.search(query)
    if match:
        kind = "mutation:" if match.group(1) == "mutation" else ""
        return f"{kind}{match.group(2)}"
    return "unnamed_operation"


async def extract_graphql_operation_name(request: Request) -> str | None:
    if request.url.path != "/graphql" or request.method != "POST":
        return None

    try:
        body = await request.body()
        if not body:
            return None
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None

    if not isinstance(data, dict):
        return None

    op = data.get("operationName")
    if isinstance(op, str) and op:
        return op

    query = data.get("query")
    if not isinstance(query, str) or not query:
        return None
    return operation_name_from_query(query)


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set logging context for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and set logging context."""

        graphql_operation = await extract_graphql_operation_name(request)
        set_request_context(
            request_id=request.headers.get("x-request-id"),
            operation_name=graphql_operation,
        )

        try:
            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)

            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
            )
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        finally:
            clear_request_context()
