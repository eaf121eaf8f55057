"""
FastAPI application serving a generated GraphQL schema
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from graphql import GraphQLSchema, graphql
from pydantic import BaseModel, ConfigDict, Field

from .. import __version__
from ..config import settings
from ..graphql.schema import make_executable_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store.base import RecordStore
from ..store.factory import create_store_from_settings

logger = get_logger(__name__)


class GraphQLRequest(BaseModel):
    """Body of a GraphQL POST request."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


def create_app(type_defs: str | GraphQLSchema, store: RecordStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        type_defs: SDL type definitions or a graphql-core schema
        store: Record store to serve (defaults to the store selected by settings)
    """
    configure_logging(debug=settings.debug)

    if store is None:
        store = create_store_from_settings()

    logger.info("Building executable schema...")
    schema = make_executable_schema(type_defs, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting sheetgraph API...",
            store=type(store).__name__,
            environment=settings.environment,
        )
        yield
        logger.info("Shutting down sheetgraph API...")

    app = FastAPI(
        title="sheetgraph API",
        description="GraphQL resolvers generated from a schema, backed by a record store",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.schema = schema
    app.state.store = store

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.post("/graphql")
    async def graphql_endpoint(  # pyright: ignore [reportUnusedFunction]
        body: GraphQLRequest, request: Request
    ):
        """Execute a GraphQL operation against the generated schema."""
        result = await graphql(
            schema,
            source=body.query,
            variable_values=body.variables,
            operation_name=body.operation_name,
            context_value={"request": request, "store": store},
        )

        response: dict[str, Any] = {"data": result.data}
        if result.errors:
            for error in result.errors:
                logger.warning("GraphQL error", error=error.message, path=error.path)
            response["errors"] = [error.formatted for error in result.errors]
        return response

    return app
