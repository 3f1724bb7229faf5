"""
Main FastAPI application for crudgraph
"""

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database.connection import (
    create_schema,
    dispose_database,
    get_async_session,
    get_database_url,
    init_database,
    test_database_connection,
)
from ..database.seed_data import seed_initial_data
from ..datasource import DataSource
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting crudgraph API...")
    init_database()

    connected, error_message = await test_database_connection()
    if not connected:
        logger.error("Database connection check failed", error=error_message)
        raise RuntimeError(error_message)
    logger.info("Database initialized")

    if get_database_url().startswith("sqlite"):
        await create_schema()

    if settings.seed_on_startup:
        async with get_async_session() as session:
            await seed_initial_data(session)

    yield

    logger.info("Shutting down crudgraph API...")
    await dispose_database()


def create_app(datasource_factory: Callable[[], DataSource] | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        datasource_factory: Overrides the per-request data source, mainly for tests.
    """
    app = FastAPI(
        title="crudgraph API",
        description="GraphQL CRUD API over users, profiles, posts and member types",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

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

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router(datasource_factory)
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint=settings.graphql_path)
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "crudgraph.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
