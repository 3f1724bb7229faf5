#!/usr/bin/env python3
"""
Main CLI entry point for the crudgraph server.
"""

import os
import sys

import click
import uvicorn

from crudgraph import __version__
from crudgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="crudgraph")
def cli() -> None:
    """crudgraph CLI - run the GraphQL server and inspect its schema."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=8000,
    type=int,
    help="Port to bind to (default: 8000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the crudgraph API server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info(
        "Starting crudgraph API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The app reads its settings at import time, reloaded workers included
    if log_level == "debug":
        os.environ["CRUDGRAPH_DEBUG"] = "true"
        os.environ["CRUDGRAPH_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("CRUDGRAPH_DEBUG", "false")
        os.environ.setdefault("CRUDGRAPH_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "crudgraph.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("print-schema")
def print_schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from crudgraph.graphql.schema import schema

    click.echo(schema.as_str())


if __name__ == "__main__":
    cli()
