#!/usr/bin/env python3
"""
CLI entry point for crudgraph database migrations and seeding.
"""

import asyncio
import sys
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from crudgraph import __version__
from crudgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


def get_alembic_config() -> Config:
    """Get Alembic configuration."""
    # alembic.ini sits at the project root, next to src/
    package_dir = Path(__file__).parent.parent.parent.parent
    alembic_ini = package_dir / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    return Config(str(alembic_ini))


async def _seed() -> None:
    from crudgraph.database.connection import dispose_database, get_async_session
    from crudgraph.database.seed_data import seed_initial_data

    try:
        async with get_async_session() as session:
            await seed_initial_data(session)
    finally:
        await dispose_database()


async def _create_schema() -> None:
    from crudgraph.database.connection import create_schema, dispose_database

    try:
        await create_schema()
    finally:
        await dispose_database()


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="crudgraph-db")
def main(log_level: str) -> None:
    """crudgraph database management."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    try:
        config = get_alembic_config()
        logger.info("Upgrading database", revision=revision)
        command.upgrade(config, revision)
        logger.info("Database upgrade completed successfully")
    except Exception as e:
        logger.error("Database upgrade failed", error=str(e))
        sys.exit(1)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    try:
        config = get_alembic_config()
        logger.info("Downgrading database", revision=revision)
        command.downgrade(config, revision)
        logger.info("Database downgrade completed successfully")
    except Exception as e:
        logger.error("Database downgrade failed", error=str(e))
        sys.exit(1)


@main.command()
def current() -> None:
    """Show current database revision."""
    try:
        config = get_alembic_config()
        command.current(config)
    except Exception as e:
        logger.error("Failed to get current revision", error=str(e))
        sys.exit(1)


@main.command()
def history() -> None:
    """Show migration history."""
    try:
        config = get_alembic_config()
        command.history(config)
    except Exception as e:
        logger.error("Failed to get migration history", error=str(e))
        sys.exit(1)


@main.command("create-schema")
def create_schema_command() -> None:
    """Create tables straight from the ORM models (SQLite development databases)."""
    try:
        asyncio.run(_create_schema())
        logger.info("Schema created")
    except Exception as e:
        logger.error("Schema creation failed", error=str(e))
        sys.exit(1)


@main.command()
def seed() -> None:
    """Seed the member type reference rows."""
    try:
        asyncio.run(_seed())
    except Exception as e:
        logger.error("Database seeding failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
