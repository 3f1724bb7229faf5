"""
Data-access layer
"""

from .base import DataSource, Repository
from .sql import SqlRepository, create_sql_datasource


def get_datasource() -> DataSource:
    """Build the SQL-backed DataSource over the shared session factory."""
    from ..database.connection import get_session_factory

    return create_sql_datasource(get_session_factory())


__all__ = [
    "DataSource",
    "Repository",
    "SqlRepository",
    "create_sql_datasource",
    "get_datasource",
]
