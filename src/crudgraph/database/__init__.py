"""
Database module for crudgraph
"""

from .connection import (
    create_schema,
    dispose_database,
    get_async_engine,
    get_async_session,
    get_session_factory,
    init_database,
)

__all__ = [
    "create_schema",
    "dispose_database",
    "get_async_engine",
    "get_async_session",
    "get_session_factory",
    "init_database",
]
