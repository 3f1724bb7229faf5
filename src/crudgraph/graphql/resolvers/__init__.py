"""Resolver package for GraphQL schema.

Every resolver takes the data-access handle from ``info.context["db"]`` and
delegates to it in a single call per lookup or write.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

import strawberry

from ...datasource import DataSource

OK = "OK"


def get_datasource_from_info(info: strawberry.Info) -> DataSource:
    """Return the DataSource carried by the request context."""
    context = info.context
    if isinstance(context, dict):
        datasource = context.get("db")
    else:
        datasource = getattr(context, "db", None)

    if datasource is None:
        raise RuntimeError("GraphQL context does not carry a data source")
    return datasource


def input_to_data(dto: Any) -> dict[str, Any]:
    """Turn a GraphQL input object into repository data.

    Fields that are absent or null are left out, so change inputs only touch
    what the caller supplied.
    """
    data: dict[str, Any] = {}
    for field in dataclasses.fields(dto):
        value = getattr(dto, field.name)
        if value is None or value is strawberry.UNSET:
            continue
        if isinstance(value, Enum):
            value = value.value
        data[field.name] = value
    return data
