"""
Custom GraphQL scalars
"""

import re
import uuid
from typing import NewType

import strawberry

from ..errors import InvalidScalarError

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)


def parse_uuid(value: object) -> uuid.UUID:
    """Parse a hyphenated UUID string; anything else is rejected."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        raise InvalidScalarError(f"Invalid UUID: {value!r}")
    return uuid.UUID(value)


def serialize_uuid(value: object) -> str:
    """Serialize to the canonical lowercase hyphenated form."""
    return str(parse_uuid(value))


UUID = strawberry.scalar(
    NewType("UUID", uuid.UUID),
    name="UUID",
    description="UUID in its hyphenated 8-4-4-4-12 hexadecimal form",
    serialize=serialize_uuid,
    parse_value=parse_uuid,
)
