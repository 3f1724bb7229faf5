"""
Member type GraphQL type definitions
"""

from enum import Enum

import strawberry


@strawberry.enum
class MemberTypeId(Enum):
    """Membership tier identifier."""

    BASIC = "BASIC"
    BUSINESS = "BUSINESS"


@strawberry.type
class MemberType:
    """Membership tier with its discount and monthly post allowance."""

    id: MemberTypeId
    discount: float
    posts_limit_per_month: float
