"""
Domain enums for the buffet rating application.
Contains all enumeration types used across the domain models.
"""

import enum


class VoteValue(str, enum.Enum):
    """A voter's opinion of a dish"""

    GOOD = "good"
    BAD = "bad"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
