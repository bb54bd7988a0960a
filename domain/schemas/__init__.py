"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.dish_schemas import (
    DishCreate,
    DishReplace,
    DishResponse,
    VoteRequest,
    DishVoteRequest,
)

__all__ = [
    "DishCreate",
    "DishReplace",
    "DishResponse",
    "VoteRequest",
    "DishVoteRequest",
]
