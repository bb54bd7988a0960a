"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    ServiceValidationError,
    InvalidVoteError,
    NotFoundError,
    DishNotFoundError,
    StoreUnavailableError,
)

__all__ = [
    "settings",
    "ServiceValidationError",
    "InvalidVoteError",
    "NotFoundError",
    "DishNotFoundError",
    "StoreUnavailableError",
]
