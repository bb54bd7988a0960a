"""
Repositories package - Data access layer.
"""

from repositories.base import DishStore
from repositories.dish_repository import DynamoDishRepository, build_table
from repositories.memory_repository import InMemoryDishRepository

__all__ = [
    "DishStore",
    "DynamoDishRepository",
    "InMemoryDishRepository",
    "build_table",
]
