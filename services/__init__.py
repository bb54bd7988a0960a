"""Services package - Business logic layer"""

from services.dish_service import DishService
from services.vote_evaluator import VoteTally, evaluate

__all__ = [
    "DishService",
    "VoteTally",
    "evaluate",
]
