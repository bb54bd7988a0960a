"""Dish catalog and voting routes"""

from fastapi import APIRouter, Depends, status
from typing import List

from api.dependencies import get_dish_store
from api.responses import ErrorResponse
from domain.schemas.dish_schemas import (
    DishCreate,
    DishReplace,
    DishResponse,
    DishVoteRequest,
    VoteRequest,
)
from repositories import DishStore
from services import DishService

router = APIRouter(
    tags=["Dishes"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("/dishes", response_model=List[DishResponse])
def list_dishes(store: DishStore = Depends(get_dish_store)):
    """Return every dish with its vote counters and ledger."""
    return DishService.list_dishes(store)


@router.get("/dishes/{dish_id}", response_model=DishResponse)
def get_dish(dish_id: str, store: DishStore = Depends(get_dish_store)):
    """Get a single dish. Responds 404 if it does not exist."""
    return DishService.get_dish(store, dish_id)


@router.post(
    "/dishes", response_model=DishResponse, status_code=status.HTTP_201_CREATED
)
def create_dish(dish: DishCreate, store: DishStore = Depends(get_dish_store)):
    """
    Create a dish.

    Counters start at zero and the vote ledger starts empty whatever the body
    says. An existing dish with the same id is overwritten.
    """
    return DishService.create_dish(store, dish)


@router.put("/dishes/{dish_id}", response_model=DishResponse)
def replace_dish(
    dish_id: str, dish: DishReplace, store: DishStore = Depends(get_dish_store)
):
    """Overwrite name, description, good, bad and meals of an existing dish."""
    return DishService.replace_dish(store, dish_id, dish)


@router.post("/vote", response_model=DishResponse)
def vote(request: VoteRequest, store: DishStore = Depends(get_dish_store)):
    """
    Cast, switch or withdraw a vote.

    Body: ``{"dishId": ..., "userEmail": ..., "vote": "good" | "bad"}``.
    Sending the same vote twice withdraws it.
    """
    return DishService.vote(store, request.dish_id, request.user_email, request.vote)


@router.post("/dishes/{dish_id}/vote", response_model=DishResponse)
def vote_on_dish(
    dish_id: str, request: DishVoteRequest, store: DishStore = Depends(get_dish_store)
):
    """Same as POST /vote with the dish id taken from the path."""
    return DishService.vote(store, dish_id, request.user_email, request.vote)
