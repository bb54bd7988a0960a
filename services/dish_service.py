from typing import Any, Dict, List
import logging

from app.exceptions import DishNotFoundError
from core.utils.helpers import utc_now_iso
from domain.schemas.dish_schemas import DishCreate, DishReplace
from repositories.base import DishStore
from services.vote_evaluator import evaluate, validate_vote

logger = logging.getLogger("buffetrating.dishes")

# Set by the service on create, never taken from the caller
MANAGED_FIELDS = frozenset(
    {"good", "bad", "userVotes", "user_votes", "createdAt", "created_at", "updatedAt", "updated_at"}
)


class DishService:
    @staticmethod
    def list_dishes(store: DishStore) -> List[Dict[str, Any]]:
        """Return every dish in the catalog"""
        dishes = store.scan_all()
        logger.debug(f"Fetched {len(dishes)} dishes")
        return dishes

    @staticmethod
    def get_dish(store: DishStore, dish_id: str) -> Dict[str, Any]:
        """
        Fetch a single dish.

        Raises:
            DishNotFoundError: If no dish exists under dish_id
        """
        dish = store.get_by_key(dish_id)
        if dish is None:
            logger.warning(f"get_dish failed: dish {dish_id} not found")
            raise DishNotFoundError(dish_id)
        return dish

    @staticmethod
    def create_dish(store: DishStore, dish_data: DishCreate) -> Dict[str, Any]:
        """
        Create a dish with zeroed counters and an empty vote ledger.

        Any existing dish with the same id is overwritten.

        Args:
            store: Record store
            dish_data: Dish creation data

        Returns:
            The stored record
        """
        now = utc_now_iso()
        extra = {
            k: v
            for k, v in (dish_data.model_extra or {}).items()
            if k not in MANAGED_FIELDS
        }
        record = {
            **extra,
            "id": dish_data.id,
            "name": dish_data.name,
            "description": dish_data.description,
            "meals": list(dish_data.meals),
            "good": 0,
            "bad": 0,
            "userVotes": {},
            "createdAt": now,
            "updatedAt": now,
        }
        dish = store.put_record(record)
        logger.info(f"Dish created: {dish_data.id}")
        return dish

    @staticmethod
    def replace_dish(
        store: DishStore, dish_id: str, dish_data: DishReplace
    ) -> Dict[str, Any]:
        """
        Overwrite name, description, counters and meals of an existing dish.

        The vote ledger is left as is, so the counters written here are not
        checked against it.

        Raises:
            DishNotFoundError: If no dish exists under dish_id
        """
        dish = store.update_fields(
            dish_id,
            {
                "name": dish_data.name,
                "description": dish_data.description,
                "good": dish_data.good,
                "bad": dish_data.bad,
                "meals": list(dish_data.meals),
                "updatedAt": utc_now_iso(),
            },
        )
        logger.info(f"Dish replaced: {dish_id}")
        return dish

    @staticmethod
    def vote(
        store: DishStore, dish_id: str, voter_id: str, requested_vote: Any
    ) -> Dict[str, Any]:
        """
        Apply a voter's good/bad vote to a dish and persist the result.

        Read, evaluate and write are separate store calls, so two concurrent
        votes on the same dish can overwrite each other.

        Args:
            store: Record store
            dish_id: Dish to vote on
            voter_id: Voter identifier
            requested_vote: "good" or "bad"

        Returns:
            The dish record after the update

        Raises:
            InvalidVoteError: If requested_vote is not "good" or "bad"
            DishNotFoundError: If no dish exists under dish_id
            StoreUnavailableError: If a store call fails
        """
        vote = validate_vote(requested_vote)
        dish = DishService.get_dish(store, dish_id)

        tally = evaluate(dish, voter_id, vote)

        updated = store.update_fields(
            dish_id,
            {
                "good": tally.good,
                "bad": tally.bad,
                "userVotes": tally.user_votes,
                "updatedAt": utc_now_iso(),
            },
        )
        logger.info(
            f"Vote {vote} by {voter_id} on dish {dish_id}: "
            f"good={tally.good}, bad={tally.bad}"
        )
        return updated
