"""
In-memory Dish Repository - dict-backed table for local runs and tests
"""

import copy
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional

from app.exceptions import DishNotFoundError
from repositories.base import DishStore, Record

logger = logging.getLogger("buffetrating.store.memory")


class InMemoryDishRepository(DishStore):
    """Record store keeping dishes in a process-local dict"""

    def __init__(self, records: Optional[List[Mapping[str, Any]]] = None):
        self._items: Dict[str, Record] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.put_record(record)

    def get_by_key(self, dish_id: str) -> Optional[Record]:
        with self._lock:
            item = self._items.get(dish_id)
            return copy.deepcopy(item) if item is not None else None

    def put_record(self, record: Mapping[str, Any]) -> Record:
        item = copy.deepcopy(dict(record))
        with self._lock:
            self._items[item[self.key_field]] = item
        logger.debug(f"Stored dish {item[self.key_field]}")
        return copy.deepcopy(item)

    def update_fields(
        self,
        dish_id: str,
        assignments: Mapping[str, Any],
        return_values: str = "ALL_NEW",
    ) -> Record:
        with self._lock:
            item = self._items.get(dish_id)
            if item is None:
                raise DishNotFoundError(dish_id)
            item.update(copy.deepcopy(dict(assignments)))
            if return_values == "UPDATED_NEW":
                return {k: copy.deepcopy(item[k]) for k in assignments}
            return copy.deepcopy(item)

    def scan_all(self) -> List[Record]:
        with self._lock:
            return [copy.deepcopy(item) for item in self._items.values()]
