"""
Base record store interface for the data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Dict, List, Mapping, Optional
from abc import ABC, abstractmethod

Record = Dict[str, Any]


class DishStore(ABC):
    """
    Key-value table of dish records keyed by their ``id`` string.
    All stores return plain dicts with JSON-compatible values.
    """

    key_field = "id"

    @abstractmethod
    def get_by_key(self, dish_id: str) -> Optional[Record]:
        """
        Get a record by key.

        Args:
            dish_id: Dish id

        Returns:
            Record or None if not found
        """

    @abstractmethod
    def put_record(self, record: Mapping[str, Any]) -> Record:
        """Write a full record, replacing any record with the same key"""

    @abstractmethod
    def update_fields(
        self,
        dish_id: str,
        assignments: Mapping[str, Any],
        return_values: str = "ALL_NEW",
    ) -> Record:
        """
        Set the given fields on an existing record.

        Args:
            dish_id: Dish id
            assignments: Field name to new value
            return_values: "ALL_NEW" for the whole record after the update,
                "UPDATED_NEW" for only the assigned fields

        Returns:
            The record (or the updated fields) after the update

        Raises:
            NotFoundError: If no record exists under dish_id
        """

    @abstractmethod
    def scan_all(self) -> List[Record]:
        """Get every record in the table"""

    def check(self) -> bool:
        """Best-effort reachability check"""
        return True
