"""
Dish Repository - DynamoDB data access for dish records
"""

import logging
from typing import Any, List, Mapping, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.exceptions import DishNotFoundError, StoreUnavailableError
from core.utils.helpers import from_dynamo, to_dynamo
from repositories.base import DishStore, Record

logger = logging.getLogger("buffetrating.store.dynamodb")


def build_table(
    table_name: str,
    region_name: str,
    endpoint_url: Optional[str] = None,
    max_attempts: int = 3,
):
    """Create a boto3 Table resource with standard retry mode"""
    resource = boto3.resource(
        "dynamodb",
        region_name=region_name,
        endpoint_url=endpoint_url,
        config=Config(retries={"max_attempts": max_attempts, "mode": "standard"}),
    )
    return resource.Table(table_name)


def build_update_expression(assignments: Mapping[str, Any]) -> dict:
    """
    Build SET UpdateExpression parameters for the given fields.

    Every attribute goes through a name placeholder so reserved words such as
    ``name`` need no special casing.
    """
    names = {}
    values = {}
    clauses = []
    for index, (field, value) in enumerate(assignments.items()):
        names[f"#f{index}"] = field
        values[f":v{index}"] = to_dynamo(value)
        clauses.append(f"#f{index} = :v{index}")
    return {
        "UpdateExpression": "SET " + ", ".join(clauses),
        "ExpressionAttributeNames": names,
        "ExpressionAttributeValues": values,
    }


class DynamoDishRepository(DishStore):
    """Record store backed by a DynamoDB table with string partition key ``id``"""

    def __init__(self, table):
        self.table = table

    def get_by_key(self, dish_id: str) -> Optional[Record]:
        try:
            result = self.table.get_item(Key={self.key_field: dish_id})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting dish {dish_id}: {e}")
            raise StoreUnavailableError(str(e), operation="get_item") from e
        item = result.get("Item")
        return from_dynamo(item) if item is not None else None

    def put_record(self, record: Mapping[str, Any]) -> Record:
        try:
            self.table.put_item(Item=to_dynamo(dict(record)))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error creating dish {record.get(self.key_field)}: {e}")
            raise StoreUnavailableError(str(e), operation="put_item") from e
        return dict(record)

    def update_fields(
        self,
        dish_id: str,
        assignments: Mapping[str, Any],
        return_values: str = "ALL_NEW",
    ) -> Record:
        params = build_update_expression(assignments)
        params["ExpressionAttributeNames"]["#key"] = self.key_field
        try:
            result = self.table.update_item(
                Key={self.key_field: dish_id},
                ConditionExpression="attribute_exists(#key)",
                ReturnValues=return_values,
                **params,
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                logger.warning(f"update_item on missing dish {dish_id}")
                raise DishNotFoundError(dish_id) from e
            logger.error(f"Error updating dish {dish_id}: {e}")
            raise StoreUnavailableError(str(e), operation="update_item") from e
        except BotoCoreError as e:
            logger.error(f"Error updating dish {dish_id}: {e}")
            raise StoreUnavailableError(str(e), operation="update_item") from e
        return from_dynamo(result.get("Attributes", {}))

    def scan_all(self) -> List[Record]:
        items: List[Record] = []
        kwargs: dict = {}
        try:
            while True:
                result = self.table.scan(**kwargs)
                items.extend(result.get("Items", []))
                last_key = result.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting dishes: {e}")
            raise StoreUnavailableError(str(e), operation="scan") from e
        return from_dynamo(items)

    def check(self) -> bool:
        try:
            self.table.load()
            return True
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"DynamoDB table {self.table.name} not reachable: {e}")
            return False
