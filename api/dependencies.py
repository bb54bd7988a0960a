"""
API dependencies for dependency injection
"""

import logging
from functools import lru_cache

from app.config import settings, StoreBackend
from repositories import DishStore, DynamoDishRepository, InMemoryDishRepository, build_table

logger = logging.getLogger("buffetrating.dependencies")


@lru_cache(maxsize=1)
def get_dish_store() -> DishStore:
    """
    Record store dependency for FastAPI routes and the Lambda handler.
    Created once per process and reused across requests.

    Usage:
        @router.get("/example")
        def example(store: DishStore = Depends(get_dish_store)):
            # Use store here
            pass
    """
    if settings.store_backend == StoreBackend.MEMORY:
        logger.info("Using in-memory dish store")
        return InMemoryDishRepository()

    logger.info(
        "Using DynamoDB table %s in %s", settings.table_name, settings.aws_region
    )
    table = build_table(
        settings.table_name,
        settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
        max_attempts=settings.store_max_attempts,
    )
    return DynamoDishRepository(table)
