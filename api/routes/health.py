"""Health check routes"""

from fastapi import APIRouter, Depends
import logging

from api.dependencies import get_dish_store
from api.responses import HealthResponse
from app.config import settings
from repositories import DishStore

router = APIRouter(tags=["Health"])
logger = logging.getLogger("buffetrating.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check(store: DishStore = Depends(get_dish_store)):
    """Basic health check endpoint, including record store reachability"""
    store_ok = store.check()
    if not store_ok:
        logger.warning("Health check: record store unavailable")
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=settings.app_version,
        store="ok" if store_ok else "unavailable",
    )
