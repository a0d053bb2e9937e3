from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, Any

from weatherlog.api.deps import get_settings, get_store
from weatherlog.core.config import Settings
from weatherlog.db.store import WeatherStore

router = APIRouter(prefix="/health", tags=["Health Checks"])


@router.get("")
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    """
    Simple health check to verify the API service is running.
    """
    return {"status": "ok", "service": settings.PROJECT_NAME}


@router.get("/readiness")
def readiness_check(
        store: WeatherStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Check if the application is ready to accept traffic.

    This checks that the weather store answers a trivial query.
    """
    db_status = "ok"
    try:
        store.ping()
    except SQLAlchemyError as e:
        db_status = f"error: {str(e)}"

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "database": db_status,
        "version": settings.VERSION,
    }
