from fastapi import APIRouter, Depends
from typing import List

from weatherlog.api.deps import get_settings, get_store
from weatherlog.core.config import Settings
from weatherlog.db.store import WeatherStore
from weatherlog.schemas.weather import ErrorResponse, WeatherObservationResponse

router = APIRouter(prefix="/history", tags=["History"])


@router.get(
    "/{location:path}",
    response_model=List[WeatherObservationResponse],
    responses={500: {"model": ErrorResponse}},
)
def get_history(
        location: str,
        store: WeatherStore = Depends(get_store),
        settings: Settings = Depends(get_settings),
):
    """Get the most recent observations saved for an exact location name, newest first."""
    return store.query_recent_by_location(location, settings.HISTORY_LIMIT)
