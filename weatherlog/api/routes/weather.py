from fastapi import APIRouter, BackgroundTasks, Depends, Request
from typing import Any, Dict

from weatherlog.api.deps import get_store, get_weather_client
from weatherlog.core.exceptions import BaseAppError
from weatherlog.core.logging import get_logger
from weatherlog.db.store import WeatherStore
from weatherlog.schemas.weather import ErrorResponse
from weatherlog.services.weather import OpenWeatherClient

router = APIRouter(prefix="/weather", tags=["Weather"])

error_responses = {500: {"model": ErrorResponse}}


def _request_logger(request: Request):
    return get_logger(__name__, getattr(request.state, "request_id", None))


@router.get("/coords/{lat}/{lon}", response_model=Dict[str, Any], responses=error_responses)
def get_weather_by_coordinates(
        lat: str,
        lon: str,
        request: Request,
        background_tasks: BackgroundTasks,
        store: WeatherStore = Depends(get_store),
        client: OpenWeatherClient = Depends(get_weather_client),
):
    """
    Get current weather for a coordinate pair.

    The observation is saved under the location name the provider reports.
    """
    logger = _request_logger(request)
    logger.info("Weather request for coordinates", extra={"lat": lat, "lon": lon})

    try:
        conditions = client.current_conditions(lat, lon)
    except BaseAppError as e:
        logger.error("Error in /api/weather/coords", extra={"error": e.message})
        raise

    background_tasks.add_task(
        store.insert,
        conditions.canonical_name,
        conditions.temperature_celsius,
        conditions.conditions_description,
    )

    return conditions.raw


# Declared after the coords route; the path converter lets encoded slashes through
@router.get("/{location:path}", response_model=Dict[str, Any], responses=error_responses)
def get_weather_by_location(
        location: str,
        request: Request,
        background_tasks: BackgroundTasks,
        store: WeatherStore = Depends(get_store),
        client: OpenWeatherClient = Depends(get_weather_client),
):
    """
    Get current weather for a location name.

    The name is geocoded to its first match. The observation is saved under
    the name exactly as the caller sent it, not the provider's name for it.
    """
    logger = _request_logger(request)
    logger.info("Weather request for location", extra={"location": location})

    try:
        coordinates = client.geocode(location)
        conditions = client.current_conditions(coordinates.lat, coordinates.lon)
    except BaseAppError as e:
        logger.error("Error in /api/weather", extra={"error": e.message})
        raise

    background_tasks.add_task(
        store.insert,
        location,
        conditions.temperature_celsius,
        conditions.conditions_description,
    )

    return conditions.raw
