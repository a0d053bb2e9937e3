from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime


class Coordinates(BaseModel):
    lat: float
    lon: float


class CurrentConditions(BaseModel):
    canonical_name: Optional[str] = None
    temperature_celsius: float
    conditions_description: str
    raw: Dict[str, Any]


class WeatherObservationResponse(BaseModel):
    id: int
    location: str
    temperature: float
    conditions: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    error: str
