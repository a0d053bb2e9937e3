from fastapi import Request

from weatherlog.core.config import Settings
from weatherlog.db.store import WeatherStore
from weatherlog.services.weather import OpenWeatherClient


# Shared resources are opened by the application lifespan and live on app.state
def get_store(request: Request) -> WeatherStore:
    return request.app.state.store


def get_weather_client(request: Request) -> OpenWeatherClient:
    return request.app.state.weather_client


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
