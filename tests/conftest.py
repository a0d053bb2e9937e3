from __future__ import annotations

import logging
from pathlib import Path

import pytest
import requests_mock as requests_mock_lib
from fastapi.testclient import TestClient

from weatherlog.core.config import Settings
from weatherlog.db.store import WeatherStore
from weatherlog.main import create_app
from weatherlog.services.weather import OpenWeatherClient

API_KEY = "test-key"
WEATHER_URL = "https://weather.test/data/2.5/weather"
GEOCODING_URL = "https://weather.test/geo/1.0/direct"
STATIC_DIR = Path(__file__).resolve().parent.parent / "public"


def weather_payload(name: str = "Paris", temp: float = 18.5, description: str = "clear sky") -> dict:
    return {
        "coord": {"lon": 2.3488, "lat": 48.8534},
        "weather": [{"id": 800, "main": "Clear", "description": description, "icon": "01d"}],
        "main": {"temp": temp, "feels_like": temp - 0.5, "pressure": 1015, "humidity": 60},
        "wind": {"speed": 3.6, "deg": 250},
        "name": name,
        "cod": 200,
    }


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


@pytest.fixture()
def store(tmp_path):
    weather_store = WeatherStore(f"sqlite:///{tmp_path / 'weather.db'}")
    weather_store.initialize()
    yield weather_store
    weather_store.close()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        OPENWEATHER_API_KEY=API_KEY,
        DATABASE_URL=f"sqlite:///{tmp_path / 'weather.db'}",
        STATIC_DIR=str(STATIC_DIR),
    )


def make_weather_client(api_key: str | None = API_KEY) -> OpenWeatherClient:
    return OpenWeatherClient(api_key=api_key, weather_url=WEATHER_URL, geocoding_url=GEOCODING_URL)


@pytest.fixture()
def weather_client() -> OpenWeatherClient:
    return make_weather_client()


@pytest.fixture()
def client(settings, store, weather_client):
    app = create_app(settings=settings, store=store, weather_client=weather_client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def unconfigured_client(settings, store):
    app = create_app(settings=settings, store=store, weather_client=make_weather_client(api_key=None))
    with TestClient(app) as test_client:
        yield test_client


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def capture_logs():
    attached = []

    def capture(logger_name: str) -> list[logging.LogRecord]:
        logger = logging.getLogger(logger_name)
        handler = RecordingHandler()
        attached.append((logger, handler, logger.level))
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        return handler.records

    yield capture

    for logger, handler, level in attached:
        logger.removeHandler(handler)
        logger.setLevel(level)
