"""OpenWeather client for geocoding and current conditions."""
from typing import Any, Dict, Optional
from urllib.parse import quote, quote_plus

import requests

from weatherlog.core.config import settings
from weatherlog.core.exceptions import (
    ConfigurationError,
    LocationNotFound,
    TransportError,
    UpstreamError,
)
from weatherlog.core.logging import get_logger
from weatherlog.schemas.weather import Coordinates, CurrentConditions

logger = get_logger(__name__)

REDACTED = "API_KEY"


def redact(text: str, api_key: Optional[str]) -> str:
    """Replace the credential in ``text`` with a placeholder.

    Prepared URLs carry the key percent-encoded, so the encoded spellings are
    replaced before the raw one.
    """
    if not api_key:
        return text
    for form in (quote_plus(api_key), quote(api_key, safe=""), api_key):
        text = text.replace(form, REDACTED)
    return text


def is_error_payload(payload: Any) -> bool:
    """OpenWeather reports failures in a ``cod`` field, sometimes as a string."""
    if not isinstance(payload, dict) or "cod" not in payload:
        return False
    return str(payload["cod"]) != "200"


class OpenWeatherClient:
    """Integration with the OpenWeather geocoding and current weather endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        weather_url: str = settings.OPENWEATHER_WEATHER_URL,
        geocoding_url: str = settings.OPENWEATHER_GEOCODING_URL,
        timeout: float = settings.HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.weather_url = weather_url
        self.geocoding_url = geocoding_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError()
        return self.api_key

    def _get_json(self, url: str, params: Dict[str, Any], label: str) -> Any:
        """Issue a GET and decode the body, whatever the HTTP status.

        The provider puts its own error code and message in the body, so the
        transport status is not checked here.
        """
        request = self.session.prepare_request(requests.Request("GET", url, params=params))
        logger.info(label, extra={"url": redact(request.url, self.api_key)})

        try:
            response = self.session.send(request, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(
                f"Error contacting weather provider: {redact(str(e), self.api_key)}"
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Invalid response from weather provider (HTTP {response.status_code})"
            ) from e

    def geocode(self, location_name: str) -> Coordinates:
        """Resolve a free-text location to the coordinates of its first match."""
        api_key = self._require_api_key()
        payload = self._get_json(
            self.geocoding_url,
            {"q": location_name, "limit": 1, "appid": api_key},
            "Geocoding URL",
        )

        if is_error_payload(payload):
            raise UpstreamError(payload.get("message") or None)

        if not isinstance(payload, list) or not payload:
            raise LocationNotFound()

        match = payload[0]
        try:
            return Coordinates(lat=match["lat"], lon=match["lon"])
        except (TypeError, KeyError, ValueError) as e:
            raise LocationNotFound() from e

    def current_conditions(self, lat: Any, lon: Any) -> CurrentConditions:
        """Fetch current conditions in metric units.

        ``lat`` and ``lon`` are passed through untouched; rejecting bad
        values is left to the provider.
        """
        api_key = self._require_api_key()
        payload = self._get_json(
            self.weather_url,
            {"lat": lat, "lon": lon, "units": "metric", "appid": api_key},
            "Weather URL",
        )

        if is_error_payload(payload):
            raise UpstreamError(payload.get("message") or None)

        try:
            return CurrentConditions(
                canonical_name=payload.get("name"),
                temperature_celsius=payload["main"]["temp"],
                conditions_description=payload["weather"][0]["description"],
                raw=payload,
            )
        except (AttributeError, TypeError, KeyError, IndexError, ValueError) as e:
            raise UpstreamError("Malformed weather data from provider") from e
