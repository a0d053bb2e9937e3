from typing import Optional

from fastapi import HTTPException, status


class BaseAppError(HTTPException):
    """Base class for all application exceptions.

    Every failure the handlers can hit is reported to the caller as a 500 with
    ``{"error": message}``; subclasses only differ in their default message.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "An unexpected error occurred"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.detail)

    @property
    def message(self) -> str:
        return str(self.detail)


class ConfigurationError(BaseAppError):
    """The weather provider credential is not configured."""

    detail = "API key not configured"


class LocationNotFound(BaseAppError):
    """Geocoding returned no usable match."""

    detail = "Location not found"


class UpstreamError(BaseAppError):
    """The weather provider reported a failure inside its payload."""

    detail = "Error fetching weather data"


class TransportError(BaseAppError):
    """The weather provider could not be reached."""

    detail = "Error contacting weather provider"


class StoreWriteError(BaseAppError):
    """Inserting an observation failed. Logged only, never sent to a client."""

    detail = "Failed to save weather observation"


class StoreReadError(BaseAppError):
    """Reading observation history failed."""

    detail = "Failed to read weather history"
