from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    # Project information
    PROJECT_NAME: str = "Weather Lookup Service"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STATIC_DIR: str = "public"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Database
    DB_NAME: str = "weather.db"
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)
    HISTORY_LIMIT: int = 10

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_url(cls, v: Optional[str], info: ValidationInfo) -> str:
        if v:
            return v

        return f"sqlite:///{info.data.get('DB_NAME', 'weather.db')}"

    # External APIs
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_WEATHER_URL: str = "https://api.openweathermap.org/data/2.5/weather"
    OPENWEATHER_GEOCODING_URL: str = "https://api.openweathermap.org/geo/1.0/direct"
    HTTP_TIMEOUT: float = 10.0

    @field_validator("OPENWEATHER_API_KEY", mode="before")
    @classmethod
    def blank_api_key_is_unset(cls, v: Optional[str]) -> Optional[str]:
        # An empty variable counts as missing, same as not exporting it at all
        if isinstance(v, str) and not v.strip():
            return None
        return v


settings = Settings()
