"""
Runtime configuration for the OpenWeather MCP tools.

Settings are read from the process environment (and a .env file) on every call so
that each tool invocation stays stateless.
"""

from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.openweathermap.org"
DEFAULT_TIMEOUT_SECONDS = 10.0


class Settings(BaseSettings):
    OPENWEATHERMAP_API_KEY: Optional[str] = Field(
        None,
        description="OpenWeatherMap API key sent as the appid parameter",
    )
    OPENWEATHERMAP_BASE_URL: str = Field(
        DEFAULT_BASE_URL,
        description="Provider root, without a trailing slash",
    )
    WEATHER_GEOCODE_CITIES: bool = Field(
        True,
        description="Resolve city names to coordinates before every weather call",
    )
    WEATHER_HTTP_TIMEOUT: float = Field(
        DEFAULT_TIMEOUT_SECONDS,
        description="Total timeout in seconds for a single outbound request",
        gt=0,
    )
    LOG_LEVEL: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        "INFO",
        description="Application log level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("OPENWEATHERMAP_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def require_api_key(self) -> str:
        if not self.OPENWEATHERMAP_API_KEY:
            raise ConfigurationError("Missing OPENWEATHERMAP_API_KEY in environment")
        return self.OPENWEATHERMAP_API_KEY

    @property
    def weather_url(self) -> str:
        return f"{self.OPENWEATHERMAP_BASE_URL}/data/2.5/weather"

    @property
    def forecast_url(self) -> str:
        return f"{self.OPENWEATHERMAP_BASE_URL}/data/2.5/forecast"

    @property
    def onecall_url(self) -> str:
        return f"{self.OPENWEATHERMAP_BASE_URL}/data/3.0/onecall"

    @property
    def geocoding_url(self) -> str:
        return f"{self.OPENWEATHERMAP_BASE_URL}/geo/1.0/direct"


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ConfigurationError: If a variable is set to a value that does not validate
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
