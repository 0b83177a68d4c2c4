"""Exceptions raised by the OpenWeather tools."""

from typing import Optional


class WeatherToolError(Exception):
    """Base class for every failure a weather tool call can report."""


class InvalidQueryError(WeatherToolError, ValueError):
    """The caller's arguments do not describe a usable location query."""


class LocationNotFoundError(WeatherToolError, LookupError):
    """Geocoding returned no match for a city name."""


class ConfigurationError(WeatherToolError):
    """Settings are missing or malformed."""


class UpstreamError(WeatherToolError, RuntimeError):
    """The weather provider failed, timed out, or returned an unreadable body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
