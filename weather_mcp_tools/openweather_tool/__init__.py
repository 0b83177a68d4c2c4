"""
OpenWeather Tools for MCP

This package exposes OpenWeatherMap lookups (current conditions, forecasts and
alerts) as Model Context Protocol tools. Callers pass a city name or a
latitude/longitude pair; city names are resolved with the OpenWeatherMap
geocoding API.

Modules:
    - query: Input validation and upstream parameter building
    - tool_implementation: HTTP client adapter and the tool functions
    - tool_schema: Tool catalogue advertised by the server
    - weather_server: MCP server wrapper exposing the tools over stdio
    - config: Environment-driven settings
"""

from .errors import (
    ConfigurationError,
    InvalidQueryError,
    LocationNotFoundError,
    UpstreamError,
    WeatherToolError,
)
from .query import Coordinates, Query, build_params
from .tool_implementation import (
    get_current_weather,
    get_forecast,
    get_hourly_forecast,
    get_daily_forecast,
    get_alerts,
    get_conditions_summary,
)

__version__ = "0.1.0"
__all__ = [
    "Coordinates",
    "Query",
    "build_params",
    "get_current_weather",
    "get_forecast",
    "get_hourly_forecast",
    "get_daily_forecast",
    "get_alerts",
    "get_conditions_summary",
    "WeatherToolError",
    "InvalidQueryError",
    "LocationNotFoundError",
    "ConfigurationError",
    "UpstreamError",
]
