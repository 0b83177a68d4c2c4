"""
Tool catalogue for the OpenWeather MCP server.

Describes every exposed tool: its description, the One Call sections it
excludes and its parameters. The server advertises these descriptions in
list_tools.
"""

from typing import Dict, Optional, Tuple

LOCATION_PARAMETERS = {
    "city": {
        "type": "string",
        "required": False,
        "description": "City name, optionally with state and country codes (e.g., 'London', 'Austin,TX,US'). Optional if latitude and longitude are given.",
    },
    "latitude": {
        "type": "number",
        "required": False,
        "description": "Latitude in decimal degrees (e.g., 51.5074)",
        "range": [-90, 90],
    },
    "longitude": {
        "type": "number",
        "required": False,
        "description": "Longitude in decimal degrees (e.g., -0.1278)",
        "range": [-180, 180],
    },
    "units": {
        "type": "string",
        "required": False,
        "default": "metric",
        "enum": ["standard", "metric", "imperial"],
        "description": "Units of measurement: standard (Kelvin), metric (Celsius) or imperial (Fahrenheit)",
    },
}

TOOL_SCHEMA = {
    "tool_name": "openweather",
    "description": "Weather lookups backed by OpenWeatherMap. Every tool takes a city name or a latitude/longitude pair.",

    "functions": [
        {
            "name": "get_current_weather",
            "description": "Current conditions for a city or lat/lon",
            "exclude": None,
            "parameters": LOCATION_PARAMETERS,
        },
        {
            "name": "get_forecast",
            "description": "Weather forecast for a city or lat/lon in 3 hour steps over 5 days",
            "exclude": None,
            "parameters": LOCATION_PARAMETERS,
        },
        {
            "name": "get_hourly_forecast",
            "description": "Hourly forecast for the next 48 hours for a city or lat/lon",
            "exclude": ("current", "minutely", "daily", "alerts"),
            "parameters": LOCATION_PARAMETERS,
        },
        {
            "name": "get_daily_forecast",
            "description": "Daily forecast for the next 8 days for a city or lat/lon",
            "exclude": ("current", "minutely", "hourly", "alerts"),
            "parameters": LOCATION_PARAMETERS,
        },
        {
            "name": "get_alerts",
            "description": "Active government weather alerts for a city or lat/lon",
            "exclude": ("current", "minutely", "hourly", "daily"),
            "parameters": LOCATION_PARAMETERS,
        },
        {
            "name": "get_conditions_summary",
            "description": "Alert-style summary of current conditions for a city or lat/lon (works on free plans)",
            "exclude": None,
            "parameters": LOCATION_PARAMETERS,
        },
    ],
}

# Every tool only reads from a third-party API
TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}


def tool_descriptions() -> Dict[str, str]:
    """Map of tool name to its advertised description."""
    return {function["name"]: function["description"] for function in TOOL_SCHEMA["functions"]}


def tool_exclude(name: str) -> Optional[Tuple[str, ...]]:
    """One Call sections a tool leaves out of its response, or None."""
    for function in TOOL_SCHEMA["functions"]:
        if function["name"] == name:
            return function["exclude"]
    raise KeyError(f"Unknown tool '{name}'")
