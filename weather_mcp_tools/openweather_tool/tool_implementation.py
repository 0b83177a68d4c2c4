"""
OpenWeather Tool Implementation

Implements the weather lookups exposed by the MCP server. Each tool validates its
arguments, resolves the location to coordinates when needed, issues one request to
OpenWeatherMap and wraps the JSON response as a text tool result.

Functions:
    - get_current_weather: Current conditions for a city or coordinates
    - get_forecast: 5 day / 3 hour forecast
    - get_hourly_forecast: Hourly forecast from the One Call API
    - get_daily_forecast: Daily forecast from the One Call API
    - get_alerts: Active government weather alerts from the One Call API
    - get_conditions_summary: Alert-style summary built from current conditions
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from .config import Settings, load_settings
from .errors import LocationNotFoundError, UpstreamError
from .query import Coordinates, Query, build_params
from .tool_schema import tool_exclude

logger = logging.getLogger(__name__)

HOURLY_EXCLUDE = tool_exclude("get_hourly_forecast")
DAILY_EXCLUDE = tool_exclude("get_daily_forecast")
ALERTS_EXCLUDE = tool_exclude("get_alerts")

SUBSCRIPTION_NOTE = (
    "Note: This is current weather data. "
    "For actual weather alerts, a paid API subscription is required."
)


def text_result(text: str) -> Dict[str, Any]:
    """Wrap text in the tool result envelope."""
    return {"content": [{"type": "text", "text": text}]}


def _redact(params: Dict[str, str]) -> Dict[str, str]:
    return {key: ("***" if key == "appid" else value) for key, value in params.items()}


class OpenWeatherClient:
    """
    Thin adapter over the OpenWeatherMap REST API.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the client.

        Args:
            settings: Settings to use. If None, reads them from the environment.
        """
        self.settings = settings or load_settings()

    async def _get_json(self, url: str, params: Dict[str, str]) -> Any:
        """
        Issue a GET request and return the decoded JSON body.

        Args:
            url: Endpoint URL
            params: Query string parameters

        Returns:
            Decoded JSON body
        """
        logger.info(f"GET {url} params={_redact(params)}")
        timeout = aiohttp.ClientTimeout(total=self.settings.WEATHER_HTTP_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, params=params) as response:
                    status = response.status
                    try:
                        payload = await response.json(content_type=None)
                    except ValueError:
                        raise UpstreamError(
                            f"Weather provider returned a non-JSON body (HTTP {status})",
                            status=status,
                        )
        except aiohttp.ClientError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise UpstreamError(f"Request to weather provider failed: {e}")
        except asyncio.TimeoutError:
            logger.error(f"Request to {url} timed out after {self.settings.WEATHER_HTTP_TIMEOUT}s")
            raise UpstreamError(
                f"Request to weather provider timed out after {self.settings.WEATHER_HTTP_TIMEOUT}s"
            )

        if status >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.error(f"Weather provider returned HTTP {status}: {message}")
            raise UpstreamError(
                f"Weather provider returned HTTP {status}: {message or 'no details'}",
                status=status,
            )
        if payload is None:
            logger.error(f"Weather provider returned an empty body (HTTP {status})")
            raise UpstreamError(
                f"Weather provider returned an empty body (HTTP {status})", status=status
            )
        return payload

    async def geocode(self, city: str) -> Coordinates:
        """
        Resolve a city name to coordinates.

        Args:
            city: City name, optionally with state and country codes ("Austin,TX,US")

        Returns:
            Coordinates of the best match

        Raises:
            LocationNotFoundError: If the geocoder has no match
        """
        params = {"q": city, "limit": "1", "appid": self.settings.require_api_key()}
        results = await self._get_json(self.settings.geocoding_url, params)

        if not isinstance(results, list):
            raise UpstreamError(f"Geocoding returned an unexpected body for '{city}'")
        if not results:
            raise LocationNotFoundError(f"Location '{city}' not found")

        match = results[0]
        if not isinstance(match, dict) or "lat" not in match or "lon" not in match:
            raise UpstreamError(f"Geocoding match for '{city}' has no coordinates")
        logger.info(
            f"Geocoded '{city}' to {match.get('name')}, {match.get('country')} "
            f"({match['lat']}, {match['lon']})"
        )
        return Coordinates(float(match["lat"]), float(match["lon"]))

    async def resolve(self, query: Query, coordinates_only: bool = False) -> Optional[Coordinates]:
        """
        Work out which coordinates to send for a query.

        Returns None when the city should be sent as-is (`q` parameter).
        """
        if query.coordinates is not None and not query.city:
            return query.coordinates
        if self.settings.WEATHER_GEOCODE_CITIES or coordinates_only:
            return await self.geocode(query.city)
        return None

    async def fetch(
        self,
        url: str,
        query: Query,
        exclude: Optional[Sequence[str]] = None,
        coordinates_only: bool = False,
    ) -> Any:
        """
        Resolve the location, build parameters and fetch one endpoint.

        Args:
            url: Endpoint URL
            query: Validated query
            exclude: One Call sections to exclude
            coordinates_only: Endpoint rejects the `q` parameter

        Returns:
            Decoded JSON body
        """
        coordinates = await self.resolve(query, coordinates_only=coordinates_only)
        params = build_params(
            query, self.settings.require_api_key(), coordinates=coordinates, exclude=exclude
        )
        data = await self._get_json(url, params)
        if not isinstance(data, dict):
            raise UpstreamError(f"Weather provider returned an unexpected body from {url}")
        return data


def format_alert(alert: Dict[str, Any]) -> str:
    return (
        f"Event: {alert.get('event', 'Unknown')}\n"
        f"Sender: {alert.get('sender_name', 'Unknown')}\n"
        f"Start: {_isoformat(alert.get('start'))}\n"
        f"End: {_isoformat(alert.get('end'))}\n"
        f"Description: {alert.get('description', 'No description available')}\n"
    )


def _isoformat(timestamp: Optional[float]) -> Optional[str]:
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def summarize_conditions(data: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the alert-relevant fields out of a current weather response."""
    weather = data.get("weather") or [{}]
    main = data.get("main") or {}
    return {
        "location": data.get("name"),
        "country": (data.get("sys") or {}).get("country"),
        "conditions": weather[0].get("description"),
        "temperature": main.get("temp"),
        "humidity": main.get("humidity"),
        "pressure": main.get("pressure"),
        "windSpeed": (data.get("wind") or {}).get("speed"),
        "visibility": data.get("visibility"),
        "timestamp": _isoformat(data.get("dt")),
    }


async def get_current_weather(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    units: Optional[str] = "metric",
) -> Dict[str, Any]:
    """
    Current weather conditions for a city or a latitude/longitude pair.

    Args:
        city: City name, e.g. "London" or "Paris,FR". Optional if latitude and longitude are given.
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        units: standard, metric or imperial (default: metric)
    """
    query = Query.from_arguments(city, latitude, longitude, units)
    client = OpenWeatherClient()
    data = await client.fetch(client.settings.weather_url, query)
    return text_result(json.dumps(data, indent=2))


async def get_forecast(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    units: Optional[str] = "metric",
) -> Dict[str, Any]:
    """
    5 day weather forecast in 3 hour steps for a city or a latitude/longitude pair.

    Args:
        city: City name. Optional if latitude and longitude are given.
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        units: standard, metric or imperial (default: metric)
    """
    query = Query.from_arguments(city, latitude, longitude, units)
    client = OpenWeatherClient()
    data = await client.fetch(client.settings.forecast_url, query)
    return text_result(json.dumps(data, indent=2))


async def get_hourly_forecast(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    units: Optional[str] = "metric",
) -> Dict[str, Any]:
    """
    Hourly weather forecast for the next 48 hours for a city or a latitude/longitude pair.

    Args:
        city: City name. Optional if latitude and longitude are given.
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        units: standard, metric or imperial (default: metric)
    """
    query = Query.from_arguments(city, latitude, longitude, units)
    client = OpenWeatherClient()
    data = await client.fetch(
        client.settings.onecall_url, query, exclude=HOURLY_EXCLUDE, coordinates_only=True
    )
    return text_result(json.dumps(data, indent=2))


async def get_daily_forecast(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    units: Optional[str] = "metric",
) -> Dict[str, Any]:
    """
    Daily weather forecast for the next 8 days for a city or a latitude/longitude pair.

    Args:
        city: City name. Optional if latitude and longitude are given.
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        units: standard, metric or imperial (default: metric)
    """
    query = Query.from_arguments(city, latitude, longitude, units)
    client = OpenWeatherClient()
    data = await client.fetch(
        client.settings.onecall_url, query, exclude=DAILY_EXCLUDE, coordinates_only=True
    )
    return text_result(json.dumps(data, indent=2))


async def get_alerts(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    units: Optional[str] = "metric",
) -> Dict[str, Any]:
    """
    Active government weather alerts for a city or a latitude/longitude pair.

    Args:
        city: City name. Optional if latitude and longitude are given.
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        units: standard, metric or imperial (default: metric)
    """
    query = Query.from_arguments(city, latitude, longitude, units)
    client = OpenWeatherClient()
    data = await client.fetch(
        client.settings.onecall_url, query, exclude=ALERTS_EXCLUDE, coordinates_only=True
    )

    alerts: List[Dict[str, Any]] = data.get("alerts") or []
    if not alerts:
        return text_result(f"No active weather alerts for {query.label()}.")
    return text_result("\n---\n".join(format_alert(alert) for alert in alerts))


async def get_conditions_summary(
    city: Optional[str] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    units: Optional[str] = "metric",
) -> Dict[str, Any]:
    """
    Alert-style summary of current conditions. Works on free OpenWeatherMap plans
    that have no access to the alerts feed.

    Args:
        city: City name. Optional if latitude and longitude are given.
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        units: standard, metric or imperial (default: metric)
    """
    query = Query.from_arguments(city, latitude, longitude, units)
    client = OpenWeatherClient()
    data = await client.fetch(client.settings.weather_url, query)

    summary = summarize_conditions(data)
    location = summary["location"] or query.label()
    return text_result(
        f"Weather Alert Information for {location}:\n\n"
        f"{json.dumps(summary, indent=2)}\n\n"
        f"{SUBSCRIPTION_NOTE}"
    )


# Export all functions
__all__ = [
    "get_current_weather",
    "get_forecast",
    "get_hourly_forecast",
    "get_daily_forecast",
    "get_alerts",
    "get_conditions_summary",
]
