"""
Location queries and upstream parameter building.

Functions:
    - Query.from_arguments: Validate raw tool arguments into a Query
    - build_params: Assemble the query string sent to OpenWeatherMap
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

from .errors import ConfigurationError, InvalidQueryError

UNITS = ("standard", "metric", "imperial")
DEFAULT_UNITS = "metric"

MISSING_LOCATION_MESSAGE = "Provide city or both latitude and longitude"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise InvalidQueryError(f"Latitude must be between -90 and 90, got {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise InvalidQueryError(f"Longitude must be between -180 and 180, got {self.longitude}")

    def label(self) -> str:
        return f"{self.latitude}, {self.longitude}"


def _to_float(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidQueryError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidQueryError(f"{name} must be a number, got {value!r}")


@dataclass(frozen=True)
class Query:
    """
    A validated weather lookup.

    Either `city` is set, or both `latitude` and `longitude` are. Coordinates that
    are supplied are range-checked even when a city is present.
    """

    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    units: str = DEFAULT_UNITS

    @classmethod
    def from_arguments(
        cls,
        city: Optional[str] = None,
        latitude: Union[float, str, None] = None,
        longitude: Union[float, str, None] = None,
        units: Optional[str] = None,
    ) -> "Query":
        """
        Validate tool arguments.

        Args:
            city: City name, e.g. "London" or "Paris,FR"
            latitude: Latitude in decimal degrees (-90 to 90)
            longitude: Longitude in decimal degrees (-180 to 180)
            units: One of standard, metric, imperial (default: metric)

        Returns:
            Query instance

        Raises:
            InvalidQueryError: If the arguments do not form a valid query
        """
        if units is None:
            units = DEFAULT_UNITS
        if units not in UNITS:
            raise InvalidQueryError(
                f"Units must be one of {', '.join(UNITS)}, got {units!r}"
            )

        if city is not None and not isinstance(city, str):
            raise InvalidQueryError(f"City must be a string, got {city!r}")
        city = city.strip() if city else None
        city = city or None

        lat = _to_float("Latitude", latitude)
        lon = _to_float("Longitude", longitude)
        if lat is not None and not -90 <= lat <= 90:
            raise InvalidQueryError(f"Latitude must be between -90 and 90, got {lat}")
        if lon is not None and not -180 <= lon <= 180:
            raise InvalidQueryError(f"Longitude must be between -180 and 180, got {lon}")

        if city is None and (lat is None or lon is None):
            raise InvalidQueryError(MISSING_LOCATION_MESSAGE)

        return cls(city=city, latitude=lat, longitude=lon, units=units)

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(self.latitude, self.longitude)

    def label(self) -> str:
        """Human readable location used in tool output."""
        if self.city:
            return self.city
        return self.coordinates.label()


def build_params(
    query: Query,
    api_key: Optional[str],
    coordinates: Optional[Coordinates] = None,
    exclude: Optional[Sequence[str]] = None,
) -> Dict[str, str]:
    """
    Build the OpenWeatherMap query parameters for a validated query.

    Args:
        query: Validated Query
        api_key: OpenWeatherMap API key
        coordinates: Resolved coordinates. When given, they replace the city.
        exclude: One Call sections to leave out of the response

    Returns:
        Dictionary of string parameters

    Example:
        >>> build_params(Query(city="London"), "key")
        {'units': 'metric', 'appid': 'key', 'q': 'London'}
    """
    if not api_key:
        raise ConfigurationError("Missing OPENWEATHERMAP_API_KEY in environment")

    params = {
        "units": query.units or DEFAULT_UNITS,
        "appid": api_key,
    }
    if exclude:
        params["exclude"] = ",".join(exclude)

    if coordinates is None and not query.city:
        coordinates = query.coordinates

    if coordinates is not None:
        params["lat"] = str(coordinates.latitude)
        params["lon"] = str(coordinates.longitude)
    else:
        params["q"] = query.city

    return params
