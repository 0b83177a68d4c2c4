import pytest

from weather_mcp_tools.openweather_tool.errors import ConfigurationError, InvalidQueryError
from weather_mcp_tools.openweather_tool.query import (
    MISSING_LOCATION_MESSAGE,
    Coordinates,
    Query,
    build_params,
)


class TestQueryValidation:
    def test_city_only(self):
        query = Query.from_arguments(city="London")
        assert query.city == "London"
        assert query.coordinates is None

    def test_coordinates_only(self):
        query = Query.from_arguments(latitude=51.5074, longitude=-0.1278)
        assert query.coordinates == Coordinates(51.5074, -0.1278)

    @pytest.mark.parametrize(
        "arguments",
        [
            {},
            {"latitude": 12.34},
            {"longitude": 56.78},
            {"city": "", "latitude": 12.34},
            {"city": "   "},
            {"units": "imperial"},
        ],
    )
    def test_missing_location_fails(self, arguments):
        with pytest.raises(InvalidQueryError, match=MISSING_LOCATION_MESSAGE):
            Query.from_arguments(**arguments)

    def test_units_default_to_metric(self):
        assert Query.from_arguments(city="Paris").units == "metric"
        assert Query.from_arguments(city="Paris", units=None).units == "metric"

    def test_rejects_unknown_units(self):
        with pytest.raises(InvalidQueryError, match="Units must be one of"):
            Query.from_arguments(city="Paris", units="kelvin")

    @pytest.mark.parametrize("latitude", [-90.0001, 90.5, 1000])
    def test_rejects_latitude_out_of_range(self, latitude):
        with pytest.raises(InvalidQueryError, match="Latitude"):
            Query.from_arguments(latitude=latitude, longitude=0)

    @pytest.mark.parametrize("longitude", [-180.5, 181])
    def test_rejects_longitude_out_of_range(self, longitude):
        with pytest.raises(InvalidQueryError, match="Longitude"):
            Query.from_arguments(latitude=0, longitude=longitude)

    def test_range_boundaries_are_inclusive(self):
        query = Query.from_arguments(latitude=-90, longitude=180)
        assert query.coordinates == Coordinates(-90.0, 180.0)

    def test_coordinates_checked_even_with_city(self):
        with pytest.raises(InvalidQueryError, match="Latitude"):
            Query.from_arguments(city="Oslo", latitude=95, longitude=10)

    def test_numeric_strings_are_accepted(self):
        query = Query.from_arguments(latitude="40.7128", longitude="-74.006")
        assert query.coordinates == Coordinates(40.7128, -74.006)

    @pytest.mark.parametrize("latitude", ["north", True])
    def test_rejects_non_numeric_coordinates(self, latitude):
        with pytest.raises(InvalidQueryError, match="must be a number"):
            Query.from_arguments(latitude=latitude, longitude=0)

    def test_city_is_stripped(self):
        assert Query.from_arguments(city="  Berlin ").city == "Berlin"

    def test_label(self):
        assert Query.from_arguments(city="Berlin").label() == "Berlin"
        assert Query.from_arguments(latitude=1.5, longitude=2.5).label() == "1.5, 2.5"


class TestBuildParams:
    def test_city_direct_query(self):
        params = build_params(Query.from_arguments(city="London"), "key")
        assert params == {"units": "metric", "appid": "key", "q": "London"}

    def test_coordinates(self):
        query = Query.from_arguments(latitude=51.5074, longitude=-0.1278, units="imperial")
        params = build_params(query, "key")
        assert params["lat"] == "51.5074"
        assert params["lon"] == "-0.1278"
        assert params["units"] == "imperial"
        assert "q" not in params

    def test_resolved_coordinates_replace_city(self):
        query = Query.from_arguments(city="London")
        params = build_params(query, "key", coordinates=Coordinates(51.5073219, -0.1276474))
        assert params["lat"] == "51.5073219"
        assert params["lon"] == "-0.1276474"
        assert "q" not in params

    def test_city_wins_over_coordinates_without_resolution(self):
        query = Query.from_arguments(city="Oslo", latitude=59.9, longitude=10.7)
        params = build_params(query, "key")
        assert params["q"] == "Oslo"
        assert "lat" not in params

    def test_exclude(self):
        params = build_params(
            Query.from_arguments(city="Berlin"), "key", exclude=["current", "minutely"]
        )
        assert params["exclude"] == "current,minutely"

    def test_no_exclude_by_default(self):
        params = build_params(Query.from_arguments(city="Berlin"), "key")
        assert "exclude" not in params

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            build_params(Query.from_arguments(city="Berlin"), None)
