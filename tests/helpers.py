import re

WEATHER_URL = re.compile(r"^https://api\.openweathermap\.org/data/2\.5/weather\?.*$")
FORECAST_URL = re.compile(r"^https://api\.openweathermap\.org/data/2\.5/forecast\?.*$")
ONECALL_URL = re.compile(r"^https://api\.openweathermap\.org/data/3\.0/onecall\?.*$")
GEOCODING_URL = re.compile(r"^https://api\.openweathermap\.org/geo/1\.0/direct\?.*$")

LONDON_GEOCODE = [
    {"name": "London", "lat": 51.5073219, "lon": -0.1276474, "country": "GB"},
]

LONDON_WEATHER = {
    "name": "London",
    "dt": 1700000000,
    "sys": {"country": "GB"},
    "weather": [{"main": "Clouds", "description": "overcast clouds"}],
    "main": {"temp": 11.2, "humidity": 81, "pressure": 1012},
    "wind": {"speed": 4.1},
    "visibility": 10000,
}


def requested_urls(mocked):
    """URLs hit during a test, in request order."""
    return [url for (_method, url) in mocked.requests]
