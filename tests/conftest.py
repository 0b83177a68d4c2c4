import pytest
from aioresponses import aioresponses


@pytest.fixture(autouse=True)
def weather_env(monkeypatch):
    monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "test-key")
    monkeypatch.delenv("OPENWEATHERMAP_BASE_URL", raising=False)
    monkeypatch.delenv("WEATHER_GEOCODE_CITIES", raising=False)
    monkeypatch.delenv("WEATHER_HTTP_TIMEOUT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def mocked():
    with aioresponses() as m:
        yield m
