"""
Manual smoke check against the live OpenWeatherMap API.

Run with: openweather-mcp-check
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from .config import load_settings
from .errors import ConfigurationError, WeatherToolError
from .tool_implementation import get_alerts, get_current_weather, get_forecast

logger = logging.getLogger(__name__)

CHECKS = [
    ("current weather for London", get_current_weather, {"city": "London", "units": "metric"}),
    ("forecast for NYC coordinates", get_forecast, {"latitude": 40.7128, "longitude": -74.0060, "units": "imperial"}),
    ("alerts for Miami", get_alerts, {"city": "Miami", "units": "metric"}),
]


async def run_checks() -> None:
    for number, (label, tool, arguments) in enumerate(CHECKS, start=1):
        print(f"{number}. Testing {label}...")
        result = await tool(**arguments)
        print(result["content"][0]["text"])
        print("\n" + "=" * 50 + "\n")


def main():
    load_dotenv()
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    try:
        load_settings().require_api_key()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run_checks())
    except WeatherToolError as e:
        logger.error(f"Check failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
