from setuptools import setup, find_packages

setup(
    name="openweather-mcp-tools",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "google-adk<2",
        "mcp>=1.0,<2",
        "aiohttp>=3.8.0,<3.14",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "aioresponses",
        ],
    },
    entry_points={
        "console_scripts": [
            "openweather-mcp=weather_mcp_tools.openweather_tool.weather_server:main",
            "openweather-mcp-check=weather_mcp_tools.openweather_tool.manual_check:main",
        ],
    },
    python_requires=">=3.10",
)
