"""MCP tool servers for weather data."""
