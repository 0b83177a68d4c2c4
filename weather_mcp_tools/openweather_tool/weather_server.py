"""
MCP Server for OpenWeather Tools

Exposes the OpenWeatherMap lookups via Model Context Protocol (MCP) over stdio.

Each tool function is wrapped as an ADK FunctionTool so its input schema is derived
from the function signature, then advertised and executed through the low-level
MCP server.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict

from dotenv import load_dotenv

# MCP Server Imports
from mcp import types as mcp_types
from mcp.server.lowlevel import Server, NotificationOptions
from mcp.server.models import InitializationOptions
import mcp.server.stdio

# ADK Tool Imports
from google.adk.tools.function_tool import FunctionTool
from google.adk.tools.mcp_tool.conversion_utils import adk_to_mcp_tool_type

from .config import load_settings
from .errors import ConfigurationError
from .tool_implementation import (
    get_current_weather,
    get_forecast,
    get_hourly_forecast,
    get_daily_forecast,
    get_alerts,
    get_conditions_summary,
)
from .tool_schema import TOOL_ANNOTATIONS, tool_descriptions

SERVER_NAME = "openweather-mcp-server"
SERVER_VERSION = "0.1.0"

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# --- Initialize ADK Tools ---
weather_tools = {
    "get_current_weather": FunctionTool(get_current_weather),
    "get_forecast": FunctionTool(get_forecast),
    "get_hourly_forecast": FunctionTool(get_hourly_forecast),
    "get_daily_forecast": FunctionTool(get_daily_forecast),
    "get_alerts": FunctionTool(get_alerts),
    "get_conditions_summary": FunctionTool(get_conditions_summary),
}

# --- MCP Server Setup ---
app = Server(SERVER_NAME)


@app.list_tools()
async def list_mcp_tools() -> list[mcp_types.Tool]:
    """
    MCP handler to list all available weather tools.

    Returns:
        List of MCP Tool schemas
    """
    logger.debug("Received list_tools request")
    descriptions = tool_descriptions()
    annotations = mcp_types.ToolAnnotations(**TOOL_ANNOTATIONS)

    mcp_tool_schemas = []
    for tool_name, adk_tool in weather_tools.items():
        mcp_schema = adk_to_mcp_tool_type(adk_tool)
        mcp_schema = mcp_schema.model_copy(
            update={
                "description": descriptions.get(tool_name, mcp_schema.description),
                "annotations": annotations,
            }
        )
        mcp_tool_schemas.append(mcp_schema)
    return mcp_tool_schemas


def to_text_content(result: Dict[str, Any]) -> list[mcp_types.TextContent]:
    """Convert a tool result envelope into MCP text content."""
    return [
        mcp_types.TextContent(type="text", text=item["text"])
        for item in result["content"]
        if item.get("type") == "text"
    ]


@app.call_tool()
async def call_mcp_tool(
    name: str, arguments: dict
) -> list[mcp_types.Content]:
    """
    MCP handler to execute a weather tool call.

    Failures are raised so the MCP runtime reports the call as an error.

    Args:
        name: Tool name to execute
        arguments: Dictionary of arguments for the tool

    Returns:
        List of MCP Content objects with tool results
    """
    logger.info(f"call_tool '{name}' arguments={json.dumps(arguments)}")

    if name not in weather_tools:
        raise ValueError(
            f"Tool '{name}' not found. Available tools: {', '.join(weather_tools)}"
        )

    try:
        # tool_context is None because we're running outside a full ADK Runner
        result = await weather_tools[name].run_async(
            args=arguments or {},
            tool_context=None,
        )
    except Exception as e:
        logger.error(f"Tool '{name}' failed: {type(e).__name__}: {e}")
        raise

    # FunctionTool reports missing mandatory arguments as an error dict
    if "error" in result:
        raise ValueError(result["error"])

    logger.info(f"Tool '{name}' executed successfully")
    return to_text_content(result)


# --- MCP Server Runner ---
async def run_mcp_stdio_server():
    """
    Runs the MCP server, listening for connections over standard input/output.
    """
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        logger.info(f"Starting {SERVER_NAME} with {len(weather_tools)} tools")
        await app.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=app.name,
                server_version=SERVER_VERSION,
                capabilities=app.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
        logger.info("Run loop finished or client disconnected")


def main():
    """
    Main entry point for the OpenWeather MCP Server.
    """
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        settings.require_api_key()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    logging.getLogger().setLevel(settings.LOG_LEVEL)

    try:
        asyncio.run(run_mcp_stdio_server())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
