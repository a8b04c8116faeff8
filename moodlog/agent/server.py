"""MCP server entry point: stdio transport, mood tools."""

import asyncio

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from moodlog.agent.backends import build_backend
from moodlog.agent.tools import MoodTools
from moodlog.core.config import settings
from moodlog.core.logging_config import setup_logging

logger = structlog.get_logger()

app = Server("moodlog")

# Built on first use so importing this module needs no database or network.
_tools: MoodTools | None = None


def get_tools() -> MoodTools:
    global _tools
    if _tools is None:
        _tools = MoodTools(build_backend(settings), settings)
    return _tools


@app.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(name=name, description=schema["description"], inputSchema=schema)
        for name, schema, _handler, _verb in get_tools().definitions()
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    text = get_tools().call(name, arguments)
    return [TextContent(type="text", text=text)]


async def run():
    logger.info("mcp_server_starting", backend=settings.TOOL_BACKEND)
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main():
    setup_logging(json_mode=settings.log_json, level=settings.LOG_LEVEL)
    asyncio.run(run())


if __name__ == "__main__":
    main()
