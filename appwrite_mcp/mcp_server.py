import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .appwrite_client import AppwriteContext
from .config import AppwriteConfig, parse_config
from .dispatcher import ToolDispatcher
from .errors import ConfigurationError
from .utils.logging import configure_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "appwrite-mcp"


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Wire the MCP list/call handlers to ``dispatcher``."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    # Arguments are validated by the dispatcher, which owns the error wording.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        return await dispatcher.call_tool(name, arguments)

    return server


async def serve(config: AppwriteConfig):
    appwrite = AppwriteContext()
    appwrite.initialize(config)
    dispatcher = ToolDispatcher(appwrite)
    server = create_server(dispatcher)

    logger.info(f"Serving {len(dispatcher.registry)} tools over stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: Optional[Sequence[str]] = None):
    try:
        config = parse_config(argv)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging()
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
