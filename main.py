#!/usr/bin/env python3
"""
Eywa MCP Server

A Model Context Protocol (MCP) server exposing hotel search, availability,
booking, retrieval, cancellation and modification as tools for AI agents.
Each request is routed to a configurable backing provider and answered in one
canonical schema:
- hotel/search
- hotel/availability
- hotel/book
- hotel/booking
- hotel/cancel
- hotel/modify
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from mcp.server.models import InitializationOptions
from mcp.server import Server
from mcp.types import ServerCapabilities, Tool
import mcp.types as types
from mcp.server.stdio import stdio_server

from config import ErrorCode, EywaConfig, logger
from providers import HotelService
from tools import ToolHandler, error_envelope, to_text_content
from tools.hotel import (
    HOTEL_SEARCH_TOOL, HotelSearchHandler,
    HOTEL_AVAILABILITY_TOOL, HotelAvailabilityHandler,
    HOTEL_BOOK_TOOL, HotelBookHandler,
    HOTEL_BOOKING_TOOL, HotelBookingHandler,
    HOTEL_CANCEL_TOOL, HotelCancelHandler,
    HOTEL_MODIFY_TOOL, HotelModifyHandler
)

# Server configuration
SERVER_NAME = "eywa-mcp"
SERVER_VERSION = "0.1.0"

ALL_TOOLS: List[Tool] = [
    HOTEL_SEARCH_TOOL,
    HOTEL_AVAILABILITY_TOOL,
    HOTEL_BOOK_TOOL,
    HOTEL_BOOKING_TOOL,
    HOTEL_CANCEL_TOOL,
    HOTEL_MODIFY_TOOL
]

HANDLER_CLASSES = {
    HOTEL_SEARCH_TOOL.name: HotelSearchHandler,
    HOTEL_AVAILABILITY_TOOL.name: HotelAvailabilityHandler,
    HOTEL_BOOK_TOOL.name: HotelBookHandler,
    HOTEL_BOOKING_TOOL.name: HotelBookingHandler,
    HOTEL_CANCEL_TOOL.name: HotelCancelHandler,
    HOTEL_MODIFY_TOOL.name: HotelModifyHandler
}


def build_handlers(service: HotelService, config: Optional[EywaConfig] = None) -> Dict[str, ToolHandler]:
    """Instantiate one handler per tool, all sharing the same service."""
    return {name: cls(service, config) for name, cls in HANDLER_CLASSES.items()}


async def dispatch_tool(
    name: str,
    arguments: Optional[Dict[str, Any]],
    handlers: Dict[str, ToolHandler]
) -> List[types.TextContent]:
    """Route a tool call to its handler; never raises."""
    handler = handlers.get(name)
    if handler is None:
        logger.error("Unknown tool requested", tool_name=name, available_tools=sorted(handlers))
        return to_text_content(error_envelope(ErrorCode.UNKNOWN_TOOL, f"Unknown tool: {name}"))

    try:
        result = await handler.call(arguments or {})
        logger.info("Tool executed", tool_name=name)
        return result
    except Exception as e:
        logger.error(
            "Tool execution failed",
            tool_name=name,
            error=str(e),
            error_type=type(e).__name__
        )
        return to_text_content(error_envelope(ErrorCode.INTERNAL_ERROR, str(e) or type(e).__name__))


def create_server(service: HotelService, config: Optional[EywaConfig] = None) -> Server:
    """Create and configure the MCP server with the hotel tools."""
    server = Server(SERVER_NAME)
    handlers = build_handlers(service, config)

    @server.list_tools()
    async def handle_list_tools() -> list[Tool]:
        """List all available tools."""
        logger.info("Listing available tools", total_tools=len(ALL_TOOLS))
        return ALL_TOOLS

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        """Handle tool calls."""
        logger.info("Tool called", tool_name=name, has_handler=name in handlers)
        return await dispatch_tool(name, arguments, handlers)

    return server


def configure_logging(debug: bool) -> None:
    # stdout belongs to the MCP transport
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s"
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="Eywa MCP server: hotel search and booking tools over stdio."
    )
    parser.add_argument("--version", action="version", version=f"{SERVER_NAME} {SERVER_VERSION}")
    parser.add_argument(
        "--properties",
        metavar="FILE",
        help="JSON file of HotelRunner property registrations (overrides EYWA_PROPERTIES_FILE)"
    )
    return parser.parse_args(argv)


async def main(config: Optional[EywaConfig] = None):
    """Main entry point for the MCP server."""
    service = None
    try:
        config = config or EywaConfig.from_env()
        service = HotelService.from_config(config)

        logger.info(
            "Starting Eywa MCP Server",
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            default_provider=config.default_provider,
            destination_rules=len(config.destination_providers),
            registered_properties=len(service.registry),
            total_tools=len(ALL_TOOLS)
        )

        server = create_server(service, config)

        options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=ServerCapabilities(tools={"listChanged": False})
        )

        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP server ready for connections", transport="stdio")
            await server.run(read_stream, write_stream, options)

    except KeyboardInterrupt:
        logger.info("Server stopped by user (Ctrl+C)")
    except Exception as e:
        logger.error(
            "Fatal server error",
            error=str(e),
            error_type=type(e).__name__,
            server_name=SERVER_NAME
        )
        sys.exit(1)
    finally:
        if service is not None:
            await service.aclose()


def run(argv: Optional[List[str]] = None) -> None:
    """Console script entry point."""
    args = parse_args(argv)
    config = EywaConfig.from_env()
    if args.properties:
        config.properties_file = args.properties
    configure_logging(config.debug)
    asyncio.run(main(config))


if __name__ == "__main__":
    run()
