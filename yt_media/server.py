# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""MCP stdio transport for the dispatcher.

stdout carries JSON-RPC frames; all logging goes to stderr.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from yt_media import __version__
from yt_media.core.dispatcher import Dispatcher
from yt_media.core.models import Failure, Outcome
from yt_media.core.registry import OperationDescriptor, OperationRegistry

logger = logging.getLogger("yt_media")

SERVER_NAME = "mcp-youtube"


def descriptor_to_tool(descriptor: OperationDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def list_tools_for(registry: OperationRegistry) -> list[types.Tool]:
    """Tools in registry declaration order."""
    return [descriptor_to_tool(d) for d in registry.list()]


def failure_to_error(failure: Failure) -> types.ErrorData:
    return types.ErrorData(
        code=failure.kind.code,
        message=failure.message,
        data={"kind": failure.kind.value},
    )


def outcome_to_content(outcome: Outcome) -> list[types.TextContent]:
    """Serialize a Success; raise McpError for a Failure."""
    if isinstance(outcome, Failure):
        raise McpError(failure_to_error(outcome))
    return [types.TextContent(type="text", text=outcome.payload, _meta=outcome.metadata)]


async def call_tool(
    dispatcher: Dispatcher, name: str, arguments: dict[str, Any] | None
) -> list[types.TextContent]:
    """Run one dispatch off the event loop and serialize its outcome."""
    outcome = await asyncio.to_thread(dispatcher.dispatch, name, arguments)
    return outcome_to_content(outcome)


def build_server(dispatcher: Dispatcher) -> Server:
    """Bind the dispatcher's registry and dispatch to an MCP server."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return list_tools_for(dispatcher.registry)

    # McpError must reach the session so the client sees a JSON-RPC error code.
    async def _call_tool(request: types.CallToolRequest) -> types.ServerResult:
        content = await call_tool(dispatcher, request.params.name, request.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = _call_tool
    return server


async def serve(dispatcher: Dispatcher) -> None:
    """Run the server on stdio until the input closes or SIGINT/SIGTERM arrives."""
    server = build_server(dispatcher)
    loop = asyncio.get_running_loop()

    async def _run() -> None:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP YouTube server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())

    task = asyncio.create_task(_run())
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, task.cancel)
        except (NotImplementedError, RuntimeError):
            # add_signal_handler is unavailable on Windows event loops
            pass

    try:
        await task
    except asyncio.CancelledError:
        logger.info("Shutting down")
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.remove_signal_handler(sig)
            except (NotImplementedError, RuntimeError):
                pass
