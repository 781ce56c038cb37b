"""
Core server bootstrap for the Lex runtime MCP server.

Wires up the fastmcp instance and registers the session tools.
"""

import asyncio
import logging
from typing import Any

from fastmcp import FastMCP  # type: ignore[import-not-found]

from lexruntime.client import LexRuntimeClient
from lexruntime.settings import Settings
from lexruntime.tools import LexToolDependencies, register_lex_tools


class ServerApp:
    """Server container holding settings, the runtime client and the MCP app."""

    def __init__(self, settings: Settings) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._state: dict[str, Any] = {"settings": settings}
        self._lex_client: LexRuntimeClient | None = None
        self._tool_dependencies = LexToolDependencies()
        self._mcp_app = FastMCP(
            name="Lex Runtime Session MCP Server",
            instructions=(
                "Inspect, create and delete Lex conversation sessions and send user text to a bot."
            ),
        )
        register_lex_tools(self._mcp_app, self._tool_dependencies)
        self._state["mcp_app"] = self._mcp_app

    def startup(self) -> None:
        """Prepare resources required to launch the SSE server."""
        self._logger.info("Starting server bootstrap")
        self._lex_client = LexRuntimeClient.from_settings(self._settings)
        self._tool_dependencies.attach_client(self._lex_client)
        self._state["initialized"] = True

    def shutdown(self) -> None:
        """Release acquired resources."""
        self._logger.info("Shutting down server bootstrap")
        if self._lex_client is not None:
            asyncio.run(self._lex_client.aclose())
            self._lex_client = None
        self._tool_dependencies.detach_client()
        self._state.clear()

    def serve_forever(self) -> None:
        """Run the FastMCP SSE server until interrupted."""
        host = "0.0.0.0"
        port = self._settings.mcp_sse_port
        self._logger.info("Starting SSE transport", extra={"host": host, "port": port})
        self._mcp_app.run(transport="sse", host=host, port=port)

    @property
    def mcp(self) -> FastMCP:
        """Expose the configured FastMCP instance."""
        return self._mcp_app


def build_server(settings: Settings) -> ServerApp:
    """Factory used by main.py to create the configured server instance."""
    return ServerApp(settings)
