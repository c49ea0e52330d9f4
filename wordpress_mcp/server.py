#!/usr/bin/env python3
"""
Servidor MCP de WordPress en Python
Servidor MCP (stdio) que expone posts, categorías y etiquetas de WordPress usando Basic Auth
"""

import asyncio
import sys
from typing import List, Optional

# Importar el SDK de MCP
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolRequest, ServerResult, Tool

from . import tools
from .config import ServerContext, build_context, load_config
from .dispatcher import ToolDispatcher
from .errors import ConfigError
from .wordpress_api import WordPressAPI


class WordPressMCPServer:
    """Servidor MCP para WordPress"""

    def __init__(self, context: ServerContext, client: Optional[WordPressAPI] = None):
        self.context = context
        self.logger = context.logger
        self.server = Server(context.config.server_name, version=context.config.server_version)
        self.wp = client or WordPressAPI(context)
        self.dispatcher = ToolDispatcher(context, self.wp)

        # Registrar handlers
        self.setup_handlers()

    def setup_handlers(self):
        """Configura los handlers del servidor MCP"""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            """Lista todas las herramientas disponibles"""
            self.logger.debug("Listing available WordPress tools")
            return tools.list_tools()

        async def call_tool(request: CallToolRequest) -> ServerResult:
            """Ejecuta una herramienta"""
            result = await self.dispatcher.dispatch(request.params.name, request.params.arguments)
            return ServerResult(result)

        # Se registra directamente para devolver el CallToolResult del
        # despachador tal cual (incluido isError)
        self.server.request_handlers[CallToolRequest] = call_tool

    async def run(self):
        """Inicia el servidor MCP sobre stdio"""
        config = self.context.config
        self.logger.info(f"Starting {config.server_name} {config.server_version} for {config.url}")

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


async def main():
    """Punto de entrada principal"""
    try:
        config = load_config()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    server = WordPressMCPServer(build_context(config))
    await server.run()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
