#!/usr/bin/env python3
"""
HTTP Wrapper para el servidor MCP
Expone las mismas herramientas MCP sobre HTTP (JSON-RPC 2.0) para clientes que no usan stdio
"""

import os
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR

from . import tools
from .config import ServerContext, build_context, load_config
from .dispatcher import ToolDispatcher
from .wordpress_api import WordPressAPI

PROTOCOL_VERSION = "2024-11-05"


def rpc_result(request_id: Any, result: Any) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def rpc_error(request_id: Any, code: int, message: str) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def create_app(context: Optional[ServerContext] = None, client: Optional[WordPressAPI] = None) -> FastAPI:
    """
    Crea la aplicación FastAPI

    Sin contexto, la configuración se carga del entorno al arrancar.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.dispatcher is None:
            _attach(app, build_context(load_config()), None)
        yield

    app = FastAPI(
        title="WordPress MCP Server (HTTP)",
        description="Servidor MCP de WordPress expuesto sobre HTTP (JSON-RPC)",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.context = None
    app.state.dispatcher = None
    if context is not None:
        _attach(app, context, client)

    @app.get("/")
    @app.head("/")
    async def root():
        """Info del servidor"""
        config = app.state.context.config
        return {
            "name": config.server_name,
            "version": config.server_version,
            "protocol": "MCP over HTTP (JSON-RPC)",
            "wordpress_url": config.url,
            "endpoints": {
                "root": "/ (POST)",
                "mcp": "/mcp (POST)",
                "messages": "/mcp/messages (POST)"
            }
        }

    @app.get("/health")
    @app.head("/health")
    async def health():
        """Health check"""
        return {"status": "healthy"}

    @app.post("/")
    @app.post("/mcp")
    @app.post("/mcp/messages")
    async def mcp_messages_endpoint(request: Request):
        """Recibe mensajes MCP (initialize, tools/list, tools/call)"""
        logger = app.state.context.logger
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(rpc_error(None, PARSE_ERROR, "Parse error"))

        if not isinstance(body, dict):
            return JSONResponse(rpc_error(None, INVALID_REQUEST, "Invalid request"))

        method = body.get("method")
        request_id = body.get("id")
        params = body.get("params") or {}
        logger.debug(f"MCP message received: {method}")

        # Las notificaciones no llevan id ni esperan respuesta
        if request_id is None and isinstance(method, str) and method.startswith("notifications/"):
            return Response(status_code=202)

        if method == "initialize":
            config = app.state.context.config
            return rpc_result(request_id, {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": config.server_name, "version": config.server_version},
            })

        if method == "ping":
            return rpc_result(request_id, {})

        if method == "tools/list":
            tool_list = [tool.model_dump(by_alias=True, exclude_none=True) for tool in tools.list_tools()]
            return rpc_result(request_id, {"tools": tool_list})

        if method == "tools/call":
            if not isinstance(params, dict):
                return JSONResponse(rpc_error(request_id, INVALID_REQUEST, "Invalid params"))
            try:
                result = await app.state.dispatcher.dispatch(params.get("name"), params.get("arguments"))
            except McpError as e:
                return JSONResponse(rpc_error(request_id, e.error.code, e.error.message))
            return rpc_result(request_id, result.model_dump(by_alias=True, exclude_none=True))

        logger.warning(f"Unsupported MCP method: {method}")
        return JSONResponse(rpc_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}"))

    return app


def _attach(app: FastAPI, context: ServerContext, client: Optional[WordPressAPI]) -> None:
    app.state.context = context
    app.state.dispatcher = ToolDispatcher(context, client or WordPressAPI(context))


def run_http():
    """Arranca el servidor HTTP con uvicorn"""
    import uvicorn

    port = int(os.getenv('PORT', 8000))
    uvicorn.run(create_app(), host="0.0.0.0", port=port)


if __name__ == "__main__":
    run_http()
