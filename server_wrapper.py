#!/usr/bin/env python3
"""
Wrapper para ejecutar el servidor MCP de WordPress en modo stdio
Uso: python server_wrapper.py (configuración en .env o variables de entorno)
"""

import asyncio
from wordpress_mcp.server import main

if __name__ == "__main__":
    asyncio.run(main())
