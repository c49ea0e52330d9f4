"""
Servidor MCP de WordPress
Expone posts, categorías y etiquetas del REST API de WordPress como herramientas MCP
"""

__version__ = "1.0.0"
