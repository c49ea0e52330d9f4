"""
Configuración del Servidor MCP de WordPress
Carga las variables de entorno (.env), las valida y prepara el logging
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Literal, Mapping, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from . import __version__
from .errors import ConfigError, format_validation_issues

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOG_LEVELS = {
    'error': logging.ERROR,
    'warn': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG,
}

# Nombres aceptados por variable; el primero es el canónico.
# WP_* se mantienen por compatibilidad con despliegues anteriores (Render)
ENV_ALIASES = {
    'WORDPRESS_URL': ('WORDPRESS_URL', 'WP_URL'),
    'WORDPRESS_USERNAME': ('WORDPRESS_USERNAME', 'WP_USER', 'WP_USERNAME'),
    'WORDPRESS_APP_PASSWORD': ('WORDPRESS_APP_PASSWORD', 'WP_APP_PASSWORD', 'WP_PASSWORD'),
    'MCP_SERVER_NAME': ('MCP_SERVER_NAME',),
    'MCP_SERVER_VERSION': ('MCP_SERVER_VERSION',),
    'LOG_LEVEL': ('LOG_LEVEL',),
    'REQUEST_TIMEOUT': ('REQUEST_TIMEOUT',),
}


class Config(BaseModel):
    """Configuración validada; solo lectura tras el arranque"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(alias='WORDPRESS_URL')
    username: str = Field(alias='WORDPRESS_USERNAME')
    app_password: SecretStr = Field(alias='WORDPRESS_APP_PASSWORD')
    server_name: str = Field(default='wordpress-mcp', alias='MCP_SERVER_NAME')
    server_version: str = Field(default=__version__, alias='MCP_SERVER_VERSION')
    log_level: Literal['error', 'warn', 'info', 'debug'] = Field(default='info', alias='LOG_LEVEL')
    # Milisegundos
    request_timeout: int = Field(default=30000, ge=1000, le=60000, alias='REQUEST_TIMEOUT')

    @field_validator('url')
    @classmethod
    def check_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError('WordPress URL must be a valid URL')
        return value

    @field_validator('username')
    @classmethod
    def check_username(cls, value: str) -> str:
        if not value:
            raise ValueError('WordPress username is required')
        return value

    @field_validator('app_password')
    @classmethod
    def check_app_password(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError('WordPress application password is required')
        return value


@dataclass
class ServerContext:
    """Contexto compartido creado una sola vez al arrancar"""
    config: Config
    logger: logging.Logger


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Lee y valida la configuración

    Args:
        environ: Variables a usar; por defecto el entorno del proceso tras cargar .env

    Raises:
        ConfigError: Con un mensaje que enumera cada campo inválido
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    raw = {}
    for field_name, names in ENV_ALIASES.items():
        for name in names:
            value = environ.get(name)
            if value:
                raw[field_name] = value
                break

    try:
        return Config.model_validate(raw)
    except ValidationError as e:
        issues = format_validation_issues(e)
        raise ConfigError(f"Configuration validation failed: {', '.join(issues)}") from e


def configure_logging(level: str = 'info') -> logging.Logger:
    """Configura el logging hacia stderr (stdout queda libre para el protocolo stdio)"""
    logging.basicConfig(
        level=LOG_LEVELS.get(level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    logger = logging.getLogger('wordpress_mcp')
    logger.setLevel(LOG_LEVELS.get(level, logging.INFO))
    return logger


def build_context(config: Config) -> ServerContext:
    logger = configure_logging(config.log_level)
    return ServerContext(config=config, logger=logger)
