"""
Errores del Servidor MCP de WordPress
Taxonomía fija de errores y clasificación de fallos del REST API
"""

from typing import Any, List, Optional

from pydantic import ValidationError

# Códigos de error clasificados
NETWORK_ERROR = "NETWORK_ERROR"
AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
PERMISSION_ERROR = "PERMISSION_ERROR"
NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
API_ERROR = "API_ERROR"

# Respuestas con código fijo: el cuerpo de la respuesta se ignora
STATUS_ERRORS = {
    401: (AUTHENTICATION_ERROR, "Invalid credentials. Check your username and application password."),
    403: (PERMISSION_ERROR, "Insufficient permissions. Check user role and capabilities."),
    404: (NOT_FOUND_ERROR, "WordPress API endpoint not found. Check if REST API is enabled."),
    429: (RATE_LIMIT_ERROR, "Rate limit exceeded. Please wait before making more requests."),
}


class WordPressError(Exception):
    """Error clasificado del API de WordPress"""

    def __init__(self, message: str, code: str = API_ERROR, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"WordPressError(code={self.code!r}, status_code={self.status_code!r}, message={self.message!r})"


class ArgumentValidationError(Exception):
    """Argumentos de herramienta inválidos; nunca llegan a la red"""

    def __init__(self, issues: List[str]):
        self.issues = issues
        super().__init__(", ".join(issues))


class ConfigError(Exception):
    """Configuración inválida al arrancar"""


def format_validation_issues(error: ValidationError) -> List[str]:
    """
    Convierte un ValidationError de pydantic en líneas "ruta: mensaje"

    El orden es el que reporta pydantic, así que la misma entrada
    produce siempre la misma lista.
    """
    issues = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "(root)"
        issues.append(f"{path}: {item['msg']}")
    return issues


def classify_error(status_code: Optional[int], body: Any = None, message: str = "") -> WordPressError:
    """
    Clasifica un fallo del API de WordPress

    Args:
        status_code: Código HTTP, o None si no hubo respuesta (red o timeout)
        body: Cuerpo JSON de la respuesta, si lo hay
        message: Descripción del fallo de transporte

    Returns:
        WordPressError con código, mensaje y estado HTTP
    """
    if status_code is None:
        return WordPressError(f"Network error: {message}", NETWORK_ERROR)

    if status_code in STATUS_ERRORS:
        code, text = STATUS_ERRORS[status_code]
        return WordPressError(text, code, status_code)

    wp_code = None
    wp_message = None
    if isinstance(body, dict):
        wp_code = body.get("code")
        wp_message = body.get("message")

    return WordPressError(
        wp_message or f"WordPress API error ({status_code})",
        wp_code or API_ERROR,
        status_code,
    )
