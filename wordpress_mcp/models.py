"""
Modelos del Servidor MCP de WordPress
Esquemas de argumentos por herramienta y resultados del cliente del API
"""

from dataclasses import dataclass
from typing import Annotated, Any, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from .errors import ArgumentValidationError, WordPressError, format_validation_issues

PostStatus = Literal['publish', 'draft', 'private']
ListStatus = Literal['publish', 'draft', 'private', 'pending', 'future', 'any']


def _integral_float(value: Any) -> Any:
    # JSON no distingue 5 de 5.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# Entero estricto que acepta floats enteros (5.0) pero nunca cadenas ("5")
JsonInt = Annotated[int, BeforeValidator(_integral_float)]


class ToolArgs(BaseModel):
    """
    Base de los argumentos: sin conversiones implícitas

    Las claves desconocidas se descartan; el esquema publicado sigue
    declarando additionalProperties: false.
    """
    model_config = ConfigDict(
        extra='ignore',
        strict=True,
        json_schema_extra={'additionalProperties': False},
    )


class ClosedToolArgs(ToolArgs):
    """Argumentos que rechazan cualquier clave desconocida"""
    model_config = ConfigDict(extra='forbid')


class CreatePostArgs(ToolArgs):
    """Argumentos para crear un post"""
    title: str = Field(min_length=1, max_length=255, description="Post title (required, max 255 chars)")
    content: str = Field(min_length=1, description="Post content in HTML or plain text (required)")
    status: PostStatus = Field(default='draft', description="Post status")
    excerpt: Optional[str] = Field(default=None, description="Post excerpt/summary (optional)")
    categories: Optional[List[JsonInt]] = Field(default=None, description="Category IDs (optional)")
    tags: Optional[List[JsonInt]] = Field(default=None, description="Tag IDs (optional)")


class UpdatePostArgs(ToolArgs):
    """Argumentos para actualizar un post; solo se envían los campos presentes"""
    id: JsonInt = Field(ge=1, description="Post ID to update (required)")
    title: Optional[str] = Field(default=None, min_length=1, max_length=255, description="New post title (optional)")
    content: Optional[str] = Field(default=None, min_length=1, description="New post content (optional)")
    status: Optional[PostStatus] = Field(default=None, description="New post status (optional)")
    excerpt: Optional[str] = Field(default=None, description="New post excerpt (optional)")
    categories: Optional[List[JsonInt]] = Field(default=None, description="New category IDs (optional)")
    tags: Optional[List[JsonInt]] = Field(default=None, description="New tag IDs (optional)")


class DeletePostArgs(ToolArgs):
    id: JsonInt = Field(ge=1, description="Post ID to delete (required)")
    force: bool = Field(default=False, description="Permanently delete (true) or move to trash (false)")


class ListPostsArgs(ToolArgs):
    """Filtros y paginación para listar posts"""
    per_page: JsonInt = Field(default=10, ge=1, le=100, description="Posts per page (1-100)")
    page: JsonInt = Field(default=1, ge=1, description="Page number")
    status: ListStatus = Field(default='any', description="Filter by post status")
    search: Optional[str] = Field(default=None, description="Search term for title and content")
    author: Optional[JsonInt] = Field(default=None, description="Filter by author ID")
    categories: Optional[List[JsonInt]] = Field(default=None, description="Filter by category IDs")
    tags: Optional[List[JsonInt]] = Field(default=None, description="Filter by tag IDs")
    order: Literal['asc', 'desc'] = Field(default='desc', description="Sort order")
    orderby: Literal['date', 'id', 'title', 'slug', 'modified'] = Field(default='date', description="Sort by field")
    include_content: bool = Field(default=False, description="Include post content preview in results")


class GetPostArgs(ToolArgs):
    id: JsonInt = Field(ge=1, description="Post ID to retrieve (required)")
    context: Literal['view', 'embed', 'edit'] = Field(default='edit', description="Context for the request (view, embed, edit)")


class GetCategoriesArgs(ClosedToolArgs):
    """Paginación de categorías; el cliente aplica per_page=100 y page=1 si faltan"""
    per_page: Optional[JsonInt] = Field(default=None, ge=1, le=100, description="Results per page (1-100, default: 100)")
    page: Optional[JsonInt] = Field(default=None, ge=1, description="Page number (default: 1)")


class GetTagsArgs(ClosedToolArgs):
    """Paginación de etiquetas; el cliente aplica per_page=100 y page=1 si faltan"""
    per_page: Optional[JsonInt] = Field(default=None, ge=1, le=100, description="Results per page (1-100, default: 100)")
    page: Optional[JsonInt] = Field(default=None, ge=1, description="Page number (default: 1)")


class ConnectionTestArgs(ToolArgs):
    """La prueba de conexión no usa argumentos"""


ArgsT = TypeVar('ArgsT', bound=ToolArgs)


def validate_arguments(model: Type[ArgsT], arguments: Any) -> ArgsT:
    """
    Valida los argumentos crudos recibidos del protocolo

    Devuelve el modelo ya tipado y con valores por defecto, o lanza
    ArgumentValidationError con todas las violaciones (nunca aplica
    valores por defecto a una entrada inválida).
    """
    if arguments is None:
        arguments = {}
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        raise ArgumentValidationError(format_validation_issues(e)) from e


@dataclass
class ApiResult:
    """Resultado de una operación del cliente: datos o error clasificado"""
    data: Any = None
    error: Optional[WordPressError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ConnectionStatus:
    """Resultado de la prueba de conexión"""
    success: bool
    message: str
