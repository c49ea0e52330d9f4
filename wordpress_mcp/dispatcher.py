"""
Despachador de herramientas MCP de WordPress
Valida argumentos, invoca el cliente del API y da formato de texto a cada resultado
"""

from typing import Any, Dict, List

from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, CallToolResult, ErrorData, TextContent

from . import tools
from .config import ServerContext
from .errors import ArgumentValidationError, WordPressError
from .models import (
    ConnectionTestArgs,
    CreatePostArgs,
    DeletePostArgs,
    GetCategoriesArgs,
    GetPostArgs,
    GetTagsArgs,
    ListPostsArgs,
    UpdatePostArgs,
    validate_arguments,
)
from .wordpress_api import TERMS_PER_PAGE, WordPressAPI

CREATE_PREVIEW_LENGTH = 200
LIST_PREVIEW_LENGTH = 150


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def wordpress_error_result(error: WordPressError) -> CallToolResult:
    return text_result(f"❌ WordPress Error ({error.code}): {error.message}", is_error=True)


def _text(item: Dict[str, Any], field: str, form: str) -> str:
    """Devuelve item[field][form] (raw o rendered), o '' si falta"""
    value = item.get(field)
    if isinstance(value, dict):
        return value.get(form) or ''
    return ''


def _date(value: Any) -> str:
    return value.split('T')[0] if value else 'N/A'


def _pagination(args: Any, default_per_page: int) -> str:
    """Solo se repite la paginación si el usuario la indicó"""
    if not {'page', 'per_page'} & args.model_fields_set:
        return ''
    return f" (Page {args.page or 1}, {args.per_page or default_per_page} per page)"


class ToolDispatcher:
    """Traduce (nombre, argumentos) en validar → invocar → formatear"""

    def __init__(self, context: ServerContext, client: WordPressAPI):
        self.config = context.config
        self.logger = context.logger
        self.wp = client

        self.handlers = {
            tools.CREATE_POST: self.handle_create_post,
            tools.UPDATE_POST: self.handle_update_post,
            tools.DELETE_POST: self.handle_delete_post,
            tools.LIST_POSTS: self.handle_list_posts,
            tools.TEST_CONNECTION: self.handle_test_connection,
            tools.GET_POST: self.handle_get_post,
            tools.GET_CATEGORIES: self.handle_get_categories,
            tools.GET_TAGS: self.handle_get_tags,
        }

    async def dispatch(self, name: str, arguments: Any) -> CallToolResult:
        """
        Ejecuta una herramienta

        Cualquier fallo (validación, error clasificado o excepción inesperada)
        se devuelve como texto con isError=True. Solo un nombre desconocido
        se rechaza como error de protocolo (METHOD_NOT_FOUND).
        """
        handler = self.handlers.get(name)
        if handler is None:
            self.logger.warning(f"Unknown tool requested: {name}")
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        self.logger.info(f"Executing WordPress tool: {name}")
        try:
            args = validate_arguments(tools.TOOL_DEFINITIONS[name].args_model, arguments)
            return await handler(args)
        except ArgumentValidationError as e:
            self.logger.warning(f"Invalid arguments for {name}: {e}")
            return text_result(f"❌ Validation Error: {e}", is_error=True)
        except Exception as e:
            self.logger.exception(f"Tool execution failed: {name}")
            return text_result(f"❌ Error executing {name}: {e}", is_error=True)

    # === Posts ===
    async def handle_create_post(self, args: CreatePostArgs) -> CallToolResult:
        result = await self.wp.create_post(args)
        if not result.ok:
            return wordpress_error_result(result.error)

        post = result.data
        preview = _text(post, 'content', 'rendered')[:CREATE_PREVIEW_LENGTH] or 'No content'
        return text_result(
            f"WordPress post created successfully!\n\n"
            f"ID: {post.get('id')}\n"
            f"Title: {_text(post, 'title', 'rendered') or 'Untitled'}\n"
            f"Status: {post.get('status')}\n"
            f"URL: {post.get('link') or 'N/A'}\n\n"
            f"Content preview: {preview}..."
        )

    async def handle_update_post(self, args: UpdatePostArgs) -> CallToolResult:
        result = await self.wp.update_post(args)
        if not result.ok:
            return wordpress_error_result(result.error)

        post = result.data
        return text_result(
            f"WordPress post updated successfully!\n\n"
            f"ID: {post.get('id')}\n"
            f"Title: {_text(post, 'title', 'rendered') or 'Untitled'}\n"
            f"Status: {post.get('status')}\n"
            f"URL: {post.get('link') or 'N/A'}\n"
            f"Last modified: {post.get('modified') or 'N/A'}"
        )

    async def handle_delete_post(self, args: DeletePostArgs) -> CallToolResult:
        result = await self.wp.delete_post(args)
        if not result.ok:
            return wordpress_error_result(result.error)

        # La acción sale del argumento force, no de la respuesta
        action = 'permanently deleted' if args.force else 'moved to trash'
        previous = result.data['previous']
        deleted = 'true' if result.data['deleted'] else 'false'
        return text_result(
            f"WordPress post {action} successfully!\n\n"
            f"ID: {previous.get('id')}\n"
            f"Title: {_text(previous, 'title', 'rendered') or 'Untitled'}\n"
            f"Deleted: {deleted}"
        )

    async def handle_list_posts(self, args: ListPostsArgs) -> CallToolResult:
        result = await self.wp.list_posts(args)
        if not result.ok:
            return wordpress_error_result(result.error)

        posts = result.data
        if not posts:
            return text_result("No WordPress posts found matching the criteria.")

        lines: List[str] = []
        for post in posts:
            title = (_text(post, 'title', 'rendered') or _text(post, 'title', 'raw') or 'Untitled').strip()
            line = (
                f"• ID: {post.get('id')} | {title} | Status: {post.get('status')} | "
                f"Modified: {_date(post.get('modified'))}"
            )

            content = _text(post, 'content', 'rendered')
            if args.include_content and content:
                ellipsis = '...' if len(content) > LIST_PREVIEW_LENGTH else ''
                line += f"\n  Content: {content[:LIST_PREVIEW_LENGTH]}{ellipsis}"

            lines.append(line)

        pagination = _pagination(args, 10)
        return text_result(f"Found {len(posts)} WordPress posts{pagination}:\n\n" + "\n\n".join(lines))

    async def handle_get_post(self, args: GetPostArgs) -> CallToolResult:
        result = await self.wp.get_post(args)
        if not result.ok:
            return wordpress_error_result(result.error)

        post = result.data
        title = (_text(post, 'title', 'rendered') or _text(post, 'title', 'raw') or 'Untitled').strip()
        excerpt = (_text(post, 'excerpt', 'rendered') or _text(post, 'excerpt', 'raw')).strip()
        content = _text(post, 'content', 'raw') or _text(post, 'content', 'rendered') or 'No content available'

        return text_result(
            f"WordPress Post Details:\n\n"
            f"ID: {post.get('id')}\n"
            f"Title: {title}\n"
            f"Status: {post.get('status')}\n"
            f"URL: {post.get('link') or 'N/A'}\n"
            f"Published: {_date(post.get('date'))}\n"
            f"Modified: {_date(post.get('modified'))}\n\n"
            f"Excerpt:\n{excerpt}\n\n"
            f"Content:\n{content}"
        )

    # === Taxonomías ===
    async def handle_get_categories(self, args: GetCategoriesArgs) -> CallToolResult:
        result = await self.wp.list_categories(args)
        if not result.ok:
            return wordpress_error_result(result.error)
        return self._format_terms(result.data, args, 'categories', 'Categories')

    async def handle_get_tags(self, args: GetTagsArgs) -> CallToolResult:
        result = await self.wp.list_tags(args)
        if not result.ok:
            return wordpress_error_result(result.error)
        return self._format_terms(result.data, args, 'tags', 'Tags')

    def _format_terms(self, terms: List[Dict[str, Any]], args: Any, noun: str, heading: str) -> CallToolResult:
        if not terms:
            page = args.page or 1
            if page > 1:
                return text_result(f"No WordPress {noun} found on page {page}. Try a lower page number.")
            return text_result(f"No WordPress {noun} found.")

        lines = [
            f"• ID: {term.get('id')} | {term.get('name')} | Slug: {term.get('slug')} | Posts: {term.get('count') or 0}"
            for term in terms
        ]
        pagination = _pagination(args, TERMS_PER_PAGE)
        return text_result(f"WordPress {heading} ({len(terms)}){pagination}:\n\n" + "\n".join(lines))

    # === Conexión ===
    async def handle_test_connection(self, args: ConnectionTestArgs) -> CallToolResult:
        status = await self.wp.test_connection()
        banner = 'PASSED' if status.success else 'FAILED'
        # Nunca se muestra la application password
        return text_result(
            f"WordPress connection test {banner}\n\n"
            f"Message: {status.message}\n\n"
            f"URL: {self.config.url}\n"
            f"Username: {self.config.username}"
        )
