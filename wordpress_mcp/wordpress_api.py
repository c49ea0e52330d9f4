"""
Cliente del REST API de WordPress
Peticiones autenticadas con Basic Auth (application password) y clasificación uniforme de errores
"""

from typing import Any, Dict, Optional

import httpx

from .config import ServerContext
from .errors import API_ERROR, WordPressError, classify_error
from .models import (
    ApiResult,
    ConnectionStatus,
    CreatePostArgs,
    DeletePostArgs,
    GetCategoriesArgs,
    GetPostArgs,
    GetTagsArgs,
    ListPostsArgs,
    UpdatePostArgs,
)

API_PATH = '/wp-json/wp/v2'

TERMS_PER_PAGE = 100


def normalize_base_url(url: str) -> str:
    """Quita la barra final y añade la ruta del API: 'https://x.com/' y 'https://x.com' son equivalentes"""
    if url.endswith('/'):
        url = url[:-1]
    return f"{url}{API_PATH}"


class WordPressAPI:
    """Cliente para interactuar con el REST API de WordPress"""

    def __init__(self, context: ServerContext, transport: Optional[httpx.AsyncBaseTransport] = None):
        config = context.config
        self.logger = context.logger
        self.base_url = normalize_base_url(config.url)
        self.timeout = httpx.Timeout(config.request_timeout / 1000)
        self.auth = httpx.BasicAuth(config.username, config.app_password.get_secret_value())
        self.headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': f"{config.server_name}/{config.server_version}",
        }
        # Permite inyectar un transporte (httpx.MockTransport en los tests)
        self.transport = transport

    async def _request(self, method: str, endpoint: str, data: Optional[Dict] = None,
                       params: Optional[Dict] = None) -> ApiResult:
        """Realiza una petición al API y devuelve los datos o el error clasificado"""
        url = f"{self.base_url}{endpoint}"
        self.logger.debug(f"WordPress API request: {method} {endpoint}")

        async with httpx.AsyncClient(timeout=self.timeout, auth=self.auth, headers=self.headers,
                                     transport=self.transport, follow_redirects=True) as client:
            try:
                response = await client.request(method, url, json=data, params=params)
            except httpx.RequestError as e:
                # Sin respuesta: red caída o timeout
                error = classify_error(None, message=str(e) or e.__class__.__name__)
                self.logger.error(f"WordPress API network error: {method} {endpoint} - {error.message}")
                return ApiResult(error=error)

        self.logger.debug(f"WordPress API response: {response.status_code} ({method} {endpoint})")

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            error = classify_error(response.status_code, body)
            self.logger.error(
                f"WordPress API error: status={error.status_code} code={error.code} "
                f"message={error.message!r} ({method} {endpoint})"
            )
            return ApiResult(error=error)

        try:
            return ApiResult(data=response.json())
        except ValueError:
            error = WordPressError("Invalid JSON response from WordPress API", API_ERROR, response.status_code)
            self.logger.error(f"WordPress API returned invalid JSON ({method} {endpoint})")
            return ApiResult(error=error)

    # === Conexión ===
    async def test_connection(self) -> ConnectionStatus:
        """Prueba el acceso al API; informa el fallo como dato, nunca lanza"""
        self.logger.info("Testing WordPress API connection...")
        result = await self._request('GET', '/posts', params={'per_page': 1})

        if not result.ok:
            self.logger.error(f"WordPress API connection failed: {result.error.message}")
            return ConnectionStatus(success=False, message=result.error.message)

        self.logger.info("WordPress API connection successful")
        return ConnectionStatus(success=True, message="Connection successful")

    # === Posts ===
    async def create_post(self, args: CreatePostArgs) -> ApiResult:
        """Crea un nuevo post (solo se envía la forma raw de los textos)"""
        self.logger.info(f"Creating WordPress post: {args.title!r} ({args.status})")

        data: Dict[str, Any] = {
            'title': {'raw': args.title},
            'content': {'raw': args.content},
            'status': args.status,
        }
        if args.excerpt is not None:
            data['excerpt'] = {'raw': args.excerpt}
        if args.categories is not None:
            data['categories'] = args.categories
        if args.tags is not None:
            data['tags'] = args.tags

        result = await self._request('POST', '/posts', data=data)
        if result.ok:
            self.logger.info(f"Post created successfully: id={result.data.get('id')}")
        return result

    async def update_post(self, args: UpdatePostArgs) -> ApiResult:
        """Actualiza un post enviando únicamente los campos presentes en los argumentos"""
        self.logger.info(f"Updating WordPress post {args.id}")

        supplied = args.model_fields_set
        data: Dict[str, Any] = {}
        for field in ('title', 'content', 'excerpt'):
            value = getattr(args, field)
            if field in supplied and value is not None:
                data[field] = {'raw': value}
        for field in ('status', 'categories', 'tags'):
            value = getattr(args, field)
            if field in supplied and value is not None:
                data[field] = value

        result = await self._request('POST', f'/posts/{args.id}', data=data)
        if result.ok:
            self.logger.info(f"Post {args.id} updated successfully")
        return result

    async def delete_post(self, args: DeletePostArgs) -> ApiResult:
        """
        Elimina un post (papelera o permanente)

        Devuelve {'deleted': bool, 'previous': post}. Sin force WordPress
        responde con el post ya en la papelera en lugar de esa estructura.
        """
        self.logger.info(f"Deleting WordPress post {args.id} (force={args.force})")

        params = {'force': 'true' if args.force else 'false'}
        result = await self._request('DELETE', f'/posts/{args.id}', params=params)
        if not result.ok:
            return result

        body = result.data
        if isinstance(body, dict) and 'previous' in body:
            data = {'deleted': bool(body.get('deleted')), 'previous': body['previous']}
        else:
            post = body if isinstance(body, dict) else {}
            data = {'deleted': post.get('status') == 'trash', 'previous': post}

        self.logger.info(f"Post {args.id} deleted successfully")
        return ApiResult(data=data)

    async def list_posts(self, args: ListPostsArgs) -> ApiResult:
        """Lista posts con filtros y paginación"""
        params: Dict[str, Any] = {
            'per_page': args.per_page,
            'page': args.page,
            'status': args.status,
            'order': args.order,
            'orderby': args.orderby,
        }
        if args.search:
            params['search'] = args.search
        if args.author is not None:
            params['author'] = args.author
        if args.categories:
            params['categories'] = ','.join(str(c) for c in args.categories)
        if args.tags:
            params['tags'] = ','.join(str(t) for t in args.tags)
        # El contexto edit es necesario para obtener contenido sin renderizar o privado
        if args.include_content:
            params['context'] = 'edit'

        self.logger.debug(f"Fetching WordPress posts: {params}")
        result = await self._request('GET', '/posts', params=params)
        if result.ok:
            self.logger.debug(f"Fetched {len(result.data)} posts")
        return result

    async def get_post(self, args: GetPostArgs) -> ApiResult:
        """Obtiene un post por ID"""
        self.logger.debug(f"Fetching WordPress post {args.id} (context={args.context})")
        return await self._request('GET', f'/posts/{args.id}', params={'context': args.context})

    # === Categorías y etiquetas ===
    async def list_categories(self, args: Optional[GetCategoriesArgs] = None) -> ApiResult:
        """Lista categorías ordenadas por nombre"""
        return await self._list_terms('/categories', args)

    async def list_tags(self, args: Optional[GetTagsArgs] = None) -> ApiResult:
        """Lista etiquetas ordenadas por nombre"""
        return await self._list_terms('/tags', args)

    async def _list_terms(self, endpoint: str, args: Any) -> ApiResult:
        per_page = (args.per_page if args else None) or TERMS_PER_PAGE
        page = (args.page if args else None) or 1

        self.logger.debug(f"Fetching WordPress {endpoint[1:]}: per_page={per_page} page={page}")
        params = {'per_page': per_page, 'page': page, 'orderby': 'name', 'order': 'asc'}
        result = await self._request('GET', endpoint, params=params)
        if result.ok:
            self.logger.debug(f"Fetched {len(result.data)} {endpoint[1:]}")
        return result
