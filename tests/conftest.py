"""
Pytest configuration and fixtures for the WordPress MCP tests.

The WordPress REST API is faked with httpx.MockTransport, so no test
touches the network.
"""

import json
import logging
from typing import Any, Callable, List, Tuple

import httpx
import pytest

from wordpress_mcp.config import Config, ServerContext
from wordpress_mcp.wordpress_api import WordPressAPI

SECRET = "abcd efgh ijkl mnop"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def config() -> Config:
    """Return a valid configuration pointing at a fake site."""
    return Config(
        url="https://blog.example.com/",
        username="editor",
        app_password=SECRET,
        server_name="wordpress-mcp",
        server_version="1.0.0",
        request_timeout=5000,
    )


@pytest.fixture
def context(config: Config) -> ServerContext:
    """Return a server context with a test logger."""
    return ServerContext(config=config, logger=logging.getLogger("wordpress_mcp.tests"))


@pytest.fixture
def make_client(context: ServerContext) -> Callable[[Handler], Tuple[WordPressAPI, List[httpx.Request]]]:
    """Build a WordPressAPI whose requests are answered by a handler and recorded."""

    def factory(handler: Handler) -> Tuple[WordPressAPI, List[httpx.Request]]:
        requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return WordPressAPI(context, transport=httpx.MockTransport(record)), requests

    return factory


def json_response(payload: Any, status_code: int = 200) -> Handler:
    """Handler that always answers with the given JSON payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


def make_post(**overrides: Any) -> dict:
    """Return a WordPress post as the REST API renders it."""
    post = {
        "id": 42,
        "title": {"raw": "Hello World", "rendered": "Hello World"},
        "content": {"raw": "Body", "rendered": "<p>Body</p>\n"},
        "excerpt": {"raw": "", "rendered": "<p>Body</p>\n"},
        "status": "draft",
        "date": "2024-05-01T10:00:00",
        "date_gmt": "2024-05-01T08:00:00",
        "modified": "2024-05-02T11:30:00",
        "modified_gmt": "2024-05-02T09:30:00",
        "link": "https://blog.example.com/?p=42",
        "type": "post",
        "categories": [1],
        "tags": [],
    }
    post.update(overrides)
    return post
