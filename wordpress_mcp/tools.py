"""
Catálogo de herramientas MCP de WordPress
El inputSchema de cada herramienta se genera a partir de su modelo de argumentos
"""

from dataclasses import dataclass
from typing import Dict, List, Type

from mcp.types import Tool

from .models import (
    ConnectionTestArgs,
    CreatePostArgs,
    DeletePostArgs,
    GetCategoriesArgs,
    GetPostArgs,
    GetTagsArgs,
    ListPostsArgs,
    ToolArgs,
    UpdatePostArgs,
)

CREATE_POST = "create_wordpress_post"
UPDATE_POST = "update_wordpress_post"
DELETE_POST = "delete_wordpress_post"
LIST_POSTS = "list_wordpress_posts"
GET_POST = "get_wordpress_post"
GET_CATEGORIES = "get_wordpress_categories"
GET_TAGS = "get_wordpress_tags"
TEST_CONNECTION = "test_wordpress_connection"


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    args_model: Type[ToolArgs]

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(),
        )


TOOL_DEFINITIONS: Dict[str, ToolDefinition] = {
    definition.name: definition
    for definition in [
        ToolDefinition(
            CREATE_POST,
            "Create a new WordPress post with title, content, and optional metadata",
            CreatePostArgs,
        ),
        ToolDefinition(
            UPDATE_POST,
            "Update an existing WordPress post. Only the supplied fields are changed",
            UpdatePostArgs,
        ),
        ToolDefinition(
            DELETE_POST,
            "Delete a WordPress post (move to trash or permanently delete)",
            DeletePostArgs,
        ),
        ToolDefinition(
            LIST_POSTS,
            "List WordPress posts with filtering and pagination options",
            ListPostsArgs,
        ),
        ToolDefinition(
            TEST_CONNECTION,
            "Test WordPress API connection and authentication",
            ConnectionTestArgs,
        ),
        ToolDefinition(
            GET_POST,
            "Get a single WordPress post by ID with full content",
            GetPostArgs,
        ),
        ToolDefinition(
            GET_CATEGORIES,
            "Get WordPress categories for content organization with pagination",
            GetCategoriesArgs,
        ),
        ToolDefinition(
            GET_TAGS,
            "Get WordPress tags for content tagging with pagination",
            GetTagsArgs,
        ),
    ]
}


def list_tools() -> List[Tool]:
    """Lista todas las herramientas disponibles"""
    return [definition.to_tool() for definition in TOOL_DEFINITIONS.values()]
