"""
Unit tests for tool argument validation.

Tests cover:
- Defaults applied to valid input
- Field-level violations reported as "path: message"
- Unknown properties: ignored for posts, rejected for categories/tags
- Strict typing (no silent coercion; integral floats are integers)
"""

import pytest

from wordpress_mcp.errors import ArgumentValidationError
from wordpress_mcp.models import (
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


def issues_for(model, arguments) -> list:
    with pytest.raises(ArgumentValidationError) as exc_info:
        validate_arguments(model, arguments)
    return exc_info.value.issues


class TestCreatePostArgs:
    """Tests for create_wordpress_post arguments."""

    def test_status_defaults_to_draft(self) -> None:
        """Valid input gets status=draft when none is given."""
        args = validate_arguments(CreatePostArgs, {"title": "Hello World", "content": "Body"})

        assert args.title == "Hello World"
        assert args.content == "Body"
        assert args.status == "draft"
        assert args.excerpt is None
        assert args.categories is None
        assert args.tags is None

    def test_missing_required_fields_are_all_reported(self) -> None:
        """Every missing field is listed, in declaration order."""
        assert issues_for(CreatePostArgs, {}) == [
            "title: Field required",
            "content: Field required",
        ]

    def test_title_length_limits(self) -> None:
        """Title must be 1-255 characters."""
        assert issues_for(CreatePostArgs, {"title": "", "content": "x"})[0].startswith("title:")
        too_long = issues_for(CreatePostArgs, {"title": "a" * 256, "content": "x"})
        assert too_long == ["title: String should have at most 255 characters"]

        args = validate_arguments(CreatePostArgs, {"title": "a" * 255, "content": "x"})
        assert len(args.title) == 255

    def test_empty_content_rejected(self) -> None:
        issues = issues_for(CreatePostArgs, {"title": "t", "content": ""})
        assert issues == ["content: String should have at least 1 character"]

    def test_status_outside_enum_rejected(self) -> None:
        """pending is valid for listing but not for creating."""
        issues = issues_for(CreatePostArgs, {"title": "t", "content": "c", "status": "pending"})
        assert len(issues) == 1
        assert issues[0].startswith("status:")

    def test_category_items_must_be_integers(self) -> None:
        """Nested violations carry the item index in the path."""
        issues = issues_for(CreatePostArgs, {"title": "t", "content": "c", "categories": [1, "two"]})
        assert issues == ["categories.1: Input should be a valid integer"]

    def test_unknown_property_ignored(self) -> None:
        """Stray keys are dropped and never reach the model."""
        args = validate_arguments(CreatePostArgs, {"title": "t", "content": "c", "author": 3})

        assert args.model_fields_set == {"title", "content"}
        assert "author" not in args.model_dump()

    def test_integral_float_ids_accepted(self) -> None:
        args = validate_arguments(CreatePostArgs, {"title": "t", "content": "c", "categories": [1.0, 2]})

        assert args.categories == [1, 2]
        assert all(type(item) is int for item in args.categories)

    def test_validation_is_deterministic(self) -> None:
        """The same invalid input always yields the same ordered violations."""
        bad = {"title": "", "content": 5, "status": "gone", "tags": ["x"], "extra": True}
        first = issues_for(CreatePostArgs, bad)
        second = issues_for(CreatePostArgs, dict(bad))

        assert first == second
        assert [issue.split(":")[0] for issue in first] == ["title", "content", "status", "tags.0"]

    def test_error_message_joins_issues(self) -> None:
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(CreatePostArgs, {})
        assert str(exc_info.value) == "title: Field required, content: Field required"


class TestUpdatePostArgs:
    """Tests for update_wordpress_post arguments."""

    def test_id_required_and_positive(self) -> None:
        assert issues_for(UpdatePostArgs, {}) == ["id: Field required"]
        assert issues_for(UpdatePostArgs, {"id": 0}) == ["id: Input should be greater than or equal to 1"]

    def test_id_is_not_coerced_from_string(self) -> None:
        assert issues_for(UpdatePostArgs, {"id": "5"}) == ["id: Input should be a valid integer"]

    def test_integral_float_id_accepted(self) -> None:
        """JSON 5.0 is the integer 5."""
        args = validate_arguments(UpdatePostArgs, {"id": 5.0})

        assert args.id == 5
        assert type(args.id) is int

    def test_fractional_id_rejected(self) -> None:
        assert issues_for(UpdatePostArgs, {"id": 5.5}) == ["id: Input should be a valid integer"]

    def test_only_supplied_fields_are_tracked(self) -> None:
        args = validate_arguments(UpdatePostArgs, {"id": 5, "status": "publish"})
        assert args.model_fields_set == {"id", "status"}

    def test_optional_fields_keep_their_constraints(self) -> None:
        issues = issues_for(UpdatePostArgs, {"id": 5, "title": "", "status": "future"})
        assert [issue.split(":")[0] for issue in issues] == ["title", "status"]


class TestDeleteAndGetArgs:
    """Tests for delete_wordpress_post and get_wordpress_post arguments."""

    def test_force_defaults_to_false(self) -> None:
        args = validate_arguments(DeletePostArgs, {"id": 5})
        assert args.force is False

    def test_force_must_be_boolean(self) -> None:
        assert issues_for(DeletePostArgs, {"id": 5, "force": "yes"}) == ["force: Input should be a valid boolean"]

    def test_get_context_defaults_to_edit(self) -> None:
        args = validate_arguments(GetPostArgs, {"id": 7})
        assert args.context == "edit"

    def test_get_context_enum(self) -> None:
        issues = issues_for(GetPostArgs, {"id": 7, "context": "admin"})
        assert issues[0].startswith("context:")


class TestListPostsArgs:
    """Tests for list_wordpress_posts arguments."""

    def test_defaults(self) -> None:
        args = validate_arguments(ListPostsArgs, {})

        assert args.per_page == 10
        assert args.page == 1
        assert args.status == "any"
        assert args.order == "desc"
        assert args.orderby == "date"
        assert args.include_content is False
        assert args.model_fields_set == set()

    def test_per_page_bounds(self) -> None:
        assert issues_for(ListPostsArgs, {"per_page": 0})[0].startswith("per_page:")
        assert issues_for(ListPostsArgs, {"per_page": 101}) == [
            "per_page: Input should be less than or equal to 100"
        ]

    def test_orderby_enum(self) -> None:
        assert issues_for(ListPostsArgs, {"orderby": "author"})[0].startswith("orderby:")

    def test_integral_float_pagination_accepted(self) -> None:
        args = validate_arguments(ListPostsArgs, {"per_page": 20.0, "page": 2.0, "author": 3.0})

        assert (args.per_page, args.page, args.author) == (20, 2, 3)
        assert type(args.per_page) is int

    def test_unknown_property_ignored(self) -> None:
        args = validate_arguments(ListPostsArgs, {"foo": 1, "per_page": 5})
        assert args.model_fields_set == {"per_page"}

    def test_none_payload_is_empty_object(self) -> None:
        args = validate_arguments(ListPostsArgs, None)
        assert args.per_page == 10

    def test_non_object_payload_is_a_root_violation(self) -> None:
        issues = issues_for(ListPostsArgs, ["per_page", 5])
        assert len(issues) == 1
        assert issues[0].startswith("(root): ")


class TestTaxonomyArgs:
    """Tests for get_wordpress_categories / get_wordpress_tags arguments."""

    @pytest.mark.parametrize("model", [GetCategoriesArgs, GetTagsArgs])
    def test_defaults_are_left_to_the_client(self, model) -> None:
        args = validate_arguments(model, {})
        assert args.per_page is None
        assert args.page is None

    @pytest.mark.parametrize("model", [GetCategoriesArgs, GetTagsArgs])
    def test_unknown_property_rejected(self, model) -> None:
        assert issues_for(model, {"orderby": "name"}) == ["orderby: Extra inputs are not permitted"]

    @pytest.mark.parametrize("model", [GetCategoriesArgs, GetTagsArgs])
    def test_integral_float_pagination_accepted(self, model) -> None:
        args = validate_arguments(model, {"per_page": 50.0})
        assert args.per_page == 50
        assert issues_for(model, {"per_page": "50"}) == ["per_page: Input should be a valid integer"]

    @pytest.mark.parametrize("model", [GetCategoriesArgs, GetTagsArgs])
    def test_pagination_bounds(self, model) -> None:
        issues = issues_for(model, {"per_page": 500, "page": 0})
        assert [issue.split(":")[0] for issue in issues] == ["per_page", "page"]


class TestConnectionTestArgs:
    def test_ignores_stray_properties(self) -> None:
        validate_arguments(ConnectionTestArgs, {})
        args = validate_arguments(ConnectionTestArgs, {"verbose": True})
        assert args.model_dump() == {}
