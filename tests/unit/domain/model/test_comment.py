"""Unit tests for the Comment entity and argument checks."""

import pydantic
import pytest

from ctree.domain.error import ValidationError
from ctree.domain.model import Comment
from ctree.domain.validation import (
    make_comment,
    require_comment_id,
    require_page,
    require_query,
)
from ctree.domain.value import MAX_COMMENT_ID, CommentId


class TestComment:
    """Tests for Comment."""

    def test_root_comment_has_no_parent(self):
        comment = Comment(content="hello")

        assert comment.is_root
        assert comment.id is None
        assert comment.created_at.tzinfo is not None

    def test_empty_content_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Comment(content="")

    def test_ids_are_bounded_by_bigint(self):
        Comment(id=CommentId(MAX_COMMENT_ID), content="largest id")

        with pytest.raises(pydantic.ValidationError):
            Comment(parent_id=CommentId(MAX_COMMENT_ID + 1), content="reply")

    def test_comment_is_immutable(self):
        comment = Comment(content="hello")

        with pytest.raises(pydantic.ValidationError):
            comment.content = "changed"

    def test_with_content_keeps_identity(self):
        comment = Comment(id=CommentId(3), parent_id=CommentId(1), content="old")

        updated = comment.with_content("new")

        assert updated.id == 3
        assert updated.parent_id == 1
        assert updated.created_at == comment.created_at
        assert comment.content == "old"

    def test_with_content_validates(self):
        with pytest.raises(pydantic.ValidationError):
            Comment(content="old").with_content("")


class TestValidation:
    """Tests for shared argument checks."""

    @pytest.mark.parametrize("comment_id", [None, 0, -3, MAX_COMMENT_ID + 1])
    def test_invalid_ids(self, comment_id):
        with pytest.raises(ValidationError) as exc_info:
            require_comment_id("delete", comment_id)

        assert exc_info.value.operation == "delete"
        assert str(exc_info.value).startswith("delete: ")

    def test_valid_id_passes_through(self):
        assert require_comment_id("delete", CommentId(1)) == 1

    def test_zero_page_is_allowed(self):
        require_page("search", 0, 0)

    def test_query_is_stripped(self):
        assert require_query("search", "  кот ") == "кот"

    def test_make_comment_wraps_model_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            make_comment("create", content="")

        assert isinstance(exc_info.value.__cause__, pydantic.ValidationError)
