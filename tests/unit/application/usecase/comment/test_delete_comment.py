"""Unit tests for DeleteCommentUseCase."""

import pytest

from ctree.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from ctree.domain.error import ValidationError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_delete_subtree(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        use_case = await unit_env.get(DeleteCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)
        root = await create.execute(CreateCommentRequest(content="root"))
        await create.execute(CreateCommentRequest(content="reply", parent_id=root.id))

        # Act
        await use_case.execute(DeleteCommentRequest(comment_id=root.id))

        # Assert
        listing = await get_comments.execute(GetCommentsRequest())
        assert listing.comments == []

    @pytest.mark.asyncio
    async def test_zero_id_is_rejected(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(DeleteCommentRequest(comment_id=0))
