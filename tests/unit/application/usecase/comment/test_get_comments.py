"""Unit tests for GetCommentsUseCase."""

import pytest

from ctree.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_empty_tree(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)

        response = await use_case.execute(GetCommentsRequest())

        assert response.comments == []
        assert response.parent_id is None
        assert response.limit == 10
        assert response.offset == 0

    @pytest.mark.asyncio
    async def test_lists_page_of_children(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        use_case = await unit_env.get(GetCommentsUseCase)
        root = await create.execute(CreateCommentRequest(content="root"))
        replies = [
            await create.execute(
                CreateCommentRequest(content=f"reply {i}", parent_id=root.id)
            )
            for i in range(3)
        ]

        # Act
        response = await use_case.execute(
            GetCommentsRequest(parent_id=root.id, limit=2, offset=1)
        )

        # Assert
        assert [c.id for c in response.comments] == [r.id for r in replies[1:3]]
        assert response.parent_id == root.id
