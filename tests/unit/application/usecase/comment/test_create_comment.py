"""Unit tests for CreateCommentUseCase."""

import pytest

from ctree.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from ctree.domain.error import ValidationError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_returns_item_with_id(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act
        item = await use_case.execute(CreateCommentRequest(content="Привет"))

        # Assert
        assert item.id > 0
        assert item.parent_id is None
        assert item.content == "Привет"

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        parent = await use_case.execute(CreateCommentRequest(content="parent"))

        reply = await use_case.execute(
            CreateCommentRequest(content="reply", parent_id=parent.id)
        )

        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_invalid_parent_id_is_validation_error(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(CreateCommentRequest(content="x", parent_id=0))
