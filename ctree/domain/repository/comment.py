"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ctree.domain.model.comment import Comment
from ctree.domain.value import CommentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer and must be safe to
    share between concurrent requests.
    """

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Persist a new comment.

        Args:
            comment: The comment to insert (its id is ignored)

        Returns:
            The comment with the identifier assigned by the store

        Raises:
            ValidationError: If comment is None
        """
        pass

    @abstractmethod
    async def update(self, comment: Comment) -> None:
        """Update the content of an existing comment.

        Only ``content`` is written. Updating a comment that does not exist
        is not reported as an error.

        Args:
            comment: The comment carrying its id and the new content

        Raises:
            ValidationError: If comment is None or has no id
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Deleting a comment that does not exist succeeds.

        Args:
            comment_id: The comment ID to delete

        Raises:
            ValidationError: If comment_id is not a positive identifier
        """
        pass

    @abstractmethod
    async def get_by_parent(
        self,
        parent_id: Optional[CommentId],
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """List direct children of a comment in creation order.

        Args:
            parent_id: The parent comment ID, None to list root comments
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Comments ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def search(
        self,
        query: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Full-text search over comment content.

        Args:
            query: Search phrase
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Matching comments, most relevant first, newest first on ties

        Raises:
            ValidationError: If query is empty
        """
        pass
