"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire

from ctree.domain.model import Comment
from ctree.domain.value import CommentId

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    content: str,
    parent_id: int | None = None,
    minutes: int = 0,
) -> Comment:
    """Helper to build an unsaved comment at a fixed point in time.

    Args:
        content: Comment text
        parent_id: Parent comment ID (None for a root comment)
        minutes: Offset from BASE_TIME, so ordering is deterministic

    Returns:
        Comment without an id
    """
    return Comment(
        content=content,
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
