"""Strongly typed identifiers for comment tree entities.

Identifiers are generated by the database identity column, so they are
plain positive integers. Zero is never a valid identifier.
"""

from typing import NewType

CommentId = NewType("CommentId", int)

# Upper bound of the BIGINT identity column
MAX_COMMENT_ID = 2**63 - 1
