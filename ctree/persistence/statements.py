"""Statement builder for comment persistence.

Turns logical comment operations into parameterized SQLAlchemy Core
statements. User input is always carried in bound parameters, never
rendered into the SQL text.
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import String, bindparam, cast, delete, func, insert, select, update
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.dialects.postgresql.asyncpg import PGDialect_asyncpg
from sqlalchemy.exc import ArgumentError, CompileError
from sqlalchemy.sql.compiler import Compiled
from sqlalchemy.sql.expression import Executable

from ctree.domain.model import Comment
from ctree.domain.value import CommentId
from ctree.persistence.error import ConstructionError
from ctree.persistence.mappers import comment_to_dict
from ctree.persistence.tables import COMMENT_COLUMNS, comments_table


class Statement(BaseModel):
    """A built statement ready for execution.

    The executor runs ``clause``; the session compiles it again against the
    live connection. ``compiled`` is produced at build time so that assembly
    errors surface as ConstructionError before any I/O, and it backs the
    ``sql`` and ``params`` views used in logs.

    Attributes:
        operation: Logical operation name, used in errors and logs
        clause: SQLAlchemy executable clause
        compiled: The clause compiled for the asyncpg dialect
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    operation: str
    clause: Executable
    compiled: Compiled

    @property
    def sql(self) -> str:
        """SQL text with positional placeholders."""
        return str(self.compiled)

    @property
    def params(self) -> List[Any]:
        """Bound parameter values in placeholder order."""
        names = self.compiled.positiontup or list(self.compiled.params)
        return [self.compiled.params[name] for name in names]


class CommentStatementBuilder:
    """Builds statements against the ``comments`` table.

    The builder is stateless apart from the text search language, so a
    single instance can be shared across requests.
    """

    def __init__(self, language: str) -> None:
        """Initialize builder.

        Args:
            language: PostgreSQL text search configuration used for queries
        """
        self.language = language
        self._dialect = PGDialect_asyncpg()

    def build_insert(self, comment: Comment) -> Statement:
        """Insert a comment and return its generated id."""
        with self._constructing("create"):
            clause = (
                insert(comments_table)
                .values(**comment_to_dict(comment))
                .returning(comments_table.c.id)
            )
            return self._statement("create", clause)

    def build_update(self, comment: Comment) -> Statement:
        """Update content only, parent_id and created_at are left untouched."""
        with self._constructing("update"):
            clause = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(content=comment.content)
            )
            return self._statement("update", clause)

    def build_delete(self, comment_id: CommentId) -> Statement:
        """Delete a comment by id."""
        with self._constructing("delete"):
            clause = delete(comments_table).where(comments_table.c.id == comment_id)
            return self._statement("delete", clause)

    def build_list_by_parent(
        self, parent_id: Optional[CommentId], limit: int, offset: int
    ) -> Statement:
        """List direct children of parent_id, or root comments when None.

        Roots are selected with ``parent_id IS NULL``. Binding NULL into
        ``parent_id = $1`` would match nothing.
        """
        with self._constructing("get_by_parent"):
            clause = select(*COMMENT_COLUMNS)

            if parent_id is None:
                clause = clause.where(comments_table.c.parent_id.is_(None))
            else:
                clause = clause.where(comments_table.c.parent_id == parent_id)

            clause = (
                clause.order_by(
                    comments_table.c.created_at.asc(), comments_table.c.id.asc()
                )
                .limit(limit)
                .offset(offset)
            )
            return self._statement("get_by_parent", clause)

    def build_search(self, query: str, limit: int, offset: int) -> Statement:
        """Rank comments matching query by ts_rank.

        Ties are broken by newest first, then by id, so pages do not
        overlap between calls on unchanged data.
        """
        with self._constructing("search"):
            ts_query = func.plainto_tsquery(
                cast(bindparam("language", self.language, type_=String), REGCONFIG),
                bindparam("query", query, type_=String),
            )
            rank = func.ts_rank(comments_table.c.search_vector, ts_query)

            clause = (
                select(*COMMENT_COLUMNS)
                .where(comments_table.c.search_vector.bool_op("@@")(ts_query))
                .order_by(
                    rank.desc(),
                    comments_table.c.created_at.desc(),
                    comments_table.c.id.desc(),
                )
                .limit(limit)
                .offset(offset)
            )
            return self._statement("search", clause)

    def _statement(self, operation: str, clause: Executable) -> Statement:
        # Assembly check only, execution compiles clause on the connection
        compiled = clause.compile(dialect=self._dialect)
        return Statement(operation=operation, clause=clause, compiled=compiled)

    @contextmanager
    def _constructing(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (ArgumentError, CompileError) as e:
            raise ConstructionError(operation, str(e)) from e
