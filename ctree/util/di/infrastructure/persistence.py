"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ctree.config import RetrySettings, SearchSettings, Settings
from ctree.domain.repository import CommentRepository
from ctree.persistence.database import create_engine, create_session_factory
from ctree.persistence.executor import ResilientExecutor
from ctree.persistence.repository import PostgresCommentRepository
from ctree.persistence.statements import CommentStatementBuilder
from ctree.util.di.base import ProviderBase
from ctree.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL.

    Everything is APP-scoped: the repository holds no request state and
    the connection pool is shared by all requests.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_statement_builder(
        self, search_settings: SearchSettings
    ) -> CommentStatementBuilder:
        """Provide comment statement builder."""
        return CommentStatementBuilder(language=search_settings.language)

    @provide(scope=Scope.APP)
    def get_executor(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        retry_settings: RetrySettings,
    ) -> ResilientExecutor:
        """Provide resilient statement executor."""
        return ResilientExecutor(session_factory, policy=retry_settings)

    @provide(scope=Scope.APP)
    def get_comment_repository(
        self, executor: ResilientExecutor, builder: CommentStatementBuilder
    ) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(executor, builder)
