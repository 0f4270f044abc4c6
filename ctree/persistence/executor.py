"""Resilient statement executor.

Runs built statements with bounded retry and exponential backoff. Only
transient failures (lost connections, timeouts) are retried. Everything
else is classified and raised on the first attempt.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

import logfire
from sqlalchemy.engine import Result
from sqlalchemy.exc import (
    ArgumentError,
    CompileError,
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    stop_before_delay,
    wait_exponential,
)

from ctree.config import RetrySettings
from ctree.persistence.error import (
    ConstructionError,
    PersistenceError,
    RetryExhaustedError,
    StoreError,
    TransientStoreError,
)
from ctree.persistence.statements import Statement

T = TypeVar("T")

Row = Dict[str, Any]

_TRANSIENT_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    OSError,
    asyncio.TimeoutError,
)


def is_input_rejected(error: DBAPIError) -> bool:
    """Whether the driver refused a bind value before sending the statement.

    asyncpg reports values it cannot encode (an int beyond BIGINT, say) with
    a ValueError subclass, which SQLAlchemy surfaces as InterfaceError with
    the driver exception as the cause of ``orig``.
    """
    orig = error.orig
    return isinstance(orig, ValueError) or isinstance(
        getattr(orig, "__cause__", None), ValueError
    )


def is_transient(error: BaseException) -> bool:
    """Whether error is a connectivity/timeout failure worth retrying."""
    if isinstance(error, DBAPIError):
        if is_input_rejected(error):
            return False
        if error.connection_invalidated:
            return True
    return isinstance(error, _TRANSIENT_ERRORS)


def classify_error(operation: str, error: Exception) -> PersistenceError:
    """Map a low-level error onto the persistence error taxonomy."""
    if isinstance(error, PersistenceError):
        return error
    if isinstance(error, (ArgumentError, CompileError)):
        return ConstructionError(operation, str(error))
    if is_transient(error):
        return TransientStoreError(operation, str(error))
    return StoreError(operation, str(error))


class ResilientExecutor:
    """Executes statements under a retry policy.

    Each attempt runs in its own session and transaction, committed on
    success. The executor does not interpret results: callers choose
    between rows, a single row or the affected row count.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        policy: RetrySettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize executor.

        Args:
            session_factory: Factory for database sessions
            policy: Retry policy (attempts, delay, backoff, deadline)
            sleep: Coroutine used to wait between attempts
        """
        self.session_factory = session_factory
        self.policy = policy
        self._sleep = sleep

    async def fetch_all(self, statement: Statement) -> List[Row]:
        """Run statement and return every row as a dict."""
        return await self._run(
            statement, lambda result: [dict(row) for row in result.mappings().all()]
        )

    async def fetch_one(self, statement: Statement) -> Optional[Row]:
        """Run statement and return the first row, or None."""

        def first(result: Result) -> Optional[Row]:
            row = result.mappings().first()
            return dict(row) if row is not None else None

        return await self._run(statement, first)

    async def execute(self, statement: Statement) -> int:
        """Run statement and return the number of affected rows."""
        return await self._run(statement, lambda result: result.rowcount)

    async def _run(self, statement: Statement, consume: Callable[[Result], T]) -> T:
        retrying = self._retrying(statement.operation)
        try:
            return await retrying(self._attempt, statement, consume)
        except RetryError as e:
            last = e.last_attempt.exception()
            attempts = e.last_attempt.attempt_number
            logfire.error(
                "Statement failed after retries",
                operation=statement.operation,
                attempts=attempts,
                sql=statement.sql,
                error=str(last),
            )
            raise RetryExhaustedError(
                statement.operation, attempts, str(last)
            ) from last

    async def _attempt(
        self, statement: Statement, consume: Callable[[Result], T]
    ) -> T:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(statement.clause)
                    return consume(result)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise classify_error(statement.operation, e) from e

    def _retrying(self, operation: str) -> AsyncRetrying:
        stop = stop_after_attempt(self.policy.attempts)
        if self.policy.deadline is not None:
            # Also stop when the next backoff sleep would overrun the deadline
            stop = stop | stop_before_delay(self.policy.deadline)

        return AsyncRetrying(
            stop=stop,
            wait=wait_exponential(
                multiplier=self.policy.delay, exp_base=self.policy.backoff, min=0
            ),
            retry=retry_if_exception_type(TransientStoreError),
            before_sleep=self._log_retry(operation),
            sleep=self._sleep,
        )

    @staticmethod
    def _log_retry(operation: str) -> Callable[[RetryCallState], None]:
        def log(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logfire.warn(
                "Transient database failure, retrying",
                operation=operation,
                attempt=retry_state.attempt_number,
                wait_seconds=retry_state.next_action.sleep
                if retry_state.next_action
                else None,
                error=str(error),
            )

        return log
