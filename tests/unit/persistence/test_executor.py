"""Unit tests for ResilientExecutor and error classification."""

import asyncio

import pytest
from sqlalchemy.exc import (
    CompileError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
)

from ctree.config import RetrySettings
from ctree.domain.value import CommentId
from ctree.persistence.error import (
    ConstructionError,
    RetryExhaustedError,
    StoreError,
    TransientStoreError,
)
from ctree.persistence.executor import ResilientExecutor, classify_error, is_transient
from ctree.persistence.statements import CommentStatementBuilder
from tests.unit.persistence.fakes import FakeResult, FakeSessionFactory, RecordingSleep


def _connection_refused() -> OperationalError:
    return OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))


def _unencodable_bind() -> InterfaceError:
    """The error SQLAlchemy raises when asyncpg cannot encode a bind value."""
    driver_error = Exception(
        "invalid input for query argument $1: 9223372036854775808 "
        "(value out of int64 range)"
    )
    driver_error.__cause__ = ValueError("value out of int64 range")
    return InterfaceError("DELETE FROM comments", {}, driver_error)


@pytest.fixture
def statement():
    return CommentStatementBuilder(language="russian").build_delete(CommentId(1))


def make_executor(factory, attempts=3, delay=0.5, backoff=2.0, deadline=None):
    sleep = RecordingSleep()
    policy = RetrySettings(
        attempts=attempts, delay=delay, backoff=backoff, deadline=deadline
    )
    return ResilientExecutor(factory, policy, sleep=sleep.sleep), sleep


class TestClassifyError:
    """Tests for mapping low-level errors onto the taxonomy."""

    def test_connection_failures_are_transient(self):
        error = classify_error("create", _connection_refused())

        assert isinstance(error, TransientStoreError)
        assert error.operation == "create"

    def test_invalidated_connection_is_transient(self):
        error = DBAPIError("SELECT 1", {}, Exception("gone"), connection_invalidated=True)

        assert is_transient(error)

    def test_timeouts_are_transient(self):
        assert is_transient(asyncio.TimeoutError())
        assert is_transient(ConnectionResetError())

    def test_constraint_violation_is_store_error(self):
        error = classify_error(
            "create", IntegrityError("INSERT", {}, Exception("fk violation"))
        )

        assert type(error) is StoreError

    def test_lost_interface_is_transient(self):
        error = InterfaceError("SELECT 1", {}, Exception("connection is closed"))

        assert is_transient(error)

    def test_rejected_bind_value_is_store_error(self):
        """Values the driver cannot encode fail the same way on every attempt."""
        error = _unencodable_bind()

        assert not is_transient(error)
        assert type(classify_error("delete", error)) is StoreError

    def test_compile_error_is_construction_error(self):
        error = classify_error("search", CompileError("cannot render"))

        assert isinstance(error, ConstructionError)


class TestRetry:
    """Tests for the retry loop."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self, statement):
        factory = FakeSessionFactory(FakeResult(rowcount=1))
        executor, sleep = make_executor(factory)

        affected = await executor.execute(statement)

        assert affected == 1
        assert factory.calls == 1
        assert sleep.waits == []

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self, statement):
        factory = FakeSessionFactory(
            _connection_refused(), _connection_refused(), FakeResult(rowcount=1)
        )
        executor, sleep = make_executor(factory, attempts=3)

        affected = await executor.execute(statement)

        assert affected == 1
        assert factory.calls == 3
        assert len(sleep.waits) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts", [1, 3, 5])
    async def test_exhaustion_after_exactly_n_attempts(self, statement, attempts):
        """A persistently failing store is tried exactly `attempts` times."""
        factory = FakeSessionFactory(_connection_refused())
        executor, _ = make_executor(factory, attempts=attempts)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await executor.execute(statement)

        assert factory.calls == attempts
        assert exc_info.value.attempts == attempts
        assert exc_info.value.operation == "delete"
        assert isinstance(exc_info.value, TransientStoreError)
        assert isinstance(exc_info.value.__cause__, TransientStoreError)
        assert isinstance(exc_info.value.__cause__.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_waits_grow_exponentially(self, statement):
        factory = FakeSessionFactory(_connection_refused())
        executor, sleep = make_executor(factory, attempts=4, delay=0.5, backoff=2.0)

        with pytest.raises(RetryExhaustedError):
            await executor.execute(statement)

        assert sleep.waits == [0.5, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_backoff_of_one_gives_constant_delay(self, statement):
        factory = FakeSessionFactory(_connection_refused())
        executor, sleep = make_executor(factory, attempts=3, delay=0.2, backoff=1.0)

        with pytest.raises(RetryExhaustedError):
            await executor.execute(statement)

        assert sleep.waits == [0.2, 0.2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            IntegrityError("INSERT", {}, Exception("fk violation")),
            ProgrammingError("SELEC", {}, Exception("syntax error")),
        ],
    )
    async def test_non_transient_errors_are_not_retried(self, statement, error):
        factory = FakeSessionFactory(error)
        executor, sleep = make_executor(factory, attempts=5)

        with pytest.raises(StoreError) as exc_info:
            await executor.execute(statement)

        assert factory.calls == 1
        assert sleep.waits == []
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_rejected_bind_value_is_not_retried(self, statement):
        factory = FakeSessionFactory(_unencodable_bind())
        executor, sleep = make_executor(factory, attempts=3)

        with pytest.raises(StoreError) as exc_info:
            await executor.execute(statement)

        assert not isinstance(exc_info.value, TransientStoreError)
        assert factory.calls == 1
        assert sleep.waits == []

    @pytest.mark.asyncio
    async def test_construction_errors_are_not_retried(self, statement):
        factory = FakeSessionFactory(CompileError("cannot render"))
        executor, _ = make_executor(factory, attempts=5)

        with pytest.raises(ConstructionError):
            await executor.execute(statement)

        assert factory.calls == 1


class TestCancellation:
    """The retry loop stops as soon as the caller gives up."""

    @pytest.mark.asyncio
    async def test_cancel_during_wait_stops_retrying(self, statement):
        factory = FakeSessionFactory(_connection_refused())

        async def cancelled_sleep(seconds: float) -> None:
            raise asyncio.CancelledError()

        executor = ResilientExecutor(
            factory, RetrySettings(attempts=5, delay=1.0), sleep=cancelled_sleep
        )

        with pytest.raises(asyncio.CancelledError):
            await executor.execute(statement)

        assert factory.calls == 1

    @pytest.mark.asyncio
    async def test_caller_timeout_interrupts_backoff(self, statement):
        factory = FakeSessionFactory(_connection_refused())
        executor = ResilientExecutor(factory, RetrySettings(attempts=5, delay=10.0))

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(executor.execute(statement), timeout=0.05)

        assert factory.calls == 1

    @pytest.mark.asyncio
    async def test_deadline_bounds_retry_loop(self, statement):
        factory = FakeSessionFactory(_connection_refused())
        executor = ResilientExecutor(
            factory,
            RetrySettings(attempts=100, delay=0.02, backoff=1.0, deadline=0.05),
        )

        with pytest.raises(RetryExhaustedError) as exc_info:
            await executor.execute(statement)

        assert factory.calls < 100
        assert exc_info.value.attempts == factory.calls


class TestResults:
    """Tests for result consumption."""

    @pytest.mark.asyncio
    async def test_fetch_all_returns_dicts(self, statement):
        rows = [{"id": 1, "content": "a"}, {"id": 2, "content": "b"}]
        executor, _ = make_executor(FakeSessionFactory(FakeResult(rows=rows)))

        result = await executor.fetch_all(statement)

        assert result == rows

    @pytest.mark.asyncio
    async def test_fetch_one_without_rows_returns_none(self, statement):
        executor, _ = make_executor(FakeSessionFactory(FakeResult()))

        assert await executor.fetch_one(statement) is None


class TestDeadline:
    """The deadline caps the time spent waiting between attempts."""

    @pytest.mark.asyncio
    async def test_no_sleep_past_deadline(self, statement):
        factory = FakeSessionFactory(_connection_refused())
        executor, sleep = make_executor(
            factory, attempts=10, delay=1.0, backoff=2.0, deadline=2.5
        )

        with pytest.raises(RetryExhaustedError) as exc_info:
            await executor.execute(statement)

        # A third wait of 4.0s would end past the 2.5s deadline
        assert sleep.waits == [1.0, 2.0]
        assert factory.calls == 3
        assert exc_info.value.attempts == 3
