"""Persistence layer errors.

Every failure raised by the data-access layer is one of these, chained to
the underlying SQLAlchemy or driver exception.
"""


class PersistenceError(Exception):
    """Base persistence error."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class ConstructionError(PersistenceError):
    """A statement could not be assembled.

    This is a programming or configuration defect. It fails the operation
    and is never retried.
    """

    pass


class StoreError(PersistenceError):
    """The database rejected a statement (constraint violation, bad SQL, ...).

    Not retried.
    """

    pass


class TransientStoreError(PersistenceError):
    """Connectivity or timeout failure that may succeed on a later attempt."""

    pass


class RetryExhaustedError(TransientStoreError):
    """A transient failure persisted through every allowed attempt."""

    def __init__(self, operation: str, attempts: int, message: str):
        self.attempts = attempts
        super().__init__(operation, f"gave up after {attempts} attempt(s): {message}")
