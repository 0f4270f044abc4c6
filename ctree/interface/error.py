"""Interface layer errors."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from fastapi import HTTPException, status

from ctree.domain.error import ValidationError
from ctree.persistence.error import (
    ConstructionError,
    StoreError,
    TransientStoreError,
)


@contextmanager
def http_errors(action: str) -> Iterator[None]:
    """Translate domain and persistence errors into HTTP errors.

    - ValidationError -> 400
    - TransientStoreError (retries exhausted) -> 503
    - StoreError, ConstructionError -> 500

    Args:
        action: Human readable action for the error detail, e.g. "create comment"
    """
    try:
        yield
    except ValidationError as e:
        logfire.warn(f"Failed to {action} - validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except TransientStoreError as e:
        logfire.error(f"Failed to {action} - database unavailable", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database temporarily unavailable, try again later",
        )
    except (StoreError, ConstructionError) as e:
        logfire.error(f"Failed to {action}", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}",
        )
