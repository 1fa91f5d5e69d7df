"""Translation of driver/ORM failures into the application error taxonomy."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from common.core.exceptions import PersistenceError
from common.core.telemetry import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def store_errors(operation: str) -> AsyncGenerator[None, None]:
    """Re-raise SQLAlchemy errors escaping the block as PersistenceError."""
    try:
        yield
    except IntegrityError as e:
        logger.error(f"{operation}: constraint violation: {e.orig}")
        raise PersistenceError(f"{operation} violated a store constraint") from e
    except SQLAlchemyError as e:
        logger.error(f"{operation}: store failure: {e!r}")
        raise PersistenceError(f"{operation} failed in the store") from e
