"""Translation of driver-level connection failures into domain errors."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import InterfaceError, OperationalError

from shared_store.domain.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_errors() -> AsyncIterator[None]:
    """Re-raise connection-level SQLAlchemy errors as StorageUnavailableError.

    Usage:
        async with storage_errors():
            result = await session.execute(stmt)
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("Database unavailable: %s", exc.orig or exc)
        raise StorageUnavailableError(f"Database unavailable: {exc.orig or exc}") from exc
