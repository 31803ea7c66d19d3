"""Session handling and error translation shared by every repository."""

import logging
from typing import Any, Dict, NoReturn, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nicelist.exceptions import DatabaseError, ReferentialIntegrityError

logger = logging.getLogger(__name__)

# Failures raised while executing a statement. The SQLite driver raises a bare
# OverflowError when binding an integer outside the 64-bit INTEGER range.
STORAGE_ERRORS = (SQLAlchemyError, OverflowError)


class Repository:
    """
    Base class holding the injected session.

    Writes commit their own unit of work, so each repository call is
    self-contained: execute, commit, and leave the session clean for the next
    call. On failure the session is rolled back before the error propagates.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self) -> None:
        await self.session.commit()

    async def _fail(
        self,
        exc: Exception,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        integrity_message: Optional[str] = None,
    ) -> NoReturn:
        """
        Roll back and raise the application error for a storage failure.

        IntegrityError becomes ReferentialIntegrityError when the caller
        passes integrity_message (creates that declare foreign keys);
        everything else becomes DatabaseError.
        """
        ctx = dict(context or {})
        ctx["error_type"] = type(exc).__name__
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.error("Rollback failed after %s", ctx["error_type"], exc_info=True)

        if integrity_message is not None and isinstance(exc, IntegrityError):
            logger.warning("Referential integrity violation: %s | Context: %s", exc.orig, ctx)
            raise ReferentialIntegrityError(message=integrity_message, context=ctx) from exc

        logger.error("Database error: %s | Context: %s", str(exc), ctx)
        raise DatabaseError(message=message, context=ctx) from exc
