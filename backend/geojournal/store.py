"""
GeoJournal Backend — Data Store Gateway
========================================

What:  The narrow persistence interface the handlers call: find by id, find
       many, find one, insert, save (update in place), remove.
Why:   Handlers only need these six operations. Keeping them behind one
       small class lets services be tested against SQLite or a mock session
       and keeps SQLAlchemy query building out of the handler code.
How:   Wraps a single request-scoped `AsyncSession`. Reads execute a SELECT;
       each write commits its own transaction, so every gateway write is
       atomic from the caller's point of view. A failed write is rolled back
       before the exception propagates.

Errors:
    The gateway does not classify failures. SQLAlchemy/driver exceptions
    propagate and the calling service turns them into StoreUnavailableError
    (or ConflictError for a unique-key race on signup).
"""

from typing import Any, List, Optional, Sequence, Type, TypeVar

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geojournal.database import Base, get_db_session

ModelT = TypeVar("ModelT", bound=Base)


class DataStore:
    """Single-record persistence operations over one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_id(self, model: Type[ModelT], record_id: Any) -> Optional[ModelT]:
        """Primary-key lookup. Returns None when no row has that id."""
        result = await self.session.execute(
            select(model).where(model.id == record_id)
        )
        return result.scalar_one_or_none()

    async def find_many(
        self,
        model: Type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] = (),
    ) -> List[ModelT]:
        """All rows matching every criterion, in `order_by` order."""
        query = select(model).where(*criteria).order_by(*order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_one(self, model: Type[ModelT], *criteria: Any) -> Optional[ModelT]:
        """First row matching every criterion, or None."""
        result = await self.session.execute(
            select(model).where(*criteria).limit(1)
        )
        return result.scalars().first()

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, record: ModelT) -> ModelT:
        """Persist a new record and commit. Python-side defaults (id, created_at) are filled in."""
        self.session.add(record)
        await self._commit()
        return record

    async def save(self, record: ModelT) -> ModelT:
        """Commit in-place changes to an already loaded record."""
        self.session.add(record)
        await self._commit()
        return record

    async def remove(self, record: ModelT) -> None:
        """Delete a loaded record and commit."""
        await self.session.delete(record)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise


# ── FastAPI Dependency ────────────────────────────────────────────────────
async def get_store(session: AsyncSession = Depends(get_db_session)) -> DataStore:
    """Wrap the request's session in a DataStore."""
    return DataStore(session)
