"""
Persistence gateway for import runs.

The pipeline only talks to a `CardStore`. `SqlCardStore` implements it
on top of one SQLAlchemy session and commits after every call, so the
batches written before an abort stay stored until the next run's
delete-all.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from manaimport.db import operations
from manaimport.errors import PersistenceFailedError
from manaimport.models.inventory import CollectionSummary, InventoryRecord

T = TypeVar("T")


class CardStore(Protocol):
    """Where enriched cards and the run summary are written."""

    async def delete_all_cards(self) -> int: ...

    async def delete_all_summaries(self) -> int: ...

    async def insert_cards(self, cards: Sequence[InventoryRecord]) -> int: ...

    async def insert_summary(self, summary: CollectionSummary) -> None: ...


class SqlCardStore:
    """CardStore backed by a SQLAlchemy async session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _commit(self, action: str, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            result = await operation()
            await self._session.commit()
        except (SQLAlchemyError, ValueError) as e:
            await self._session.rollback()
            raise PersistenceFailedError(f"Failed to {action}: {e}") from e
        return result

    async def delete_all_cards(self) -> int:
        return await self._commit(
            "delete cards", lambda: operations.delete_all_cards(self._session)
        )

    async def delete_all_summaries(self) -> int:
        return await self._commit(
            "delete collection summaries",
            lambda: operations.delete_all_summaries(self._session),
        )

    async def insert_cards(self, cards: Sequence[InventoryRecord]) -> int:
        return await self._commit(
            "insert cards", lambda: operations.insert_cards(self._session, cards)
        )

    async def insert_summary(self, summary: CollectionSummary) -> None:
        await self._commit(
            "insert collection summary",
            lambda: operations.insert_summary(self._session, summary),
        )
