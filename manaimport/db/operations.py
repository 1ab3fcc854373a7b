"""
Database CRUD operations.

Provides async functions for replacing the stored cards and writing
collection summaries. Callers own the transaction.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from manaimport.models.db import MagicCardDB, MagicCollectionDB
from manaimport.models.inventory import (
    CollectionSummary,
    ImageSet,
    ImageUris,
    InventoryRecord,
)

# --- Card Operations ---


def _image_uris_to_dict(uris: ImageUris) -> dict[str, str]:
    return {"small": uris.small, "normal": uris.normal, "large": uris.large}


def images_to_document(images: ImageSet) -> dict[str, Any]:
    """Convert an ImageSet into the JSON document stored on a card row."""
    document: dict[str, Any] = {"front": _image_uris_to_dict(images.front)}
    if images.back is not None:
        document["back"] = _image_uris_to_dict(images.back)
    return document


def record_to_model(record: InventoryRecord) -> MagicCardDB:
    """
    Convert an enriched record to a database row.

    Raises:
        ValueError: If the record has not been enriched
    """
    if not record.is_enriched or record.images is None:
        raise ValueError(f"Record {record.lookup_id!r} has not been enriched")

    return MagicCardDB(
        name=record.name,
        set_code=record.set_code,
        set_name=record.set_name,
        rarity=record.rarity,
        layout=record.layout,
        quantity=record.quantity,
        price=record.unit_price_cents,
        foil=record.is_foil,
        manabox_id=record.source_id,
        scryfall_id=record.lookup_id,
        images=images_to_document(record.images),
    )


async def insert_cards(session: AsyncSession, records: Sequence[InventoryRecord]) -> int:
    """
    Insert enriched records as card rows.

    Returns the number of rows added.
    """
    rows = [record_to_model(record) for record in records]
    session.add_all(rows)
    await session.flush()
    return len(rows)


async def delete_all_cards(session: AsyncSession) -> int:
    """
    Delete every stored card.

    Returns the number of deleted records.
    """
    result = await session.execute(delete(MagicCardDB))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]


async def count_cards(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(MagicCardDB))
    return int(result.scalar_one())


async def get_cards(session: AsyncSession) -> list[MagicCardDB]:
    """Get all stored cards in insertion order."""
    result = await session.execute(select(MagicCardDB).order_by(MagicCardDB.id))
    return list(result.scalars().all())


# --- Summary Operations ---


async def insert_summary(session: AsyncSession, summary: CollectionSummary) -> MagicCollectionDB:
    """Write a collection summary row."""
    row = MagicCollectionDB(
        total=summary.total_cards,
        value=summary.total_value_cents,
        updated=summary.generated_at,
    )
    session.add(row)
    await session.flush()
    return row


async def delete_all_summaries(session: AsyncSession) -> int:
    """
    Delete every stored collection summary.

    Returns the number of deleted records.
    """
    result = await session.execute(delete(MagicCollectionDB))
    return int(result.rowcount)  # type: ignore[attr-defined]


async def get_summaries(session: AsyncSession) -> list[MagicCollectionDB]:
    result = await session.execute(select(MagicCollectionDB).order_by(MagicCollectionDB.id))
    return list(result.scalars().all())


def summary_to_model(row: MagicCollectionDB) -> CollectionSummary:
    """Convert a database summary to a domain model."""
    return CollectionSummary(
        total_cards=row.total,
        total_value_cents=row.value,
        generated_at=row.updated,
    )
