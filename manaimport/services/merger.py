"""
Merge Scryfall metadata onto inventory records.

Records are matched by Scryfall ID. A record whose ID is missing from
the response stays un-enriched and is left out of the result, so it is
neither stored nor counted in the collection totals.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from manaimport.errors import MergeError
from manaimport.models.inventory import InventoryRecord
from manaimport.models.scryfall import MultiFaceCard, SingleImageCard, parse_card


def _find_record(batch: Sequence[InventoryRecord], lookup_id: str) -> InventoryRecord | None:
    """Return the first record in the batch with this Scryfall ID."""
    return next((record for record in batch if record.lookup_id == lookup_id), None)


def apply_card(record: InventoryRecord, card: SingleImageCard | MultiFaceCard) -> None:
    """Copy card metadata and images onto a record in place."""
    record.name = card.name
    record.set_code = card.set
    record.set_name = card.set_name
    record.rarity = card.rarity
    record.layout = card.layout
    record.images = card.image_set()


def merge_batch(
    batch: Sequence[InventoryRecord],
    metadata: Sequence[dict[str, Any]],
) -> list[InventoryRecord]:
    """
    Enrich the records of one batch from a collection response.

    Args:
        batch: Records sent in the lookup request
        metadata: Card objects returned by Scryfall, in any order

    Returns:
        Enriched records in response order. Each record appears at most
        once, even when Scryfall repeats an ID.

    Raises:
        MergeError: If a card object has an unknown image shape, lacks a
            merged field, or matches no record in the batch
    """
    enriched: list[InventoryRecord] = []
    seen: set[int] = set()

    for payload in metadata:
        try:
            card = parse_card(payload)
        except ValidationError as e:
            card_id = payload.get("id") if isinstance(payload, dict) else None
            raise MergeError(f"Unusable Scryfall card {card_id!r}: {e}") from e

        record = _find_record(batch, card.id)
        if record is None:
            raise MergeError(f"Scryfall returned card {card.id!r} that was not requested")

        apply_card(record, card)

        if id(record) not in seen:
            seen.add(id(record))
            enriched.append(record)

    return enriched
