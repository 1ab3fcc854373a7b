from manaimport.models.inventory import (
    CollectionSummary,
    ImageSet,
    ImageUris,
    InventoryRecord,
)
from manaimport.models.scryfall import MultiFaceCard, SingleImageCard, parse_card

__all__ = [
    "CollectionSummary",
    "ImageSet",
    "ImageUris",
    "InventoryRecord",
    "MultiFaceCard",
    "SingleImageCard",
    "parse_card",
]
