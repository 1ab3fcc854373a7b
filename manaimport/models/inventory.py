from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ImageUris:
    """Scryfall image URLs for one card face at three sizes."""

    small: str
    normal: str
    large: str


@dataclass(frozen=True, slots=True)
class ImageSet:
    """
    Images for a card.

    Attributes:
        front: Unified image, or the first face of a multi-faced card
        back: Second face, only for multi-faced cards
    """

    front: ImageUris
    back: ImageUris | None = None


@dataclass
class InventoryRecord:
    """
    One copy-group of a card from a ManaBox export.

    The first five fields come from the CSV row. The rest stay None until
    Scryfall metadata is merged onto the record.

    Attributes:
        is_foil: False only for the "normal" finish
        quantity: Number of copies (>= 1)
        source_id: ManaBox's own identifier, carried through unchanged
        lookup_id: Scryfall card ID used for enrichment
        unit_price_cents: Purchase price per copy, in cents
    """

    is_foil: bool
    quantity: int
    source_id: str
    lookup_id: str
    unit_price_cents: int

    name: str | None = None
    set_code: str | None = None
    set_name: str | None = None
    rarity: str | None = None
    layout: str | None = None
    images: ImageSet | None = None

    @property
    def is_enriched(self) -> bool:
        """Whether every post-enrichment field has been set."""
        return all(
            value is not None
            for value in (
                self.name,
                self.set_code,
                self.set_name,
                self.rarity,
                self.layout,
                self.images,
            )
        )

    @property
    def line_value_cents(self) -> int:
        """Value of all copies in this record, in cents."""
        return self.unit_price_cents * self.quantity


@dataclass(frozen=True, slots=True)
class CollectionSummary:
    """Totals for one completed import run."""

    total_cards: int
    total_value_cents: int
    generated_at: datetime
