from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from manaimport.models.inventory import CollectionSummary, InventoryRecord


@dataclass
class RunTotals:
    """
    Running totals across the batches of one import run.

    total_cards counts enriched records, not copies. total_value_cents
    is weighted by quantity.
    """

    total_cards: int = 0
    total_value_cents: int = 0

    def add_batch(self, cards: Iterable[InventoryRecord]) -> None:
        """Add the enriched records of one batch."""
        for card in cards:
            self.total_cards += 1
            self.total_value_cents += card.line_value_cents

    def to_summary(self, generated_at: datetime | None = None) -> CollectionSummary:
        return CollectionSummary(
            total_cards=self.total_cards,
            total_value_cents=self.total_value_cents,
            generated_at=generated_at or datetime.now(UTC),
        )


def format_usd(cents: int) -> str:
    """Format cents as US dollars, e.g. 123456 -> "$1,234.56"."""
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(cents), 100)
    return f"{sign}${dollars:,}.{remainder:02d}"
