"""
Import pipeline driver.

Runs one import: batches the normalized records, enriches each batch
from Scryfall, stores it, and writes the collection summary once every
batch is stored. Batches run strictly one after another with a fixed
pause after each, which is what keeps us under Scryfall's rate limit.

Any failure aborts the run. Nothing is retried and no summary is
written for an aborted run.
"""

import asyncio
import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any, Protocol

from manaimport.db.gateway import CardStore
from manaimport.models.inventory import CollectionSummary, InventoryRecord
from manaimport.services.aggregator import RunTotals, format_usd
from manaimport.services.batching import DEFAULT_BATCH_SIZE, iter_batches
from manaimport.services.merger import merge_batch

logger = logging.getLogger(__name__)

DEFAULT_PACING_SECONDS = 0.1


class RunState(str, Enum):
    """Lifecycle of a single import run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class EnrichmentClient(Protocol):
    async def fetch_collection(self, identifiers: Sequence[str]) -> list[dict[str, Any]]: ...


class ImportPipeline:
    """
    Drives one import run from normalized records to a stored summary.

    A pipeline instance owns the run's totals and is used once:
    COMPLETED and ABORTED are terminal.
    """

    def __init__(
        self,
        client: EnrichmentClient,
        store: CardStore,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        pacing_seconds: float = DEFAULT_PACING_SECONDS,
    ) -> None:
        self.client = client
        self.store = store
        self.batch_size = batch_size
        self.pacing_seconds = pacing_seconds
        self.totals = RunTotals()
        self.state = RunState.IDLE

    async def process_batch(self, batch: Sequence[InventoryRecord]) -> list[InventoryRecord]:
        """Enrich and store one batch, returning the records that were stored."""
        logger.info("Processing batch of %d", len(batch))

        metadata = await self.client.fetch_collection([record.lookup_id for record in batch])
        cards = merge_batch(batch, metadata)

        logger.info("Saving batch of %d cards", len(cards))
        await self.store.insert_cards(cards)

        self.totals.add_batch(cards)
        return cards

    async def run(self, records: Sequence[InventoryRecord]) -> CollectionSummary:
        """
        Process every record and write the collection summary.

        Args:
            records: All normalized records, in file order

        Returns:
            The summary that was stored

        Raises:
            RuntimeError: If this pipeline has already run
            ImportRunError: On any enrichment, merge or persistence failure
        """
        if self.state is not RunState.IDLE:
            raise RuntimeError(f"Import pipeline already {self.state.value}")

        self.state = RunState.RUNNING

        try:
            for batch in iter_batches(records, self.batch_size):
                await self.process_batch(batch)
                await asyncio.sleep(self.pacing_seconds)

            logger.info(
                "Processed %d cards total value %s",
                self.totals.total_cards,
                format_usd(self.totals.total_value_cents),
            )

            logger.info("Saving collection")
            summary = self.totals.to_summary()
            await self.store.insert_summary(summary)
        except Exception:
            self.state = RunState.ABORTED
            raise

        self.state = RunState.COMPLETED
        return summary
