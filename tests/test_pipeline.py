"""Tests for the import pipeline driver."""

from collections.abc import Callable, Sequence
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from manaimport.errors import EnrichmentFailedError, PersistenceFailedError
from manaimport.models.inventory import CollectionSummary, InventoryRecord
from manaimport.services.pipeline import ImportPipeline, RunState

CardFactory = Callable[..., dict[str, Any]]
RecordFactory = Callable[..., InventoryRecord]


class FakeScryfall:
    """Answers lookups from a fixed set of known card payloads."""

    def __init__(self, cards: dict[str, dict[str, Any]], fail_on_call: int | None = None):
        self.cards = cards
        self.fail_on_call = fail_on_call
        self.requests: list[list[str]] = []

    async def fetch_collection(self, identifiers: Sequence[str]) -> list[dict[str, Any]]:
        self.requests.append(list(identifiers))
        if self.fail_on_call == len(self.requests):
            raise EnrichmentFailedError("Scryfall collection lookup failed: HTTP 503")
        # Reverse to prove order is not relied on
        return [self.cards[i] for i in reversed(identifiers) if i in self.cards]


class FakeStore:
    def __init__(self, fail_inserts: bool = False) -> None:
        self.fail_inserts = fail_inserts
        self.batches: list[list[InventoryRecord]] = []
        self.summaries: list[CollectionSummary] = []

    async def delete_all_cards(self) -> int:
        return 0

    async def delete_all_summaries(self) -> int:
        return 0

    async def insert_cards(self, cards: Sequence[InventoryRecord]) -> int:
        if self.fail_inserts:
            raise PersistenceFailedError("Failed to insert cards: disk full")
        self.batches.append(list(cards))
        return len(cards)

    async def insert_summary(self, summary: CollectionSummary) -> None:
        self.summaries.append(summary)


@pytest.fixture
def records(make_record: RecordFactory) -> list[InventoryRecord]:
    return [make_record(f"id-{i}", quantity=2, unit_price_cents=50) for i in range(5)]


@pytest.fixture
def scryfall(make_card: CardFactory) -> FakeScryfall:
    return FakeScryfall({f"id-{i}": make_card(f"id-{i}") for i in range(5)})


class TestImportPipeline:
    async def test_completes_and_writes_summary(
        self, records: list[InventoryRecord], scryfall: FakeScryfall
    ) -> None:
        store = FakeStore()
        pipeline = ImportPipeline(scryfall, store, batch_size=2, pacing_seconds=0)

        summary = await pipeline.run(records)

        assert pipeline.state is RunState.COMPLETED
        assert [len(batch) for batch in store.batches] == [2, 2, 1]
        assert store.summaries == [summary]
        assert summary.total_cards == 5
        assert summary.total_value_cents == 5 * 50 * 2

    async def test_requests_batches_in_file_order(
        self, records: list[InventoryRecord], scryfall: FakeScryfall
    ) -> None:
        pipeline = ImportPipeline(scryfall, FakeStore(), batch_size=2, pacing_seconds=0)

        await pipeline.run(records)

        assert scryfall.requests == [["id-0", "id-1"], ["id-2", "id-3"], ["id-4"]]

    async def test_stores_only_enriched_records(
        self, records: list[InventoryRecord], make_card: CardFactory
    ) -> None:
        scryfall = FakeScryfall({"id-0": make_card("id-0"), "id-2": make_card("id-2")})
        store = FakeStore()
        pipeline = ImportPipeline(scryfall, store, batch_size=75, pacing_seconds=0)

        summary = await pipeline.run(records)

        stored = [card for batch in store.batches for card in batch]
        assert [card.lookup_id for card in stored] == ["id-2", "id-0"]
        assert all(card.is_enriched for card in stored)
        assert summary.total_cards == 2
        assert summary.total_value_cents == 2 * 50 * 2

    async def test_pauses_after_every_batch(
        self, records: list[InventoryRecord], scryfall: FakeScryfall
    ) -> None:
        pipeline = ImportPipeline(scryfall, FakeStore(), batch_size=2, pacing_seconds=0.1)

        with patch("manaimport.services.pipeline.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await pipeline.run(records)

        assert sleep.await_count == 3
        sleep.assert_awaited_with(0.1)

    async def test_empty_input_writes_zero_summary(self, scryfall: FakeScryfall) -> None:
        store = FakeStore()
        pipeline = ImportPipeline(scryfall, store, pacing_seconds=0)

        summary = await pipeline.run([])

        assert pipeline.state is RunState.COMPLETED
        assert scryfall.requests == []
        assert (summary.total_cards, summary.total_value_cents) == (0, 0)
        assert store.summaries == [summary]

    async def test_enrichment_failure_aborts(
        self, records: list[InventoryRecord], make_card: CardFactory
    ) -> None:
        cards = {f"id-{i}": make_card(f"id-{i}") for i in range(5)}
        scryfall = FakeScryfall(cards, fail_on_call=2)
        store = FakeStore()
        pipeline = ImportPipeline(scryfall, store, batch_size=2, pacing_seconds=0)

        with pytest.raises(EnrichmentFailedError):
            await pipeline.run(records)

        assert pipeline.state is RunState.ABORTED
        assert len(store.batches) == 1
        assert store.summaries == []
        assert len(scryfall.requests) == 2

    async def test_persistence_failure_aborts(
        self, records: list[InventoryRecord], scryfall: FakeScryfall
    ) -> None:
        store = FakeStore(fail_inserts=True)
        pipeline = ImportPipeline(scryfall, store, batch_size=2, pacing_seconds=0)

        with pytest.raises(PersistenceFailedError):
            await pipeline.run(records)

        assert pipeline.state is RunState.ABORTED
        assert store.summaries == []
        assert pipeline.totals.total_cards == 0

    async def test_cannot_run_twice(
        self, records: list[InventoryRecord], scryfall: FakeScryfall
    ) -> None:
        pipeline = ImportPipeline(scryfall, FakeStore(), pacing_seconds=0)
        await pipeline.run(records)

        with pytest.raises(RuntimeError, match="already completed"):
            await pipeline.run(records)

    def test_starts_idle(self, scryfall: FakeScryfall) -> None:
        assert ImportPipeline(scryfall, FakeStore()).state is RunState.IDLE
