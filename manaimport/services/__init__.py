from manaimport.services.aggregator import RunTotals, format_usd
from manaimport.services.batching import iter_batches
from manaimport.services.merger import merge_batch
from manaimport.services.pipeline import ImportPipeline, RunState
from manaimport.services.scryfall_client import ScryfallClient

__all__ = [
    "ImportPipeline",
    "RunState",
    "RunTotals",
    "ScryfallClient",
    "format_usd",
    "iter_batches",
    "merge_batch",
]
