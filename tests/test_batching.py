import math

import pytest

from manaimport.services.batching import DEFAULT_BATCH_SIZE, iter_batches


class TestIterBatches:
    @pytest.mark.parametrize(
        ("count", "size"),
        [(0, 75), (1, 75), (75, 75), (76, 75), (150, 75), (151, 75), (10, 3), (7, 1)],
    )
    def test_batch_count_and_sizes(self, count: int, size: int) -> None:
        items = list(range(count))

        batches = list(iter_batches(items, size))

        assert len(batches) == math.ceil(count / size)
        assert all(len(batch) == size for batch in batches[:-1])
        if batches:
            assert 1 <= len(batches[-1]) <= size

    def test_concatenation_preserves_order(self) -> None:
        items = [f"card-{i}" for i in range(200)]

        batches = list(iter_batches(items, 75))

        assert [item for batch in batches for item in batch] == items

    def test_default_size_is_scryfall_limit(self) -> None:
        batches = list(iter_batches(list(range(160))))

        assert DEFAULT_BATCH_SIZE == 75
        assert [len(b) for b in batches] == [75, 75, 10]

    def test_restartable(self) -> None:
        items = list(range(10))

        assert list(iter_batches(items, 4)) == list(iter_batches(items, 4))

    def test_is_lazy(self) -> None:
        batches = iter_batches(list(range(10)), 4)

        assert next(batches) == [0, 1, 2, 3]

    def test_invalid_size_raises(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            list(iter_batches([1, 2], 0))
