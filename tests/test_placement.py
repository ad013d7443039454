"""Tests for the placement strategies (first / best / worst / next fit)."""

import pytest

from engine import MemoryBlock
from errors import UnknownAlgorithmError
from placement import (
    PlacementAlgorithm,
    best_fit,
    find_block,
    first_fit,
    next_fit,
    worst_fit,
)


def make_blocks(pairs):
    """Build blocks from (size, allocated) pairs."""
    return [
        MemoryBlock(i + 1, size, allocated, f"P{i + 1}" if allocated else None)
        for i, (size, allocated) in enumerate(pairs)
    ]


@pytest.fixture
def blocks():
    # index:    0           1           2          3           4
    return make_blocks([(100, False), (50, True), (300, False), (100, False), (300, False)])


class TestFirstFit:

    def test_lowest_index_that_fits(self, blocks):
        assert first_fit(blocks, 80) == 0

    def test_skips_allocated_and_small_blocks(self, blocks):
        assert first_fit(blocks, 150) == 2

    def test_not_found(self, blocks):
        assert first_fit(blocks, 301) is None


class TestBestFit:

    def test_smallest_sufficient_block(self, blocks):
        assert best_fit(blocks, 150) == 2

    def test_tie_goes_to_lowest_index(self, blocks):
        assert best_fit(blocks, 90) == 0

    def test_ignores_allocated_block_that_would_fit_exactly(self, blocks):
        assert best_fit(blocks, 50) == 0

    def test_not_found(self):
        assert best_fit(make_blocks([(10, True)]), 5) is None


class TestWorstFit:

    def test_largest_block(self, blocks):
        assert worst_fit(blocks, 10) == 2

    def test_not_found(self, blocks):
        assert worst_fit(blocks, 1000) is None


class TestNextFit:

    def test_starts_at_cursor(self, blocks):
        assert next_fit(blocks, 10, cursor=3) == 3

    def test_wraps_around(self, blocks):
        assert next_fit(blocks, 200, cursor=3) == 4
        small = make_blocks([(100, False), (10, False), (10, False)])
        assert next_fit(small, 50, cursor=1) == 0

    def test_visits_blocks_in_circular_order(self):
        blocks = make_blocks([(10, False), (10, False), (10, False), (10, False)])
        found = [next_fit(blocks, 5, cursor=c) for c in range(4)]
        assert found == [0, 1, 2, 3]

    def test_not_found_after_full_wrap(self, blocks):
        assert next_fit(blocks, 500, cursor=2) is None

    def test_does_not_mutate_input(self, blocks):
        before = [(b.block_id, b.size, b.allocated, b.owner_id) for b in blocks]
        next_fit(blocks, 100, cursor=4)
        best_fit(blocks, 100)
        assert [(b.block_id, b.size, b.allocated, b.owner_id) for b in blocks] == before


class TestDispatch:

    def test_parse_accepts_tags_and_members(self):
        assert PlacementAlgorithm.parse("bestFit") is PlacementAlgorithm.BEST_FIT
        assert PlacementAlgorithm.parse(PlacementAlgorithm.NEXT_FIT) is PlacementAlgorithm.NEXT_FIT

    def test_parse_rejects_unknown_tag(self):
        with pytest.raises(UnknownAlgorithmError):
            PlacementAlgorithm.parse("buddy")

    def test_find_block_routes_by_algorithm(self, blocks):
        assert find_block("firstFit", blocks, 80) == 0
        assert find_block("worstFit", blocks, 80) == 2
        assert find_block("nextFit", blocks, 80, cursor=3) == 3
