# placement.py

from enum import Enum
from typing import Optional, Sequence

from errors import UnknownAlgorithmError


class PlacementAlgorithm(Enum):
    """
    Placement policies for contiguous allocation.

    The values are the tags used by the controller and the UI radio buttons.
    """
    FIRST_FIT = "firstFit"
    BEST_FIT = "bestFit"
    WORST_FIT = "worstFit"
    NEXT_FIT = "nextFit"

    @property
    def label(self) -> str:
        return {
            "firstFit": "First-Fit",
            "bestFit": "Best-Fit",
            "worstFit": "Worst-Fit",
            "nextFit": "Next-Fit",
        }[self.value]

    @classmethod
    def parse(cls, tag) -> "PlacementAlgorithm":
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownAlgorithmError(tag, [a.value for a in cls]) from None


# -----------------------------
# Algorithms
# -----------------------------
# Each function returns the index of the chosen block or None.
# Only free blocks with size >= req are candidates; the input is never mutated.

def _fits(block, req) -> bool:
    return not block.allocated and block.size >= req


def first_fit(blocks: Sequence, req: int) -> Optional[int]:
    for i, block in enumerate(blocks):
        if _fits(block, req):
            return i
    return None


def best_fit(blocks: Sequence, req: int) -> Optional[int]:
    best_index = None
    best_size = float('inf')

    for i, block in enumerate(blocks):
        if _fits(block, req) and block.size < best_size:
            best_size = block.size
            best_index = i

    return best_index


def worst_fit(blocks: Sequence, req: int) -> Optional[int]:
    worst_index = None
    worst_size = -1

    for i, block in enumerate(blocks):
        if _fits(block, req) and block.size > worst_size:
            worst_size = block.size
            worst_index = i

    return worst_index


def next_fit(blocks: Sequence, req: int, cursor: int = 0) -> Optional[int]:
    """
    Scan from ``cursor`` and wrap around, visiting every index exactly once.
    """
    n = len(blocks)
    for offset in range(n):
        idx = (cursor + offset) % n
        if _fits(blocks[idx], req):
            return idx
    return None


def find_block(algorithm, blocks: Sequence, req: int, cursor: int = 0) -> Optional[int]:
    """Dispatch to the placement function selected by ``algorithm``."""
    algorithm = PlacementAlgorithm.parse(algorithm)
    if algorithm is PlacementAlgorithm.NEXT_FIT:
        return next_fit(blocks, req, cursor)
    return _STRATEGIES[algorithm](blocks, req)


_STRATEGIES = {
    PlacementAlgorithm.FIRST_FIT: first_fit,
    PlacementAlgorithm.BEST_FIT: best_fit,
    PlacementAlgorithm.WORST_FIT: worst_fit,
}
